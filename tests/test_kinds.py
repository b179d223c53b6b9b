"""Tests for the ErrorKind taxonomy and status mapping."""

import pytest

from result_envelope import STATUS_FROM_ERROR_KIND, ErrorKind, error, status_code


class TestErrorKind:
    """Tests for the ErrorKind enumeration."""

    def test_wire_values(self):
        """Each kind has its exact wire string."""
        assert [kind.value for kind in ErrorKind] == [
            'unexpected',
            'user-validation',
            'unauthorized',
            'not-found',
        ]

    def test_lookup_by_wire_string(self):
        """Kinds can be looked up from their wire string."""
        assert ErrorKind('not-found') is ErrorKind.NOT_FOUND

    def test_is_str(self):
        """Kinds compare equal to their wire strings."""
        assert ErrorKind.USER_VALIDATION == 'user-validation'


class TestStatusMapping:
    """Tests for the fixed kind → status code table."""

    @pytest.mark.parametrize(
        ('kind', 'code'),
        [
            (ErrorKind.UNEXPECTED, 503),
            (ErrorKind.USER_VALIDATION, 400),
            (ErrorKind.UNAUTHORIZED, 401),
            (ErrorKind.NOT_FOUND, 404),
        ],
    )
    def test_documented_codes(self, kind, code):
        """Every kind maps to its documented code."""
        assert status_code(kind) == code
        assert STATUS_FROM_ERROR_KIND[kind] == code

    def test_table_is_exhaustive(self):
        """The table covers exactly the ErrorKind members."""
        assert set(STATUS_FROM_ERROR_KIND) == set(ErrorKind)

    def test_no_other_codes(self):
        """Only the four documented codes are ever produced."""
        assert {status_code(kind) for kind in ErrorKind} == {400, 401, 404, 503}

    def test_accepts_wire_string(self):
        """status_code accepts the wire string of a kind."""
        assert status_code('user-validation') == 400

    def test_unknown_string_raises(self):
        """An unknown kind string is rejected."""
        with pytest.raises(ValueError):
            status_code('teapot')

    def test_table_is_read_only(self):
        """The table cannot be mutated at runtime."""
        with pytest.raises(TypeError):
            STATUS_FROM_ERROR_KIND[ErrorKind.UNEXPECTED] = 500  # type: ignore[index]

    def test_error_result_status_code(self):
        """Error results expose the code of their kind."""
        assert error('gone', 'trace', ErrorKind.NOT_FOUND).status_code == 404
        assert error('boom', 'trace').status_code == 503
