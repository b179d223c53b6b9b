"""Tests for async combinators, AsyncResult and gather_results."""

import anyio
import pytest

from result_envelope import (
    AsyncResult,
    ErrorKind,
    ErrorResult,
    Failure,
    Success,
    SuccessResult,
    error,
    gather_results,
    success,
    try_catch_async,
)


async def double(x):
    return x * 2


async def positive(x):
    if x <= 0:
        return error('not positive', 'trace', ErrorKind.USER_VALIDATION)
    return success(x)


class TestResultAsyncCombinators:
    """Tests for map_async and flat_map_async on Result."""

    @pytest.mark.asyncio
    async def test_map_async_success(self):
        """map_async awaits the function on a success."""
        assert await success(4).map_async(double) == success(8)

    @pytest.mark.asyncio
    async def test_map_async_error(self, sample_error):
        """map_async forwards an error without calling the function."""
        calls = []

        async def record(x):
            calls.append(x)
            return x

        assert await sample_error.map_async(record) == sample_error
        assert calls == []

    def test_map_async_error_does_not_suspend(self, sample_error):
        """The error branch completes on its first step."""
        coro = sample_error.map_async(double)
        with pytest.raises(StopIteration) as info:
            coro.send(None)
        assert info.value.value == sample_error

    def test_flat_map_async_error_does_not_suspend(self, sample_error):
        """flat_map_async on an error completes on its first step."""
        coro = sample_error.flat_map_async(positive)
        with pytest.raises(StopIteration) as info:
            coro.send(None)
        assert info.value.value.error_type is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_flat_map_async(self):
        """flat_map_async returns the awaited Result."""
        assert await success(3).flat_map_async(positive) == success(3)
        result = await success(-3).flat_map_async(positive)
        assert result.error_type is ErrorKind.USER_VALIDATION


class TestAsyncResult:
    """Tests for AsyncResult."""

    @pytest.mark.asyncio
    async def test_await_result(self):
        """Awaiting yields the wrapped Result."""
        assert await AsyncResult(positive(2)) == success(2)

    @pytest.mark.asyncio
    async def test_await_transport_form(self):
        """Transport forms are rehydrated into Results."""

        async def fetch():
            return 5

        result = await AsyncResult(try_catch_async(fetch))
        assert isinstance(result, SuccessResult)
        assert result.data == 5

    @pytest.mark.asyncio
    async def test_chain(self):
        """Steps run in order once awaited."""
        result = await (
            AsyncResult.from_result(success(2)).map(lambda x: x + 1).map_async(double).flat_map_async(positive)
        )
        assert result == success(6)

    @pytest.mark.asyncio
    async def test_chain_short_circuits(self):
        """An error skips every later step."""
        calls = []

        def record(x):
            calls.append(x)
            return x

        result = await AsyncResult(positive(-1)).map(record).flat_map(lambda x: success(record(x)))
        assert isinstance(result, ErrorResult)
        assert result.message == 'not positive'
        assert result.error_type is ErrorKind.USER_VALIDATION
        assert calls == []

    @pytest.mark.asyncio
    async def test_catch(self):
        """catch recovers from an error."""
        result = await AsyncResult(positive(0)).catch(lambda e: success(f'recovered: {e.message}'))
        assert result == success('recovered: not positive')

    @pytest.mark.asyncio
    async def test_from_transport_form(self):
        """from_result accepts a transport struct."""
        result = await AsyncResult.from_result(Failure('gone', ErrorKind.NOT_FOUND)).map(str)
        assert result.error_type is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_fold(self):
        """fold awaits and picks one branch."""
        assert await AsyncResult(positive(1)).fold(lambda x: 'ok', lambda f: f.message) == 'ok'
        assert await AsyncResult(positive(-1)).fold(lambda x: 'ok', lambda f: f.message) == 'not positive'

    @pytest.mark.asyncio
    async def test_serialize(self):
        """serialize awaits and returns the transport form."""
        assert await AsyncResult(positive(7)).serialize() == Success(7)

    @pytest.mark.asyncio
    async def test_lazy(self):
        """Nothing runs until awaited."""
        calls = []

        async def fetch():
            calls.append('fetch')
            return success(1)

        pending = AsyncResult(fetch()).map(lambda x: x)
        assert calls == []
        await pending
        assert calls == ['fetch']


class TestGatherResults:
    """Tests for gather_results."""

    @pytest.mark.asyncio
    async def test_all_success_in_input_order(self):
        """Data keeps input order regardless of completion order."""

        async def delayed(value, delay):
            await anyio.sleep(delay)
            return success(value)

        outcome = await gather_results([delayed(1, 0.03), delayed(2, 0.0), delayed(3, 0.01)])
        assert outcome == Success([1, 2, 3])

    @pytest.mark.asyncio
    async def test_errors_aggregated_in_input_order(self):
        """Error messages are joined in input order and nothing is cancelled."""
        finished = []

        async def step(value, delay):
            await anyio.sleep(delay)
            finished.append(value)
            if value % 2 == 0:
                return error(f'step {value} failed', f'trace {value}')
            return success(value)

        outcome = await gather_results([step(1, 0.0), step(2, 0.02), step(3, 0.0), step(4, 0.01)])
        assert outcome.status == 'error'
        assert outcome.message == 'step 2 failed; step 4 failed'
        assert outcome.diagnostic == 'trace 2;\ntrace 4'
        assert sorted(finished) == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_accepts_transport_forms(self):
        """Awaitables may produce transport forms."""

        async def fetch():
            return 'x'

        outcome = await gather_results([try_catch_async(fetch), positive(2)])
        assert outcome == Success(['x', 2])

    @pytest.mark.asyncio
    async def test_empty(self):
        """No awaitables give an empty success."""
        assert await gather_results([]) == Success([])

    @pytest.mark.asyncio
    async def test_raising_awaitable_raises_exception_group(self):
        """An awaitable that raises surfaces as an ExceptionGroup from the task group."""

        async def broken():
            raise LookupError('no such shard')

        with pytest.raises(ExceptionGroup) as info:
            await gather_results([positive(1), broken()])
        [inner] = info.value.exceptions
        assert isinstance(inner, LookupError)
        assert str(inner) == 'no such shard'
