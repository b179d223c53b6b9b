"""Async utilities: AsyncResult and gather_results.

Examples:
    >>> from result_envelope.async_ import AsyncResult, gather_results
    >>>
    >>> async def main():
    ...     # Chain without awaiting each step
    ...     name = await AsyncResult(fetch_user(1)).map(lambda u: u.name)
    ...
    ...     # Await several results and aggregate them
    ...     users = await gather_results([fetch_user(1), fetch_user(2)])
"""

from result_envelope.async_.itertools import gather_results
from result_envelope.async_.result import AsyncResult

__all__ = [
    'AsyncResult',
    'gather_results',
]
