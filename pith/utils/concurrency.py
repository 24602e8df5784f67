"""
Bounded admission for asynchronous work.

    limit = create_limiter(5)
    futures = [limit(lambda p=p: parse(p)) for p in paths]
    results = await asyncio.gather(*futures)
"""
import asyncio
from typing import Any, Awaitable, Callable, List, Sequence, TypeVar

T = TypeVar("T")

Task = Callable[[], Awaitable[T]]
Limiter = Callable[[Task], "asyncio.Future[T]"]


def create_limiter(max_concurrent: int) -> Limiter:
    """
    Create a limiter allowing at most max_concurrent tasks to run at once.

    Calling the limiter schedules the task immediately and returns its own
    future; awaiting the future is optional and its order does not matter.
    Tasks beyond the limit are admitted in submission order. Each future
    carries the task's own result or exception; a failing task, including
    one that raises before returning an awaitable, releases its slot and
    never affects other tasks. There is no cancellation or timeout.

    Must be called while an event loop is running.
    """
    semaphore = asyncio.Semaphore(max(1, max_concurrent))

    async def _run(task: Task) -> T:
        async with semaphore:
            return await task()

    def limit(task: Task) -> "asyncio.Future[T]":
        return asyncio.ensure_future(_run(task))

    return limit


async def run_limited(
    tasks: Sequence[Task],
    max_concurrent: int,
    return_exceptions: bool = False,
) -> List[Any]:
    """Run tasks through one limiter; results keep submission order."""
    limit = create_limiter(max_concurrent)
    return await asyncio.gather(
        *[limit(task) for task in tasks],
        return_exceptions=return_exceptions,
    )
