"""
Invoking the handlers, both sync & async, with the kwargs only.

Both sync & async functions are supported, so as their partials.
Also, decorated wrappers and lambdas are recognized.
All of this goes via the same invocation logic and protocol.
"""
import asyncio
import contextvars
import functools
import inspect
from typing import Any, Mapping, Optional

from lot._cogs.configs import configuration
from lot._core.intents import handlers


async def invoke(
        fn: handlers.HandlerFn,
        *,
        settings: Optional[configuration.OperatorSettings] = None,
        kwargs: Optional[Mapping[str, Any]] = None,
) -> Any:
    """
    Invoke a single function, but safely for the main asyncio process.

    The synchronous functions are executed in the executor (threads or processes),
    thus making it non-blocking for the main event loop of the operator.
    See: https://pymotw.com/3/asyncio/executors.html
    """
    kwargs = {} if kwargs is None else kwargs
    if is_async_fn(fn):
        result = await fn(**kwargs)  # type: ignore
    else:
        real_fn = functools.partial(fn, **kwargs)

        # Copy the asyncio context from current thread to the handler's thread.
        context = contextvars.copy_context()
        real_fn = functools.partial(context.run, real_fn)

        # Prevent orphaned threads during the reconciliation cancellation. It is better to be stuck
        # in the task than to have orphan threads which deplete the executor's pool capacity.
        # Cancellation is postponed until the thread exits, but it happens anyway (for consistency).
        loop = asyncio.get_running_loop()
        executor = settings.execution.executor if settings is not None else None
        future = loop.run_in_executor(executor, real_fn)
        cancellation: Optional[asyncio.CancelledError] = None
        while not future.done():
            try:
                await asyncio.shield(future)  # slightly expensive: creates tasks
            except asyncio.CancelledError as e:
                cancellation = e
        if cancellation is not None:
            raise cancellation
        result = future.result()

    return result


def is_async_fn(
        fn: Optional[handlers.HandlerFn],
) -> bool:
    if fn is None:
        return False
    elif isinstance(fn, functools.partial):
        return is_async_fn(fn.func)
    elif hasattr(fn, '__wrapped__'):  # @functools.wraps()
        return is_async_fn(fn.__wrapped__)
    else:
        return inspect.iscoroutinefunction(fn)
