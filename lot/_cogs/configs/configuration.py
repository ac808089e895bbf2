"""
All configuration flags, options, settings to fine-tune an operator.

All settings are grouped semantically just for convenience
(instead of a flat mega-object with all the values in it).

Some of the settings are flags, some are scalars, some are optional,
some are not (but all of them have reasonable defaults).
"""
import concurrent.futures
import dataclasses
from typing import Optional


@dataclasses.dataclass
class NetworkingSettings:

    request_timeout: Optional[float] = 5 * 60  # == aiohttp.client.DEFAULT_TIMEOUT
    """
    A timeout for the whole API request (in seconds), including the response.
    A stuck request fails with a timeout error, which the runtime can retry.
    """

    connect_timeout: Optional[float] = None
    """
    A timeout (in seconds) for establishing the connection to the API server.
    If not set, only the whole-request timeout applies.
    """


@dataclasses.dataclass
class ExecutionSettings:
    """
    Settings for synchronous handlers execution (e.g. thread-/process-pools).
    """

    executor: concurrent.futures.Executor = dataclasses.field(
        default_factory=concurrent.futures.ThreadPoolExecutor)
    """
    The executor to be used for synchronous handler invocation.

    It can be changed at runtime (e.g. to reset the pool size). Already running
    handlers (specific invocations) will continue with their original executors.
    """

    _max_workers: Optional[int] = None

    @property
    def max_workers(self) -> Optional[int]:
        """
        How many threads/processes is dedicated to handler execution.

        It can be changed at runtime (the threads/processes are not terminated).
        """
        return self._max_workers

    @max_workers.setter
    def max_workers(self, value: int) -> None:
        if value < 1:
            raise ValueError("Can't set thread pool limit lower than 1.")
        self._max_workers = value

        if hasattr(self.executor, '_max_workers'):
            self.executor._max_workers = value  # type: ignore
        else:
            raise TypeError("Current executor does not support `max_workers`.")


@dataclasses.dataclass
class FilteringSettings:

    log_ignored: bool = False
    """
    Should the events rejected by the event filter be logged too?
    By default, only the accepted events are logged (at the debug level).
    """


@dataclasses.dataclass
class ApplyingSettings:

    field_manager: str = 'lot'
    """
    The field manager (the owner of the fields) used in server-side applies.
    """

    force: bool = True
    """
    Whether to force the ownership of the conflicting fields on server-side applies.
    """


@dataclasses.dataclass
class OperatorSettings:
    networking: NetworkingSettings = dataclasses.field(default_factory=NetworkingSettings)
    execution: ExecutionSettings = dataclasses.field(default_factory=ExecutionSettings)
    filtering: FilteringSettings = dataclasses.field(default_factory=FilteringSettings)
    applying: ApplyingSettings = dataclasses.field(default_factory=ApplyingSettings)
