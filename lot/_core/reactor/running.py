"""
The seam to the external watch runtime, and the orchestration of the operators.

The watching, the queueing, the retrying with backoff, and the leader election
are not done here: it is the job of a runtime, which receives the controllers
(the admission predicate and the reconciler of each operator) and runs them.
"""
import asyncio
import dataclasses
import logging
from typing import Collection, List, Optional, Sequence

from typing_extensions import Protocol, runtime_checkable

from lot._core.intents import predicates
from lot._core.reactor import dispatching, registries

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class OwnedResource:
    """
    A secondary kind owned by the primary one, with its own admission predicate.

    The changes of the owned objects trigger the reconciliation of their owners.
    """
    kind: dispatching.ObjectKind
    predicate: predicates.Predicate


@dataclasses.dataclass(frozen=True)
class Controller:
    """
    Everything the runtime needs to watch and reconcile one kind.
    """
    name: str
    kind: dispatching.ObjectKind
    predicate: predicates.Predicate
    owns: Sequence[OwnedResource]
    reconciler: dispatching.Reconciler


@runtime_checkable
class Runtime(Protocol):
    """
    The external watch/queue/retry machinery.

    It calls the controller's predicate for every event of the watched kind
    (and the owned kinds), and the reconciler for the admitted objects' keys.
    """

    def register(self, controller: Controller) -> None:
        ...

    async def run(self) -> None:
        ...


def run(
        *,
        registry: Optional[registries.OperatorRegistry] = None,
) -> None:
    """
    Run all the operators synchronously.

    This function should be used to run the operators in normal sync mode.
    """
    try:
        asyncio.run(operate(registry=registry))
    except asyncio.CancelledError:
        pass


async def operate(
        *,
        registry: Optional[registries.OperatorRegistry] = None,
) -> None:
    """
    Run all the operators asynchronously.

    All operators are built before anything runs, so that a misconfiguration
    of any of them fails the startup. Then, every distinct runtime is run
    until all of them exit. If any of them fails, the others are cancelled,
    and the error is re-raised.
    """
    registry = registry if registry is not None else registries.get_default_registry()

    runtimes: List[Runtime] = []
    for operator in registry:
        operator.build()
        if not any(runtime is operator.runtime for runtime in runtimes):
            runtimes.append(operator.runtime)

    if not runtimes:
        logger.warning("No operators are registered, nothing to run.")
        return

    tasks = [asyncio.create_task(runtime.run()) for runtime in runtimes]
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        await _stop(tasks)
        raise

    await _stop(pending)
    for task in done:
        if not task.cancelled() and task.exception() is not None:
            raise task.exception()  # type: ignore


async def _stop(tasks: Collection["asyncio.Task[None]"]) -> None:
    for task in tasks:
        task.cancel()
    if tasks:
        await asyncio.wait(tasks)
