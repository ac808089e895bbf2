"""
Change notifications as delivered by the watch runtime.

Every event carries the object snapshot(s) as seen by the runtime's cache,
not necessarily the live state: the reconciler fetches the live state anyway.
"""
import dataclasses
import enum
from typing import Any, ClassVar, Mapping, Union


class EventKind(str, enum.Enum):
    """ The reason a change notification was emitted. """
    CREATE = 'CREATE'
    UPDATE = 'UPDATE'
    DELETE = 'DELETE'
    GENERIC = 'GENERIC'

    def __str__(self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class CreateEvent:
    kind: ClassVar[EventKind] = EventKind.CREATE
    object: Mapping[str, Any]

    @property
    def body(self) -> Mapping[str, Any]:
        return self.object


@dataclasses.dataclass(frozen=True)
class UpdateEvent:
    kind: ClassVar[EventKind] = EventKind.UPDATE
    old: Mapping[str, Any]
    new: Mapping[str, Any]

    @property
    def body(self) -> Mapping[str, Any]:
        return self.new


@dataclasses.dataclass(frozen=True)
class DeleteEvent:
    kind: ClassVar[EventKind] = EventKind.DELETE
    object: Mapping[str, Any]
    delete_state_unknown: bool = False  # the final state was missed, the object is the last seen.

    @property
    def body(self) -> Mapping[str, Any]:
        return self.object


@dataclasses.dataclass(frozen=True)
class GenericEvent:
    kind: ClassVar[EventKind] = EventKind.GENERIC
    object: Mapping[str, Any]

    @property
    def body(self) -> Mapping[str, Any]:
        return self.object


Event = Union[CreateEvent, UpdateEvent, DeleteEvent, GenericEvent]
