"""
Admission predicates: whether an event is relevant to any handler at all.

A predicate is a pure yes/no function of an event. The predicates form
a small closed set of variants, which are combined into an immutable tree
once at configuration time, and then evaluated for every event:

* `EventKindGate` -- a fixed yes/no table per event kind.
* `MetadataMatch` -- labels/annotations of the object(s) against a `Selector`.
* `AllOf` & `AnyOf` -- the logical AND & OR of other predicates.
* `LoggingWrap` -- logs the decision of another predicate, never changes it.
* `Funcs` -- the operator developers' own callables, per event kind.

The watch runtime consumes the predicates either via the per-kind methods
(`create`, `update`, `delete`, `generic`), or via a call with any event.
"""
import abc
import dataclasses
import logging
from typing import Any, Callable, FrozenSet, Iterable, Mapping, Optional, Tuple

from lot._cogs.helpers import typedefs
from lot._cogs.structs import bodies, events
from lot._core.intents import filters, selectors

logger = logging.getLogger('lot.predicates')

EventFn = Callable[[Any], bool]  # strictly sync, no async!
ObjectFn = Callable[[Mapping[str, Any]], bool]  # strictly sync, no async!


class Predicate(metaclass=abc.ABCMeta):

    @abc.abstractmethod
    def check(self, event: events.Event) -> bool:
        raise NotImplementedError

    def __call__(self, event: events.Event) -> bool:
        return self.check(event)

    def create(self, event: events.CreateEvent) -> bool:
        return self.check(event)

    def update(self, event: events.UpdateEvent) -> bool:
        return self.check(event)

    def delete(self, event: events.DeleteEvent) -> bool:
        return self.check(event)

    def generic(self, event: events.GenericEvent) -> bool:
        return self.check(event)

    def __and__(self, other: object) -> "AllOf":
        if not isinstance(other, Predicate):
            return NotImplemented
        return AllOf([self, other])

    def __or__(self, other: object) -> "AnyOf":
        if not isinstance(other, Predicate):
            return NotImplemented
        return AnyOf([self, other])


@dataclasses.dataclass(frozen=True)
class EventKindGate(Predicate):
    create_: bool = False
    update_: bool = False
    delete_: bool = False
    generic_: bool = False

    @classmethod
    def only(cls, *kinds: events.EventKind) -> "EventKindGate":
        return cls(
            create_=events.EventKind.CREATE in kinds,
            update_=events.EventKind.UPDATE in kinds,
            delete_=events.EventKind.DELETE in kinds,
            generic_=events.EventKind.GENERIC in kinds,
        )

    def check(self, event: events.Event) -> bool:
        return (
            self.create_ if event.kind is events.EventKind.CREATE else
            self.update_ if event.kind is events.EventKind.UPDATE else
            self.delete_ if event.kind is events.EventKind.DELETE else
            self.generic_ if event.kind is events.EventKind.GENERIC else
            False
        )


@dataclasses.dataclass(frozen=True)
class MetadataMatch(Predicate):
    """
    Match the object's labels & annotations against a selector.

    Only the event kinds listed in ``kinds`` are decided; all others pass
    (the kind-specific gating is done by `EventKindGate` in the composition).
    Absent labels/annotations are treated as empty, not as absent.
    An update passes if either the old or the new object passes: this lets
    the "was labelled, now unlabelled" transitions to be seen by the handlers.
    """
    selector: selectors.Selector
    kinds: FrozenSet[events.EventKind]

    def check(self, event: events.Event) -> bool:
        if event.kind not in self.kinds:
            return True
        elif isinstance(event, events.UpdateEvent):
            return self._matches(event.old) or self._matches(event.new)
        else:
            return self._matches(event.body)

    def _matches(self, body: Mapping[str, Any]) -> bool:
        labels = bodies.get_labels(body) or {}
        annotations = bodies.get_annotations(body) or {}
        return self.selector.matches(labels, annotations)


@dataclasses.dataclass(frozen=True)
class AllOf(Predicate):
    """ All predicates must pass. With no predicates, everything passes. """
    predicates: Tuple[Predicate, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, 'predicates', tuple(self.predicates))

    def check(self, event: events.Event) -> bool:
        return all(predicate.check(event) for predicate in self.predicates)


@dataclasses.dataclass(frozen=True)
class AnyOf(Predicate):
    """ Any predicate must pass. With no predicates, nothing passes. """
    predicates: Tuple[Predicate, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, 'predicates', tuple(self.predicates))

    def check(self, event: events.Event) -> bool:
        return any(predicate.check(event) for predicate in self.predicates)


@dataclasses.dataclass(frozen=True)
class LoggingWrap(Predicate):
    """
    Log the decision of the wrapped predicate, and return it unchanged.

    The accepted events are logged at the debug level; the ignored ones only
    if explicitly requested, as there are usually too many of them.
    """
    predicate: Predicate
    log_ignored: bool = False
    logger: Optional[typedefs.Logger] = None

    def check(self, event: events.Event) -> bool:
        decision = self.predicate.check(event)
        if decision or self.log_ignored:
            ref = bodies.build_object_reference(event.body)
            (self.logger or logger).debug(
                f"Event {'accepted' if decision else 'ignored'}: {event.kind.value}",
                extra=dict(
                    k8s_ref=ref,
                    event=event.kind.value,
                    decision=decision,
                    object_name=ref.get('name'),
                    object_namespace=ref.get('namespace'),
                ),
            )
        return decision


@dataclasses.dataclass(frozen=True)
class Funcs(Predicate):
    """
    The operator developers' own filtering functions, per event kind.

    Every function gets the event and returns a boolean.
    The event kinds with no function are always accepted.
    """
    create_: Optional[EventFn] = None
    update_: Optional[EventFn] = None
    delete_: Optional[EventFn] = None
    generic_: Optional[EventFn] = None

    @classmethod
    def from_object_fn(cls, fn: ObjectFn) -> "Funcs":
        """ Apply the same function to the object of any event (the new one for updates). """
        return cls(
            create_=lambda event: fn(event.object),
            update_=lambda event: fn(event.new),
            delete_=lambda event: fn(event.object),
            generic_=lambda event: fn(event.object),
        )

    def check(self, event: events.Event) -> bool:
        fn = (
            self.create_ if event.kind is events.EventKind.CREATE else
            self.update_ if event.kind is events.EventKind.UPDATE else
            self.delete_ if event.kind is events.EventKind.DELETE else
            self.generic_ if event.kind is events.EventKind.GENERIC else
            None
        )
        return True if fn is None else bool(fn(event))


def create_or_update_by_metadata(
        labels: Optional[filters.MetaFilter],
        annotations: Optional[filters.MetaFilter],
) -> MetadataMatch:
    """
    Filter the create & update events by the labels and/or annotations.

    Raises :class:`ValidationError` if the requirements are malformed.
    """
    selector = selectors.Selector(labels, annotations)
    return MetadataMatch(selector, frozenset({events.EventKind.CREATE, events.EventKind.UPDATE}))


def delete_by_metadata(
        labels: Optional[filters.MetaFilter],
        annotations: Optional[filters.MetaFilter],
) -> MetadataMatch:
    """
    Filter the delete events by the labels and/or annotations.

    Raises :class:`ValidationError` if the requirements are malformed.
    """
    selector = selectors.Selector(labels, annotations)
    return MetadataMatch(selector, frozenset({events.EventKind.DELETE}))


def log(
        predicates: Iterable[Predicate],
        *,
        log_ignored: bool = False,
        logger: Optional[typedefs.Logger] = None,
) -> LoggingWrap:
    """
    Combine the predicates with AND, and log the events with the decisions.
    """
    return LoggingWrap(AllOf(list(predicates)), log_ignored=log_ignored, logger=logger)
