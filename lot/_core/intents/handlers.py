"""
The handlers of the operator and their registration-time options.

There are only two kinds of handlers: for creations-or-updates, and for
deletions. An operator has at most one of each; registering another one
of the same kind replaces the previous one.
"""
import dataclasses
from typing import Any, Callable, Coroutine, Dict, Iterable, Mapping, Optional, TypeVar, Union

from lot._core.intents import filters

# A handler can be a sync fn with the result, or an async fn which returns a coroutine.
_R = TypeVar('_R')
SyncOrAsync = Union[_R, Coroutine[None, None, _R]]

# Handlers are invoked with kwargs only: body, meta, labels, annotations, name, namespace,
# uid, resource, client, settings, logger. They must accept **kwargs for forward compatibility.
HandlerFn = Callable[..., SyncOrAsync[Optional[object]]]


@dataclasses.dataclass
class HandlerFuncs:
    create_or_update: Optional[HandlerFn] = None
    delete: Optional[HandlerFn] = None


@dataclasses.dataclass
class HandlerOptions:
    labels: Dict[str, filters.MetaFilterValue] = dataclasses.field(default_factory=dict)
    annotations: Dict[str, filters.MetaFilterValue] = dataclasses.field(default_factory=dict)

    @classmethod
    def build(
            cls,
            *,
            labels: Union[None, filters.MetaFilter, Iterable[filters.MetaFilter]] = None,
            annotations: Union[None, filters.MetaFilter, Iterable[filters.MetaFilter]] = None,
    ) -> "HandlerOptions":
        """
        Merge the label & annotation requirements by union (later keys win).
        """
        options = cls()
        for pattern in _as_patterns(labels):
            options.labels.update(pattern)
        for pattern in _as_patterns(annotations):
            options.annotations.update(pattern)
        return options


def _as_patterns(value: Any) -> Iterable[filters.MetaFilter]:
    if value is None:
        return []
    elif isinstance(value, Mapping):
        return [value]
    else:
        return list(value)
