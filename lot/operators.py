"""
The operator: the handlers, the admission predicate, and the reconciler of one kind.

An operator is configured once at startup: the handlers are registered with
their label & annotation requirements, and then the operator is built into
a controller for the external runtime. Nothing changes after the build.

Example::

    operator = lot.Operator.untyped('', 'v1', 'Secret', config=lot.OperatorConfig(runtime=...))

    @operator.on_create_or_update(labels={'app': 'demo', 'important': lot.PRESENT})
    async def converge(body, client, logger, **_):
        logger.info("Converging.")

    @operator.on_delete(annotations={'keep-resource': lot.ABSENT})
    def cleanup(name, **_):
        ...

    lot.run()
"""
import dataclasses
from typing import Any, Callable, List, Optional, Sequence, Type, Union, overload

from lot._cogs.clients import objects
from lot._cogs.configs import configuration
from lot._cogs.structs import bodies, events, references
from lot._core.intents import filters, handlers, piggybacking, predicates, validation
from lot._core.reactor import dispatching, registries, running

_LabelsOrAnnotations = Union[None, filters.MetaFilter, Sequence[filters.MetaFilter]]
_Predicates = Sequence[predicates.Predicate]


class ConfigurationError(Exception):
    """
    Everything that is wrong with an operator's configuration, all at once.

    The individual problems are in ``errors``; the message lists them all.
    """

    def __init__(self, errors: Sequence[Exception]) -> None:
        self.errors: List[Exception] = list(errors)
        super().__init__('; '.join(str(error) for error in self.errors) or "Misconfigured.")


@dataclasses.dataclass
class OperatorConfig:
    """
    The construction-time options of an operator.

    ``runtime`` is the external watch machinery, and is needed only to build
    & run the operator. ``client`` is the object store for fetching the objects
    (by default, the Kubernetes API with the in-cluster or kubeconfig credentials).
    ``predicates`` are the custom admission predicates, all of which must admit
    an event in addition to the handlers' own predicates. ``owns`` are the
    secondary kinds to watch, each with its own predicate.
    """
    runtime: Optional[running.Runtime] = None
    client: Optional[objects.ObjectStore] = None
    predicates: _Predicates = ()
    owns: Sequence[running.OwnedResource] = ()
    settings: Optional[configuration.OperatorSettings] = None
    registry: Optional[registries.OperatorRegistry] = None

    def validate(self) -> None:
        """ Raise :class:`ConfigurationError` with all the problems found, if any. """
        errors: List[Exception] = []
        for idx, predicate in enumerate(self.predicates):
            if not isinstance(predicate, predicates.Predicate):
                errors.append(TypeError(f"predicates[{idx}]: not a predicate: {predicate!r}"))
        for idx, owned in enumerate(self.owns):
            if not isinstance(owned, running.OwnedResource):
                errors.append(TypeError(f"owns[{idx}]: not an owned resource: {owned!r}"))
                continue
            if not isinstance(owned.kind, dispatching.ObjectKind):
                errors.append(TypeError(f"owns[{idx}].kind: not a kind: {owned.kind!r}"))
            if not isinstance(owned.predicate, predicates.Predicate):
                errors.append(TypeError(f"owns[{idx}].predicate: not a predicate: {owned.predicate!r}"))
        if self.runtime is not None and not isinstance(self.runtime, running.Runtime):
            errors.append(TypeError(f"runtime: no register() or run() in {self.runtime!r}"))
        if errors:
            raise ConfigurationError(errors)


class Operator:
    """
    An operator for one kind of objects.

    It is registered in the registry (the default one unless configured)
    on creation, so that it can be found and run by ``lot run``.
    """

    def __init__(
            self,
            kind: dispatching.ObjectKind,
            *,
            config: Optional[OperatorConfig] = None,
    ) -> None:
        super().__init__()
        config = config if config is not None else OperatorConfig()
        config.validate()
        if not isinstance(kind, dispatching.ObjectKind):
            raise ConfigurationError([TypeError(f"kind: not a kind: {kind!r}")])

        self.kind = kind
        self.config = config
        self.settings = config.settings if config.settings is not None else configuration.OperatorSettings()
        self.client: objects.ObjectStore = (
            config.client if config.client is not None else
            objects.APIObjectStore(settings=self.settings, login_fn=piggybacking.login)
        )
        self.handlers = handlers.HandlerFuncs()
        self._handler_predicates: List[predicates.Predicate] = []
        self._errors: List[Exception] = []
        self._controller: Optional[running.Controller] = None

        self.registry = config.registry if config.registry is not None else registries.get_default_registry()
        self.registry.register(self)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.kind!r})'

    @classmethod
    def typed(
            cls,
            body_cls: Type[bodies.Body],
            *,
            config: Optional[OperatorConfig] = None,
    ) -> "Operator":
        return cls(dispatching.Typed(body_cls), config=config)

    @classmethod
    def untyped(
            cls,
            group: str,
            version: str,
            kind: str,
            *,
            plural: Optional[str] = None,
            config: Optional[OperatorConfig] = None,
    ) -> "Operator":
        gvk = references.GroupVersionKind(group=group, version=version, kind=kind)
        return cls(dispatching.Dynamic(gvk, plural=plural), config=config)

    @property
    def name(self) -> str:
        return self.kind.name

    @property
    def runtime(self) -> Optional[running.Runtime]:
        return self.config.runtime

    @property
    def errors(self) -> List[Exception]:
        return list(self._errors)

    @overload
    def on_create_or_update(
            self,
            fn: handlers.HandlerFn,
            *,
            labels: _LabelsOrAnnotations = None,
            annotations: _LabelsOrAnnotations = None,
    ) -> handlers.HandlerFn: ...

    @overload
    def on_create_or_update(
            self,
            fn: None = None,
            *,
            labels: _LabelsOrAnnotations = None,
            annotations: _LabelsOrAnnotations = None,
    ) -> Callable[[handlers.HandlerFn], handlers.HandlerFn]: ...

    def on_create_or_update(
            self,
            fn: Optional[handlers.HandlerFn] = None,
            *,
            labels: _LabelsOrAnnotations = None,
            annotations: _LabelsOrAnnotations = None,
    ) -> Any:
        """
        Register the handler for the creations & updates of the matching objects.

        Can be used directly with a function, or as a decorator (with or without
        the requirements). The deletions never reach this handler's predicate.
        """
        def decorator(fn: handlers.HandlerFn) -> handlers.HandlerFn:
            self._register(
                fn,
                gate=predicates.EventKindGate.only(events.EventKind.CREATE, events.EventKind.UPDATE),
                metadata_fn=predicates.create_or_update_by_metadata,
                labels=labels,
                annotations=annotations,
            )
            self.handlers.create_or_update = fn
            return fn
        return decorator if fn is None else decorator(fn)

    @overload
    def on_delete(
            self,
            fn: handlers.HandlerFn,
            *,
            labels: _LabelsOrAnnotations = None,
            annotations: _LabelsOrAnnotations = None,
    ) -> handlers.HandlerFn: ...

    @overload
    def on_delete(
            self,
            fn: None = None,
            *,
            labels: _LabelsOrAnnotations = None,
            annotations: _LabelsOrAnnotations = None,
    ) -> Callable[[handlers.HandlerFn], handlers.HandlerFn]: ...

    def on_delete(
            self,
            fn: Optional[handlers.HandlerFn] = None,
            *,
            labels: _LabelsOrAnnotations = None,
            annotations: _LabelsOrAnnotations = None,
    ) -> Any:
        """
        Register the handler for the deletions of the matching objects.

        Can be used directly with a function, or as a decorator (with or without
        the requirements). Only the deletions pass this handler's predicate.
        """
        def decorator(fn: handlers.HandlerFn) -> handlers.HandlerFn:
            self._register(
                fn,
                gate=predicates.EventKindGate.only(events.EventKind.DELETE),
                metadata_fn=predicates.delete_by_metadata,
                labels=labels,
                annotations=annotations,
            )
            self.handlers.delete = fn
            return fn
        return decorator if fn is None else decorator(fn)

    def _register(
            self,
            fn: handlers.HandlerFn,
            *,
            gate: predicates.EventKindGate,
            metadata_fn: Callable[..., predicates.MetadataMatch],
            labels: _LabelsOrAnnotations,
            annotations: _LabelsOrAnnotations,
    ) -> None:
        if not callable(fn):
            self._errors.append(TypeError(f"Handler is not callable: {fn!r}"))
            return
        try:
            options = handlers.HandlerOptions.build(labels=labels, annotations=annotations)
        except (TypeError, ValueError) as e:
            self._errors.append(e)
            return
        try:
            metadata = metadata_fn(options.labels, options.annotations)
        except validation.ValidationError as e:
            self._errors.append(e)
            return
        self._handler_predicates.append(gate & metadata)

    def predicate(self) -> predicates.LoggingWrap:
        """
        Compose the admission predicate of the watched kind.

        An event is admitted if any of the handlers wants it, and if all
        the custom predicates admit it. With no handlers, only the custom
        predicates decide. Every decision is logged.
        """
        if self._errors:
            raise ConfigurationError(self._errors)
        parts: List[predicates.Predicate] = list(self.config.predicates)
        if self._handler_predicates:
            parts.append(predicates.AnyOf(self._handler_predicates))
        return predicates.log(parts, log_ignored=self.settings.filtering.log_ignored)

    def reconciler(self) -> dispatching.Reconciler:
        return dispatching.Reconciler(
            kind=self.kind,
            client=self.client,
            handlers=dataclasses.replace(self.handlers),
            settings=self.settings,
        )

    def build(self) -> running.Controller:
        """
        Build the controller and register it with the runtime (only once).
        """
        if self._controller is not None:
            return self._controller
        if self.runtime is None:
            raise ConfigurationError([ValueError(f"No runtime is configured for {self!r}.")])
        controller = running.Controller(
            name=self.name,
            kind=self.kind,
            predicate=self.predicate(),
            owns=tuple(self.config.owns),
            reconciler=self.reconciler(),
        )
        self.runtime.register(controller)
        self._controller = controller
        return controller

    async def run(self) -> None:
        """
        Build the operator, and run its runtime until it exits.
        """
        self.build()
        assert self.runtime is not None  # checked in build()
        await self.runtime.run()
