"""
Dispatching of the reconciliation requests to the registered handlers.

The reconciler gets only the identity of an object (namespace & name), which
has already passed the admission predicates of the watch runtime. It fetches
the live state of the object, and invokes the handlers with it:
first the deletion handler (if any), then the creation/update handler (if any).

The dispatching does not depend on the kind of the original event: it is
the admission predicates that decide which events reach the reconciler.
"""
import abc
import logging
from typing import Any, Dict, Optional, Type

from lot._cogs.clients import errors, objects
from lot._cogs.configs import configuration
from lot._cogs.structs import bodies, references
from lot._core.actions import invocation, loggers
from lot._core.intents import handlers

logger = logging.getLogger('lot.reconciler')


class ObjectKind(metaclass=abc.ABCMeta):
    """ The kind of objects served by an operator, and their representation. """

    @property
    @abc.abstractmethod
    def resource(self) -> references.Resource:
        raise NotImplementedError

    @property
    def gvk(self) -> references.GroupVersionKind:
        gvk = self.resource.gvk
        if gvk is None:
            raise TypeError(f"The resource {self.resource!r} has no kind.")
        return gvk

    @property
    def name(self) -> str:
        """ A name for the controller, as the kind in lowercase. """
        return self.gvk.kind.lower()

    @abc.abstractmethod
    def new(self) -> bodies.Body:
        """ Construct an empty object of the proper representation. """
        raise NotImplementedError


class Typed(ObjectKind):
    """
    A statically typed kind: a subclass of :class:`Body` with a ``resource``.

    Example::

        class Secret(lot.Body):
            resource = lot.Resource('', 'v1', 'secrets', kind='Secret')

        lot.Typed(Secret)
    """

    def __init__(self, cls: Type[bodies.Body]) -> None:
        super().__init__()
        if not isinstance(cls, type) or not issubclass(cls, bodies.Body):
            raise TypeError(f"A typed kind must be a subclass of Body, got {cls!r}.")
        if cls.resource is None:
            raise TypeError(f"The class {cls.__name__} has no resource declared.")
        if cls.resource.kind is None:
            raise TypeError(f"The resource of {cls.__name__} has no kind.")
        self.cls = cls

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.cls.__name__})'

    @property
    def resource(self) -> references.Resource:
        assert self.cls.resource is not None  # checked in the constructor
        return self.cls.resource

    def new(self) -> bodies.Body:
        return self.cls()


class Dynamic(ObjectKind):
    """
    A dynamically typed kind: only the group, version & kind are known.

    The objects are generic bodies stamped with the ``apiVersion`` & ``kind``.
    The plural name is guessed from the kind unless explicitly given.
    """

    def __init__(
            self,
            gvk: references.GroupVersionKind,
            *,
            plural: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._resource = references.Resource.from_gvk(gvk, plural=plural)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._resource.gvk})'

    @property
    def resource(self) -> references.Resource:
        return self._resource

    def new(self) -> bodies.Body:
        return bodies.Body(apiVersion=self._resource.api_version, kind=self._resource.kind)


class Reconciler:
    """
    The reconciliation function for one kind, as called by the watch runtime.

    It holds no state between the calls, and can be called concurrently
    for different objects. For the same object, the runtime serializes the calls.
    """

    def __init__(
            self,
            *,
            kind: ObjectKind,
            client: objects.ObjectStore,
            handlers: handlers.HandlerFuncs,
            settings: configuration.OperatorSettings,
    ) -> None:
        super().__init__()
        self.kind = kind
        self.client = client
        self.handlers = handlers
        self.settings = settings

    async def __call__(self, key: references.ObjectKey) -> None:
        logger.debug(f"Event received: {key}",
                     extra=dict(object_name=key.name, object_namespace=key.namespace))

        obj = self.kind.new()
        try:
            obj = await self.client.fetch(key, obj, resource=self.kind.resource)
        except errors.APINotFoundError:
            # Deleted meanwhile, and there is nothing to reconcile anymore.
            logger.info(f"Object not found: {key}",
                        extra=dict(object_name=key.name, object_namespace=key.namespace))
            return None
        except Exception as e:
            logger.error(f"Fetching failed: {key}: {e!r}",
                         extra=dict(object_name=key.name, object_namespace=key.namespace))
            raise

        object_logger = loggers.ObjectLogger(body=obj)
        kwargs = self.build_kwargs(body=obj, logger=object_logger)

        if self.handlers.delete is not None:
            await self._invoke(self.handlers.delete, kwargs=kwargs, logger=object_logger)
        if self.handlers.create_or_update is not None:
            await self._invoke(self.handlers.create_or_update, kwargs=kwargs, logger=object_logger)
        return None

    def build_kwargs(
            self,
            *,
            body: bodies.Body,
            logger: loggers.ObjectLogger,
    ) -> Dict[str, Any]:
        return dict(
            body=body,
            meta=body.meta,
            labels=body.labels,
            annotations=body.annotations,
            name=body.name,
            namespace=body.namespace,
            uid=body.uid,
            resource=self.kind.resource,
            client=self.client,
            settings=self.settings,
            logger=logger,
        )

    async def _invoke(
            self,
            fn: handlers.HandlerFn,
            *,
            kwargs: Dict[str, Any],
            logger: loggers.ObjectLogger,
    ) -> None:
        try:
            await invocation.invoke(fn, settings=self.settings, kwargs=kwargs)
        except Exception as e:
            name = getattr(fn, '__qualname__', repr(fn))
            logger.error(f"Handler {name!r} failed: {e!r}")
            raise
