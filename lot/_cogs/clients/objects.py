"""
The object store: fetching the live state of objects and applying changes.

The reconciler only fetches. The apply-semantics write is exposed
to the handlers via the ``client`` kwarg, so that they could converge
the owned objects with server-side applies.
"""
import asyncio
import logging
from typing import Callable, Optional, TypeVar

from typing_extensions import Protocol

from lot._cogs.clients import api, auth, errors
from lot._cogs.configs import configuration
from lot._cogs.structs import bodies, credentials, references

logger = logging.getLogger(__name__)

_BodyT = TypeVar('_BodyT', bound=bodies.Body)


class ObjectStore(Protocol):

    async def fetch(
            self,
            key: references.ObjectKey,
            obj: _BodyT,
            *,
            resource: Optional[references.Resource] = None,
    ) -> _BodyT:
        """
        Fill the object with the current state of the object under the key.

        Raises :class:`APINotFoundError` if there is no such object.
        """
        raise NotImplementedError

    async def apply(
            self,
            obj: bodies.Body,
            *,
            resource: Optional[references.Resource] = None,
            field_manager: Optional[str] = None,
            force: Optional[bool] = None,
    ) -> bodies.Body:
        """ Server-side-apply the object, and return the resulting state. """
        raise NotImplementedError


class APIObjectStore:
    """
    The object store backed by the Kubernetes API via aiohttp.

    The session is created lazily on the first request: either with
    the explicitly given credentials, or with the ones from ``login_fn``.
    """

    def __init__(
            self,
            *,
            info: Optional[credentials.ConnectionInfo] = None,
            login_fn: Optional[Callable[[], credentials.ConnectionInfo]] = None,
            settings: Optional[configuration.OperatorSettings] = None,
    ) -> None:
        super().__init__()
        self._info = info
        self._login_fn = login_fn
        self._context: Optional[auth.APIContext] = None
        self._lock = asyncio.Lock()
        self.settings = settings if settings is not None else configuration.OperatorSettings()

    async def _get_context(self) -> auth.APIContext:
        async with self._lock:
            if self._context is None:
                info = self._info
                if info is None and self._login_fn is not None:
                    info = self._info = self._login_fn()
                if info is None:
                    raise credentials.LoginError("No credentials and no way to get them.")
                self._context = auth.APIContext(info)
            return self._context

    async def close(self) -> None:
        if self._context is not None:
            await self._context.close()
            self._context = None

    async def fetch(
            self,
            key: references.ObjectKey,
            obj: _BodyT,
            *,
            resource: Optional[references.Resource] = None,
    ) -> _BodyT:
        resource = resource if resource is not None else _get_resource(obj)
        context = await self._get_context()
        raw = await api.get(
            url=resource.get_url(namespace=key.namespace, name=key.name),
            context=context,
            settings=self.settings,
            logger=logger,
        )
        obj.replace(raw)
        return obj

    async def apply(
            self,
            obj: bodies.Body,
            *,
            resource: Optional[references.Resource] = None,
            field_manager: Optional[str] = None,
            force: Optional[bool] = None,
    ) -> bodies.Body:
        resource = resource if resource is not None else _get_resource(obj)
        if not obj.name:
            raise ValueError(f"Cannot apply an object without a name: {obj!r}")

        field_manager = field_manager if field_manager is not None else self.settings.applying.field_manager
        force = force if force is not None else self.settings.applying.force
        context = await self._get_context()
        raw = await api.patch(
            url=resource.get_url(
                namespace=obj.namespace, name=obj.name,
                params=dict(fieldManager=field_manager, force='true' if force else 'false'),
            ),
            headers={'Content-Type': 'application/apply-patch+yaml'},  # JSON is a valid YAML
            payload=dict(obj),
            context=context,
            settings=self.settings,
            logger=logger,
        )
        return type(obj)(raw)


def _get_resource(obj: bodies.Body) -> references.Resource:
    """
    Detect the resource of an object: from its class, or from its stamps.
    """
    if obj.resource is not None:
        return obj.resource
    api_version, kind = obj.api_version, obj.kind
    if not api_version or not kind:
        raise TypeError(f"Cannot detect the resource of an unstamped object: {obj!r}")
    group, _, version = api_version.rpartition('/')
    return references.Resource.from_gvk(references.GroupVersionKind(group, version, kind))

