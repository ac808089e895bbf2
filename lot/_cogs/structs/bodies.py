"""
All the structures coming from/to the Kubernetes API.

The objects are plain JSON-decoded dicts, as retrieved in the watching
or fetching API calls. `Body` is a dict with a few typed accessors
for the well-known fields used by the filters and the handlers.

Typed objects are declared as subclasses of `Body` with a class-level
``resource``; their instances stamp their own ``apiVersion`` & ``kind``::

    class Secret(lot.Body):
        resource = lot.Resource('', 'v1', 'secrets', kind='Secret', namespaced=True)

Dynamically typed objects are the plain `Body` instances stamped with
the configured group-version-kind (see :mod:`lot._core.reactor.dispatching`).
"""
from typing import Any, ClassVar, Dict, List, Mapping, Optional, cast

from typing_extensions import TypedDict

from lot._cogs.structs import references

# Make sure every kwarg has a corresponding same-named type in the root package.
Labels = Mapping[str, str]
Annotations = Mapping[str, str]


class RawMeta(TypedDict, total=False):
    uid: str
    name: str
    namespace: str
    labels: Labels
    annotations: Annotations
    finalizers: List[str]
    resourceVersion: str
    deletionTimestamp: str
    creationTimestamp: str


class RawBody(TypedDict, total=False):
    apiVersion: str
    kind: str
    metadata: RawMeta
    spec: Mapping[str, Any]
    status: Mapping[str, Any]


class ObjectReference(TypedDict, total=False):
    apiVersion: str
    kind: str
    namespace: Optional[str]
    name: str
    uid: str


class Body(Dict[str, Any]):
    """
    A raw object with typed read-only access to the well-known fields.

    The labels & annotations are ``None`` if absent in the metadata:
    an absent map is not the same as an empty map for the selectors.
    """

    resource: ClassVar[Optional[references.Resource]] = None

    def __init__(self, __src: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        super().__init__(__src or {}, **kwargs)
        if self.resource is not None:
            self.setdefault('apiVersion', self.resource.api_version)
            if self.resource.kind:
                self.setdefault('kind', self.resource.kind)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({super().__repr__()})'

    @property
    def api_version(self) -> Optional[str]:
        return cast(Optional[str], self.get('apiVersion'))

    @property
    def kind(self) -> Optional[str]:
        return cast(Optional[str], self.get('kind'))

    @property
    def meta(self) -> RawMeta:
        return cast(RawMeta, self.get('metadata') or {})

    @property
    def labels(self) -> Optional[Labels]:
        return self.meta.get('labels')

    @property
    def annotations(self) -> Optional[Annotations]:
        return self.meta.get('annotations')

    @property
    def uid(self) -> Optional[str]:
        return self.meta.get('uid')

    @property
    def name(self) -> Optional[str]:
        return self.meta.get('name')

    @property
    def namespace(self) -> Optional[str]:
        return self.meta.get('namespace')

    @property
    def deletion_timestamp(self) -> Optional[str]:
        return self.meta.get('deletionTimestamp')

    def replace(self, __src: Mapping[str, Any]) -> None:
        """
        Replace the content with a freshly fetched one, keeping the identity.

        The stamped ``apiVersion`` & ``kind`` are kept if the source lacks them.
        """
        stamps = {key: self[key] for key in ['apiVersion', 'kind'] if key in self}
        self.clear()
        self.update(stamps)
        self.update(__src)


def get_labels(body: Mapping[str, Any]) -> Optional[Labels]:
    return cast(Optional[Labels], (body.get('metadata') or {}).get('labels'))


def get_annotations(body: Mapping[str, Any]) -> Optional[Annotations]:
    return cast(Optional[Annotations], (body.get('metadata') or {}).get('annotations'))


def build_object_reference(
        body: Mapping[str, Any],
) -> ObjectReference:
    """
    Construct an object reference for logging.

    Keep in mind that some fields can be absent: e.g. ``namespace``
    for cluster resources, or ``uid`` for not yet fetched objects.
    """
    meta = body.get('metadata') or {}
    ref = dict(
        apiVersion=body.get('apiVersion'),
        kind=body.get('kind'),
        name=meta.get('name'),
        uid=meta.get('uid'),
        namespace=meta.get('namespace'),
    )
    return cast(ObjectReference, {key: val for key, val in ref.items() if val})
