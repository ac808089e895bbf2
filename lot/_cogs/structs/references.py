"""
References to the resource kinds and to the individual objects of them.
"""
import dataclasses
import urllib.parse
from typing import Iterator, Optional


@dataclasses.dataclass(frozen=True)
class GroupVersionKind:
    """
    A resource kind as known from the manifests, not from the API endpoints.

    For Core v1 API kinds, the group is an empty string: ``""``.
    """
    group: str
    version: str
    kind: str

    @property
    def api_version(self) -> str:
        return f'{self.group}/{self.version}' if self.group else self.version

    def __str__(self) -> str:
        return f'{self.kind}.{self.version}.{self.group}'.strip('.')


def guess_plural(kind: str) -> str:
    """
    Guess the plural resource name from a kind, the same way Kubernetes does.

    It is only a guess: for irregular plurals, specify the plural explicitly.
    """
    singular = kind.lower()
    if not singular:
        return singular
    elif singular.endswith('s'):
        return singular + 'es'
    elif singular.endswith('y'):
        return singular[:-1] + 'ies'
    else:
        return singular + 's'


@dataclasses.dataclass(frozen=True, eq=False, repr=False)
class Resource:
    """
    A reference to a very specific custom or built-in resource kind.

    It is used to form the K8s API URLs. Generally, K8s API only needs
    an API group, an API version, and a plural name of the resource.
    The kind is remembered for stamping the objects and for logging.
    """

    group: str
    """
    The resource's API group; e.g. ``"example.com"``, ``"apps"``, ``"batch"``.
    For Core v1 API resources, an empty string: ``""``.
    """

    version: str
    """
    The resource's API version; e.g. ``"v1"``, ``"v1beta1"``, etc.
    """

    plural: str
    """
    The resource's plural name; e.g. ``"pods"``, ``"secrets"``.
    It is used as an API endpoint, together with API group & version.
    """

    kind: Optional[str] = None
    """
    The resource's kind (as in YAML files); e.g. ``"Pod"``, ``"Secret"``.
    """

    namespaced: Optional[bool] = None
    """
    Whether the resource is namespaced (``True``) or cluster-scoped (``False``).
    ``None`` means unknown: the namespace of a key is then used as given.
    """

    def __hash__(self) -> int:
        return hash((self.group, self.version, self.plural))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Resource):
            self_tuple = (self.group, self.version, self.plural)
            other_tuple = (other.group, other.version, other.plural)
            return self_tuple == other_tuple
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return f'{self.plural}.{self.version}.{self.group}'.strip('.')

    # Mostly for tests, to unpack as `Resource(*resource)`.
    def __iter__(self) -> Iterator[str]:
        return iter((self.group, self.version, self.plural))

    @property
    def api_version(self) -> str:
        return f'{self.group}/{self.version}' if self.group else self.version

    @property
    def gvk(self) -> Optional[GroupVersionKind]:
        return GroupVersionKind(self.group, self.version, self.kind) if self.kind else None

    @classmethod
    def from_gvk(cls, gvk: GroupVersionKind, *, plural: Optional[str] = None) -> "Resource":
        return cls(
            group=gvk.group,
            version=gvk.version,
            plural=plural or guess_plural(gvk.kind),
            kind=gvk.kind,
        )

    def get_url(
            self,
            *,
            server: Optional[str] = None,
            namespace: Optional[str] = None,
            name: Optional[str] = None,
            params: Optional[dict] = None,
    ) -> str:
        """
        Build a URL to be used with K8s API.

        If the namespace is not set, a cluster-wide URL is returned.
        For cluster-scoped resources, the namespace is never used.
        """
        if self.namespaced is False:
            namespace = None

        parts = [
            '/api' if self.group == '' and self.version == 'v1' else '/apis',
            self.group,
            self.version,
            'namespaces' if namespace else None,
            namespace,
            self.plural,
            name,
        ]

        query = urllib.parse.urlencode(params, encoding='utf-8') if params else ''
        path = '/'.join([part for part in parts if part])
        url = path + ('?' if query else '') + query
        return url if server is None else server.rstrip('/') + '/' + url.lstrip('/')


@dataclasses.dataclass(frozen=True)
class ObjectKey:
    """
    An identity of a single object: its namespace (if any) and its name.

    This is what the watch runtime passes to the reconciler after admission.
    """
    name: str
    namespace: Optional[str] = None

    def __str__(self) -> str:
        return f'{self.namespace}/{self.name}' if self.namespace else self.name
