"""
The main Lot module for all the exported functions & classes.
"""
# isort: skip_file

# Unlike all other places, where we import other modules and refer
# the functions via the modules, this is the framework's top-level interface,
# as it is seen by the users. So, we export the individual functions.

from lot._cogs.configs.configuration import (
    OperatorSettings,
    NetworkingSettings,
    ExecutionSettings,
    FilteringSettings,
    ApplyingSettings,
)
from lot._cogs.clients.errors import (
    APIError,
    APIClientError,
    APIServerError,
    APIUnauthorizedError,
    APIForbiddenError,
    APINotFoundError,
    APIConflictError,
)
from lot._cogs.clients.objects import (
    ObjectStore,
    APIObjectStore,
)
from lot._cogs.structs.bodies import (
    Body,
    Labels,
    Annotations,
    ObjectReference,
    build_object_reference,
)
from lot._cogs.structs.credentials import (
    ConnectionInfo,
    LoginError,
)
from lot._cogs.structs.events import (
    EventKind,
    Event,
    CreateEvent,
    UpdateEvent,
    DeleteEvent,
    GenericEvent,
)
from lot._cogs.structs.references import (
    GroupVersionKind,
    Resource,
    ObjectKey,
)
from lot._core.actions.loggers import (
    configure,
    LogFormat,
    ObjectLogger,
)
from lot._core.intents.filters import (
    ABSENT,
    PRESENT,
    MetaFilterToken,
)
from lot._core.intents.piggybacking import (
    login,
    login_with_kubeconfig,
    login_with_service_account,
)
from lot._core.intents.predicates import (
    Predicate,
    EventKindGate,
    MetadataMatch,
    AllOf,
    AnyOf,
    LoggingWrap,
    Funcs,
    create_or_update_by_metadata,
    delete_by_metadata,
    log,
)
from lot._core.intents.selectors import (
    Selector,
)
from lot._core.intents.validation import (
    FieldError,
    ValidationError,
)
from lot._core.reactor.dispatching import (
    ObjectKind,
    Typed,
    Dynamic,
    Reconciler,
)
from lot._core.reactor.registries import (
    OperatorRegistry,
    get_default_registry,
    set_default_registry,
)
from lot._core.reactor.running import (
    Runtime,
    Controller,
    OwnedResource,
    run,
    operate,
)
from lot.operators import (
    Operator,
    OperatorConfig,
    ConfigurationError,
)

__all__ = [
    'Operator', 'OperatorConfig', 'ConfigurationError',
    'ObjectKind', 'Typed', 'Dynamic', 'Reconciler',
    'Runtime', 'Controller', 'OwnedResource', 'run', 'operate',
    'OperatorRegistry', 'get_default_registry', 'set_default_registry',
    'Predicate', 'EventKindGate', 'MetadataMatch', 'AllOf', 'AnyOf', 'LoggingWrap', 'Funcs',
    'create_or_update_by_metadata', 'delete_by_metadata', 'log',
    'Selector', 'FieldError', 'ValidationError',
    'ABSENT', 'PRESENT', 'MetaFilterToken',
    'EventKind', 'Event', 'CreateEvent', 'UpdateEvent', 'DeleteEvent', 'GenericEvent',
    'Body', 'Labels', 'Annotations', 'ObjectReference', 'build_object_reference',
    'GroupVersionKind', 'Resource', 'ObjectKey',
    'ObjectStore', 'APIObjectStore',
    'APIError', 'APIClientError', 'APIServerError',
    'APIUnauthorizedError', 'APIForbiddenError', 'APINotFoundError', 'APIConflictError',
    'ConnectionInfo', 'LoginError',
    'login', 'login_with_kubeconfig', 'login_with_service_account',
    'configure', 'LogFormat', 'ObjectLogger',
    'OperatorSettings', 'NetworkingSettings', 'ExecutionSettings',
    'FilteringSettings', 'ApplyingSettings',
]
