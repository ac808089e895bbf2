"""
Type definitions shared across the codebase.

The stdlib's stubs declare some classes as generics (e.g. `logging.LoggerAdapter`),
while the runtime does not support subscripting them on older Pythons.
"""
import logging
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    LoggerAdapter = logging.LoggerAdapter[Any]
else:
    LoggerAdapter = logging.LoggerAdapter

# As publicly exposed: a stdlib logger or any of its adapters.
Logger = Union[logging.Logger, LoggerAdapter]
