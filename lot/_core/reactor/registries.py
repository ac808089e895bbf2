"""
A registry of the operators, to be found and run after loading the modules.

The operators are registered on creation (unless explicitly told otherwise).
The CLI loads the operator developers' files & modules, and then runs or checks
all operators of the default registry.
"""
from typing import TYPE_CHECKING, Iterator, List, Optional

if TYPE_CHECKING:
    from lot import operators


class OperatorRegistry:
    """
    A global registry is used for handling of multiple operators in one process.

    It is usually populated by the operators themselves on creation.
    """

    def __init__(self) -> None:
        super().__init__()
        self._operators: List["operators.Operator"] = []

    def __iter__(self) -> Iterator["operators.Operator"]:
        return iter(list(self._operators))

    def __len__(self) -> int:
        return len(self._operators)

    def register(self, operator: "operators.Operator") -> "operators.Operator":
        if not any(existing is operator for existing in self._operators):
            self._operators.append(operator)
        return operator

    def unregister(self, operator: "operators.Operator") -> None:
        self._operators[:] = [existing for existing in self._operators if existing is not operator]

    @property
    def operators(self) -> List["operators.Operator"]:
        return list(self._operators)


_default_registry: Optional[OperatorRegistry] = None


def get_default_registry() -> OperatorRegistry:
    """
    Get the default registry to be used by the operators and the runner
    unless the explicit registry is provided to them.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = OperatorRegistry()
    return _default_registry


def set_default_registry(registry: OperatorRegistry) -> None:
    """
    Set the default registry to be used by the operators and the runner
    unless the explicit registry is provided to them.
    """
    global _default_registry
    _default_registry = registry
