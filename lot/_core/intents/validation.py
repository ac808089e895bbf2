"""
Validation of label & annotation keys and label values.

The rules are the same as in Kubernetes' API machinery
(``IsQualifiedName`` & ``IsValidLabelValue``), so that a selector
that passes here can match the objects that pass there.
"""
import dataclasses
import re
from typing import Any, Iterable, List, Sequence

QUALIFIED_NAME_MAX_LENGTH = 63
LABEL_VALUE_MAX_LENGTH = 63
DNS1123_SUBDOMAIN_MAX_LENGTH = 253

QUALIFIED_NAME_RE = re.compile(r'([A-Za-z0-9][-A-Za-z0-9_.]*)?[A-Za-z0-9]')
LABEL_VALUE_RE = re.compile(r'(([A-Za-z0-9][-A-Za-z0-9_.]*)?[A-Za-z0-9])?')
DNS1123_LABEL = r'[a-z0-9]([-a-z0-9]*[a-z0-9])?'
DNS1123_SUBDOMAIN_RE = re.compile(rf'{DNS1123_LABEL}(\.{DNS1123_LABEL})*')


@dataclasses.dataclass(frozen=True)
class FieldError:
    """ A single problem with a single field, as reported in the aggregated errors. """
    path: str
    value: Any
    detail: str

    def __str__(self) -> str:
        return f"{self.path}: Invalid value: {self.value!r}: {self.detail}"


class ValidationError(ValueError):
    """
    Raised when the requirements are malformed.

    All problems found are collected and reported together, not the first one only.
    """

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors: Sequence[FieldError] = list(errors)
        super().__init__("; ".join(str(error) for error in self.errors))


def check_qualified_name(value: str) -> List[str]:
    """
    Check a label/annotation key: an optional DNS-subdomain prefix and a name.

    Returns the list of problems; an empty list if the key is valid.
    """
    problems: List[str] = []
    parts = value.split('/')
    if len(parts) == 1:
        prefix, name = None, parts[0]
    elif len(parts) == 2:
        prefix, name = parts
        if not prefix:
            problems.append("prefix part must be non-empty")
        else:
            problems.extend(f"prefix part {msg}" for msg in check_dns1123_subdomain(prefix))
    else:
        problems.append(
            "a qualified name must consist of alphanumeric characters, '-', '_' or '.', "
            "and must start and end with an alphanumeric character "
            "with an optional DNS subdomain prefix and '/' (e.g. 'example.com/MyName')")
        return problems

    if not name:
        problems.append("name part must be non-empty")
    elif len(name) > QUALIFIED_NAME_MAX_LENGTH:
        problems.append(f"name part must be no more than {QUALIFIED_NAME_MAX_LENGTH} characters")
    if name and not QUALIFIED_NAME_RE.fullmatch(name):
        problems.append(
            "name part must consist of alphanumeric characters, '-', '_' or '.', "
            "and must start and end with an alphanumeric character")
    return problems


def check_label_value(value: str) -> List[str]:
    """
    Check a label value: empty, or up to 63 chars of a restricted alphabet.

    Returns the list of problems; an empty list if the value is valid.
    """
    problems: List[str] = []
    if len(value) > LABEL_VALUE_MAX_LENGTH:
        problems.append(f"must be no more than {LABEL_VALUE_MAX_LENGTH} characters")
    if not LABEL_VALUE_RE.fullmatch(value):
        problems.append(
            "a valid label must be an empty string or consist of alphanumeric characters, "
            "'-', '_' or '.', and must start and end with an alphanumeric character")
    return problems


def check_dns1123_subdomain(value: str) -> List[str]:
    problems: List[str] = []
    if len(value) > DNS1123_SUBDOMAIN_MAX_LENGTH:
        problems.append(f"must be no more than {DNS1123_SUBDOMAIN_MAX_LENGTH} characters")
    if not DNS1123_SUBDOMAIN_RE.fullmatch(value):
        problems.append(
            "a lowercase RFC 1123 subdomain must consist of lower case alphanumeric characters, "
            "'-' or '.', and must start and end with an alphanumeric character")
    return problems
