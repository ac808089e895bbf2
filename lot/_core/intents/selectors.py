"""
Label & annotation selectors.

A selector is a set of requirements for the labels and for the annotations.
Every requirement is either a literal value to match exactly, or a token
for the key's presence (:data:`PRESENT`) or absence (:data:`ABSENT`).

A selector is constructed and validated once, and never changed after that.
"""
from typing import Any, Iterator, List, Mapping, Optional

from lot._core.intents import filters, validation


class Selector:
    """
    Requirements for the labels & annotations of an object.

    Unlike an empty requirements map (which matches any data),
    an unset (``None``) requirements map never matches anything.
    Absent data (``None``) never matches either, even with no requirements.
    """

    def __init__(
            self,
            labels: Optional[filters.MetaFilter] = None,
            annotations: Optional[filters.MetaFilter] = None,
    ) -> None:
        super().__init__()
        errors = list(_validate(labels, path='labels', check_values=True))
        errors += list(_validate(annotations, path='annotations', check_values=False))
        if errors:
            raise validation.ValidationError(errors)
        self._labels = dict(labels) if labels is not None else None
        self._annotations = dict(annotations) if annotations is not None else None

    def __repr__(self) -> str:
        return f'{type(self).__name__}(labels={self._labels!r}, annotations={self._annotations!r})'

    @property
    def labels(self) -> Optional[filters.MetaFilter]:
        return self._labels

    @property
    def annotations(self) -> Optional[filters.MetaFilter]:
        return self._annotations

    def matches(
            self,
            labels: Optional[Mapping[str, str]],
            annotations: Optional[Mapping[str, str]],
    ) -> bool:
        return self.matches_labels(labels) and self.matches_annotations(annotations)

    def matches_labels(self, labels: Optional[Mapping[str, str]]) -> bool:
        return _matches(pattern=self._labels, content=labels)

    def matches_annotations(self, annotations: Optional[Mapping[str, str]]) -> bool:
        return _matches(pattern=self._annotations, content=annotations)


def _matches(
        *,
        pattern: Optional[filters.MetaFilter],  # from the handler
        content: Optional[Mapping[str, str]],  # from the body
) -> bool:
    if pattern is None or content is None:
        return False
    for key, value in pattern.items():
        if value is filters.MetaFilterToken.ABSENT:
            if key in content:
                return False
        elif value is filters.MetaFilterToken.PRESENT:
            if key not in content:
                return False
        elif key not in content:
            return False
        elif value != content[key]:
            return False
    return True


def _validate(
        pattern: Optional[Mapping[Any, Any]],
        *,
        path: str,
        check_values: bool,
) -> Iterator[validation.FieldError]:
    for key, value in (pattern or {}).items():
        problems: List[str]
        if not isinstance(key, str):
            yield validation.FieldError(f'{path}.key', key, "must be a string")
        else:
            problems = validation.check_qualified_name(key)
            if problems:
                yield validation.FieldError(f'{path}.key', key, "; ".join(problems))

        if isinstance(value, filters.MetaFilterToken):
            continue
        elif not isinstance(value, str):
            yield validation.FieldError(f'{path}.values[{key}]', value,
                                        "must be a string, lot.PRESENT, or lot.ABSENT")
        elif check_values:
            problems = validation.check_label_value(value)
            if problems:
                yield validation.FieldError(f'{path}.values[{key}]', value, "; ".join(problems))
