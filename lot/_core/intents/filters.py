import enum
from typing import Mapping, Union


class MetaFilterToken(enum.Enum):
    """ Tokens for filtering by annotations/labels. """
    PRESENT = enum.auto()
    ABSENT = enum.auto()


# For exporting to the top-level package.
ABSENT = MetaFilterToken.ABSENT
PRESENT = MetaFilterToken.PRESENT

# A requirement is either a literal value to match exactly, or a presence/absence token.
# The tokens are never equal to any string, so no literal value can be mistaken for them.
MetaFilterValue = Union[str, MetaFilterToken]

# Filters for handler specifications (not the same as the object's values).
MetaFilter = Mapping[str, MetaFilterValue]
