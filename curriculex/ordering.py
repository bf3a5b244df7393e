"""
Ordering of modules and lessons.

Identifiers encode a trailing integer ordinal by convention ("module3",
"lesson5"). The ordinal is parsed once when content is loaded and carried on
the Module/Lesson objects; comparisons between loaded objects never reparse.
Bare identifier strings are still accepted and parsed, and a string that
does not follow the convention raises instead of comparing as False.
"""

import re
from typing import Protocol, Union

from curriculex.errors import OrdinalFormatError


MODULE_PREFIX = "module"
LESSON_PREFIX = "lesson"

_PATTERNS: dict[str, re.Pattern] = {}


class HasOrdinal(Protocol):
    ordinal: int


Orderable = Union[str, HasOrdinal]


def _pattern(prefix: str) -> re.Pattern:
    pattern = _PATTERNS.get(prefix)
    if pattern is None:
        pattern = re.compile(rf"{re.escape(prefix)}([0-9]+)")
        _PATTERNS[prefix] = pattern
    return pattern


def parse_ordinal(identifier: str, prefix: str) -> int:
    """
    Extract the trailing ordinal from an identifier.

    Args:
        identifier: e.g. "module3"
        prefix: expected prefix, e.g. "module"

    Returns:
        The integer ordinal (3 for "module3")

    Raises:
        OrdinalFormatError: If identifier is not exactly <prefix><ASCII digits>
    """
    if not isinstance(identifier, str):
        raise OrdinalFormatError(repr(identifier), prefix)
    match = _pattern(prefix).fullmatch(identifier)
    if not match:
        raise OrdinalFormatError(identifier, prefix)
    return int(match.group(1))


def _ordinal_of(value: Orderable, prefix: str) -> int:
    if isinstance(value, str):
        return parse_ordinal(value, prefix)
    ordinal = getattr(value, "ordinal", None)
    if not isinstance(ordinal, int):
        raise OrdinalFormatError(repr(value), prefix)
    return ordinal


def is_module_before(a: Orderable, b: Orderable) -> bool:
    """True if module a comes strictly before module b."""
    return _ordinal_of(a, MODULE_PREFIX) < _ordinal_of(b, MODULE_PREFIX)


def is_lesson_before(a: Orderable, b: Orderable) -> bool:
    """True if lesson a comes strictly before lesson b (same module)."""
    return _ordinal_of(a, LESSON_PREFIX) < _ordinal_of(b, LESSON_PREFIX)


def module_sort_key(value: Orderable) -> int:
    return _ordinal_of(value, MODULE_PREFIX)


def lesson_sort_key(value: Orderable) -> int:
    return _ordinal_of(value, LESSON_PREFIX)
