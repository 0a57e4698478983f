"""Log categories and their sink policies."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from .errors import UnknownCategoryError


class LogCategory(str, Enum):
    ACCESS = "access"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CategoryPolicy:
    # duplicate every line to the real-time error stream
    mirror_stderr: bool = False


DEFAULT_POLICIES: Mapping[LogCategory, CategoryPolicy] = {
    LogCategory.ACCESS: CategoryPolicy(mirror_stderr=False),
    LogCategory.ERROR: CategoryPolicy(mirror_stderr=True),
}


def parse_category(value) -> LogCategory:
    """Coerce an enum member or its string value to a LogCategory."""
    if isinstance(value, LogCategory):
        return value
    try:
        return LogCategory(value)
    except ValueError:
        raise UnknownCategoryError(f"Unknown log category: {value!r}") from None
