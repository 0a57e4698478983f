"""Caller tags: short, codebase-relative labels prefixed to log lines."""
from __future__ import annotations
from typing import Any

UNKNOWN_CALLER = "unknown"


class CallerTagger:
    """Turns "who is logging" into a readable label.

    Call sites normally pass an explicit dotted name such as
    ``"dmrhub.api.app.healthz"``; a function or class is also accepted and
    named from its ``__module__`` and ``__qualname__``. The configured
    prefix is stripped, so the example above becomes ``"api.app.healthz"``.
    """

    def __init__(self, prefix: str = "dmrhub."):
        self.prefix = prefix

    def tag(self, caller: Any) -> str:
        if caller is None:
            return UNKNOWN_CALLER
        if isinstance(caller, str):
            name = caller.strip()
        else:
            qualname = getattr(caller, "__qualname__", None) or getattr(caller, "__name__", None)
            if qualname is None:
                name = str(caller)
            else:
                module = getattr(caller, "__module__", None)
                name = f"{module}.{qualname}" if module else qualname
        if self.prefix and name.startswith(self.prefix):
            name = name[len(self.prefix):]
        return name or UNKNOWN_CALLER

    def tagged(self, caller: Any, message: str) -> str:
        return f"{self.tag(caller)}: {message}"
