from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Unavailable:
    """Returned in place of a value when a best-effort source could not answer."""

    reason: str
