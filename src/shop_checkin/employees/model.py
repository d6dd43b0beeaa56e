from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Employee:
    """Read-only view of a directory entry; the directory itself is managed elsewhere."""

    employee_id: str
    name: str
    is_deleted: bool = False
