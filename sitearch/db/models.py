"""Dataclass models representing DB rows.

These are plain Python objects – not ORM models.  Page rows map onto
:class:`sitearch.engine.models.PageRecord`; tenants have their own type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Tenant:
    id: str
    name: str
    uploaded_at: Optional[int]
    created_at: int
    updated_at: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "uploaded_at": self.uploaded_at,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
