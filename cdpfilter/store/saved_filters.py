from __future__ import annotations
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional
import json
import logging
import os
import threading
import time
import uuid

from ..filters import FilterGroup

log = logging.getLogger("store")

SAVED_FILTERS_PATH = Path(os.getenv("SAVED_FILTERS_FILE", "config/saved_filters.json"))

_EDITABLE = {"name", "description", "filter_data", "is_public", "tags"}


def _now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


@dataclass
class SavedFilter:
    """
    A named filter expression owned by one user, optionally shared.
    """
    name: str
    user_id: str
    filter_data: List[FilterGroup] = field(default_factory=list)
    description: Optional[str] = None
    is_public: bool = False
    tags: List[str] = field(default_factory=list)
    usage_count: int = 0
    last_used_at: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(default_factory=_now_iso)
    updated_at: str = field(default_factory=_now_iso)

    # camelCase JSON helpers
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "userId": self.user_id,
            "filterData": [g.to_dict() for g in self.filter_data],
            "isPublic": self.is_public,
            "tags": list(self.tags),
            "usageCount": self.usage_count,
            "lastUsedAt": self.last_used_at,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedFilter":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description"),
            user_id=data["userId"],
            filter_data=[FilterGroup.from_dict(g) for g in data.get("filterData", [])],
            is_public=bool(data.get("isPublic", False)),
            tags=list(data.get("tags", [])),
            usage_count=int(data.get("usageCount", 0) or 0),
            last_used_at=data.get("lastUsedAt"),
            created_at=data.get("createdAt") or _now_iso(),
            updated_at=data.get("updatedAt") or _now_iso(),
        )


class SavedFilterStore:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else SAVED_FILTERS_PATH
        self.filters: Dict[str, SavedFilter] = {}
        self._lock = threading.Lock()

    def load(self) -> None:
        if self.path.exists():
            with self.path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
            self.filters = {d["id"]: SavedFilter.from_dict(d) for d in raw.get("filters", [])}
        else:
            self.filters = {}
        log.info("Loaded %d saved filters from %s", len(self.filters), self.path)

    def save(self, filters: Optional[Dict[str, SavedFilter]] = None) -> None:
        filters = self.filters if filters is None else filters
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump({"filters": [sf.to_dict() for sf in filters.values()]}, f, indent=2)
        tmp.replace(self.path)

    def _commit(self, filters: Dict[str, SavedFilter]) -> None:
        # memory only follows a successful write
        self.save(filters)
        self.filters = filters

    def list_for_user(self, user_id: str) -> List[SavedFilter]:
        """Own filters plus public ones, newest first."""
        visible = [sf for sf in self.filters.values() if sf.user_id == user_id or sf.is_public]
        return sorted(visible, key=lambda sf: sf.created_at, reverse=True)

    def popular(self, limit: int = 10) -> List[SavedFilter]:
        """Public filters, most used first."""
        shared = [sf for sf in self.filters.values() if sf.is_public]
        return sorted(shared, key=lambda sf: sf.usage_count, reverse=True)[:max(limit, 0)]

    def get(self, filter_id: str) -> SavedFilter:
        if filter_id not in self.filters:
            raise KeyError(f"Unknown saved filter: {filter_id}")
        return self.filters[filter_id]

    def get_visible(self, filter_id: str, user_id: str) -> SavedFilter:
        sf = self.get(filter_id)
        if sf.user_id != user_id and not sf.is_public:
            raise PermissionError("Saved filter belongs to another user")
        return sf

    def create(
        self,
        user_id: str,
        name: str,
        filter_data: List[FilterGroup],
        *,
        description: Optional[str] = None,
        is_public: bool = False,
        tags: Optional[List[str]] = None,
    ) -> SavedFilter:
        if not name or not name.strip():
            raise ValueError("Saved filter name is required")
        sf = SavedFilter(
            name=name.strip(),
            user_id=user_id,
            filter_data=list(filter_data),
            description=description,
            is_public=is_public,
            tags=list(tags or []),
        )
        with self._lock:
            self._commit({**self.filters, sf.id: sf})
        log.info("Saved filter %s created by %s", sf.id, user_id)
        return sf

    def update(self, filter_id: str, user_id: str, **changes: Any) -> SavedFilter:
        unknown = set(changes) - _EDITABLE
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if "name" in changes:
            name = changes["name"]
            if not name or not str(name).strip():
                raise ValueError("Saved filter name is required")
            changes["name"] = str(name).strip()
        with self._lock:
            current = self.get(filter_id)
            if current.user_id != user_id:
                raise PermissionError("Saved filter belongs to another user")
            updated = replace(current, updated_at=_now_iso(), **changes)
            self._commit({**self.filters, filter_id: updated})
        return updated

    def delete(self, filter_id: str, user_id: str) -> None:
        with self._lock:
            current = self.get(filter_id)
            if current.user_id != user_id:
                raise PermissionError("Saved filter belongs to another user")
            self._commit({k: v for k, v in self.filters.items() if k != filter_id})
        log.info("Saved filter %s deleted by %s", filter_id, user_id)

    def mark_used(self, filter_id: str) -> SavedFilter:
        with self._lock:
            current = self.get(filter_id)
            updated = replace(
                current,
                usage_count=current.usage_count + 1,
                last_used_at=_now_iso(),
            )
            self._commit({**self.filters, filter_id: updated})
        return updated
