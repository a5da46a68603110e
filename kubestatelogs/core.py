"""Shared building blocks for resource handlers: object cache, metadata and filtering."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _metadata(obj: Any) -> Mapping[str, Any]:
    if not isinstance(obj, Mapping):
        return {}
    meta = obj.get("metadata")
    return meta if isinstance(meta, Mapping) else {}


class ObjectStore:
    """Thread-safe cache of API objects keyed by namespace and name."""

    def __init__(self, objects: Iterable[Any] = ()) -> None:
        self._lock = threading.Lock()
        self._objects: dict[tuple[str, Any], Any] = {}
        for obj in objects:
            self.add(obj)

    @staticmethod
    def _key(obj: Any) -> tuple[str, Any]:
        if isinstance(obj, Mapping):
            meta = _metadata(obj)
            return (meta.get("namespace") or "", meta.get("name") or "")
        return ("", id(obj))

    def add(self, obj: Any) -> None:
        """Insert an object, replacing any with the same namespace and name."""
        with self._lock:
            self._objects[self._key(obj)] = obj

    def list(self) -> list:
        """Return a snapshot of all cached objects."""
        with self._lock:
            return list(self._objects.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.list())


@dataclass(kw_only=True)
class LogEntryMetadata:
    """Fields common to every log entry."""

    resource_type: str
    timestamp: datetime = field(default_factory=_now)
    name: str = ""
    namespace: str = ""
    created_timestamp: int = 0
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    created_by_kind: str = ""
    created_by_name: str = ""


def should_include_namespace(namespaces: Iterable[str] | None, namespace: str) -> bool:
    """An empty filter admits every namespace; otherwise the namespace must be listed."""
    if not namespaces:
        return True
    return namespace in namespaces


def convert_condition_status(status: Any) -> bool | None:
    """Map a condition status of "True"/"False" to a bool; anything else to None."""
    if status == "True":
        return True
    if status == "False":
        return False
    return None


def owner_reference_info(obj: Any) -> tuple[str, str]:
    """Return kind and name of the first owner reference, or two empty strings."""
    refs = _metadata(obj).get("ownerReferences") or []
    if refs:
        first = refs[0]
        return first.get("kind", "") or "", first.get("name", "") or ""
    return "", ""


def parse_timestamp(value: Any) -> datetime | None:
    """Turn an RFC 3339 string, epoch seconds or datetime into an aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, bool):
        raise TypeError(f"cannot interpret {value!r} as a timestamp")
    elif isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"invalid timestamp: {value!r}") from exc
    else:
        raise TypeError(f"cannot interpret {value!r} as a timestamp")
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def extract_metadata(obj: Any, resource_type: str) -> dict[str, Any]:
    """Build the keyword arguments for LogEntryMetadata from an object's metadata."""
    meta = _metadata(obj)
    created = parse_timestamp(meta.get("creationTimestamp"))
    kind, name = owner_reference_info(obj)
    return {
        "timestamp": _now(),
        "resource_type": resource_type,
        "name": meta.get("name") or "",
        "namespace": meta.get("namespace") or "",
        "created_timestamp": int(created.timestamp()) if created else 0,
        "labels": dict(meta.get("labels") or {}),
        "annotations": dict(meta.get("annotations") or {}),
        "created_by_kind": kind,
        "created_by_name": name,
    }


class ResourceHandler(ABC):
    """Turns cached objects of one kind into log entries."""

    kind: ClassVar[str] = ""
    namespaced: ClassVar[bool] = True

    def __init__(self, store: ObjectStore | None = None) -> None:
        self.store = store if store is not None else ObjectStore()

    def _filter_namespace(self, obj: Mapping[str, Any]) -> str | None:
        """The name used for namespace filtering, or None when not filtered."""
        if not self.namespaced:
            return None
        return _metadata(obj).get("namespace") or ""

    def collect(self, namespaces: Iterable[str] | None = None) -> list:
        """Build entries for every cached object of this kind in the given namespaces."""
        wanted = list(namespaces or [])
        list_time = _now()
        entries = []
        for obj in self.store.list():
            if not isinstance(obj, Mapping) or obj.get("kind") != self.kind:
                continue
            scope = self._filter_namespace(obj)
            if scope is not None and not should_include_namespace(wanted, scope):
                continue
            entry = self.create_log_entry(obj)
            entry.timestamp = list_time
            entries.append(entry)
        return entries

    @abstractmethod
    def create_log_entry(self, obj: Mapping[str, Any]) -> LogEntryMetadata:
        """Build the log entry for one object."""