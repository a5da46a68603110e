"""Log entries for Namespace objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from kubestatelogs.core import (
    LogEntryMetadata,
    ResourceHandler,
    convert_condition_status,
    extract_metadata,
    parse_timestamp,
)


@dataclass(kw_only=True)
class NamespaceData(LogEntryMetadata):
    """State of one namespace."""

    phase: str = ""
    condition_active: bool | None = None
    condition_terminating: bool | None = None
    conditions: dict[str, bool | None] = field(default_factory=dict)
    deletion_timestamp: datetime | None = None


class NamespaceHandler(ResourceHandler):
    """Builds log entries for the Namespace kind, filtered by the namespace's own name."""

    kind = "Namespace"

    def _filter_namespace(self, obj: Mapping[str, Any]) -> str | None:
        return (obj.get("metadata") or {}).get("name") or ""

    def create_log_entry(self, obj: Mapping[str, Any]) -> NamespaceData:
        status = obj.get("status") or {}
        active = terminating = None
        conditions: dict[str, bool | None] = {}
        for condition in status.get("conditions") or []:
            value = convert_condition_status(condition.get("status"))
            ctype = condition.get("type") or ""
            if ctype == "Active":
                active = value
            elif ctype == "Terminating":
                terminating = value
            else:
                conditions[ctype] = value
        metadata = obj.get("metadata") or {}
        return NamespaceData(
            **extract_metadata(obj, "namespace"),
            phase=status.get("phase") or "",
            condition_active=active,
            condition_terminating=terminating,
            conditions=conditions,
            deletion_timestamp=parse_timestamp(metadata.get("deletionTimestamp")),
        )