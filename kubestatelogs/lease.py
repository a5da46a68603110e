"""Log entries for Lease objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from kubestatelogs.core import (
    LogEntryMetadata,
    ResourceHandler,
    extract_metadata,
    parse_timestamp,
)


@dataclass(kw_only=True)
class LeaseData(LogEntryMetadata):
    """State of one coordination lease."""

    holder_identity: str = ""
    lease_duration_seconds: int = 0
    renew_time: datetime | None = None
    acquire_time: datetime | None = None
    lease_transitions: int = 0


class LeaseHandler(ResourceHandler):
    """Builds log entries for the Lease kind."""

    kind = "Lease"

    def create_log_entry(self, obj: Mapping[str, Any]) -> LeaseData:
        spec = obj.get("spec") or {}
        return LeaseData(
            **extract_metadata(obj, "lease"),
            holder_identity=spec.get("holderIdentity") or "",
            lease_duration_seconds=spec.get("leaseDurationSeconds") or 0,
            renew_time=parse_timestamp(spec.get("renewTime")),
            acquire_time=parse_timestamp(spec.get("acquireTime")),
            lease_transitions=spec.get("leaseTransitions") or 0,
        )