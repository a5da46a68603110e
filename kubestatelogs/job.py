"""Log entries for Job objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from kubestatelogs.core import (
    LogEntryMetadata,
    ResourceHandler,
    convert_condition_status,
    extract_metadata,
)

# Kubernetes retries a failing job six times when spec.backoffLimit is not set.
DEFAULT_BACKOFF_LIMIT = 6


@dataclass(kw_only=True)
class JobData(LogEntryMetadata):
    """State of one batch job."""

    active_pods: int = 0
    succeeded_pods: int = 0
    failed_pods: int = 0
    completions: int | None = None
    parallelism: int | None = None
    backoff_limit: int = DEFAULT_BACKOFF_LIMIT
    active_deadline_seconds: int | None = None
    condition_complete: bool | None = None
    condition_failed: bool | None = None
    job_type: str = "Job"
    suspend: bool | None = None
    conditions: dict[str, bool | None] = field(default_factory=dict)


class JobHandler(ResourceHandler):
    """Builds log entries for the Job kind."""

    kind = "Job"

    def create_log_entry(self, obj: Mapping[str, Any]) -> JobData:
        spec = obj.get("spec") or {}
        status = obj.get("status") or {}
        owners = (obj.get("metadata") or {}).get("ownerReferences") or []
        job_type = (owners[0].get("kind") or "") if owners else "Job"

        complete = failed = None
        conditions: dict[str, bool | None] = {}
        for condition in status.get("conditions") or []:
            value = convert_condition_status(condition.get("status"))
            ctype = condition.get("type") or ""
            if ctype == "Complete":
                complete = value
            elif ctype == "Failed":
                failed = value
            else:
                conditions[ctype] = value

        backoff_limit = spec.get("backoffLimit")
        return JobData(
            **extract_metadata(obj, "job"),
            active_pods=status.get("active") or 0,
            succeeded_pods=status.get("succeeded") or 0,
            failed_pods=status.get("failed") or 0,
            completions=spec.get("completions"),
            parallelism=spec.get("parallelism"),
            backoff_limit=DEFAULT_BACKOFF_LIMIT if backoff_limit is None else backoff_limit,
            active_deadline_seconds=spec.get("activeDeadlineSeconds"),
            condition_complete=complete,
            condition_failed=failed,
            job_type=job_type,
            suspend=spec.get("suspend"),
            conditions=conditions,
        )