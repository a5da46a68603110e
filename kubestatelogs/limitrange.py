"""Log entries for LimitRange objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from kubestatelogs.core import LogEntryMetadata, ResourceHandler, extract_metadata


@dataclass(kw_only=True)
class LimitRangeItem:
    """One limit of a limit range, with quantities as strings."""

    type: str = ""
    resource_type: str = ""
    resource_name: str = ""
    min: dict[str, str] = field(default_factory=dict)
    max: dict[str, str] = field(default_factory=dict)
    default: dict[str, str] = field(default_factory=dict)
    default_request: dict[str, str] = field(default_factory=dict)
    max_limit_request_ratio: dict[str, str] = field(default_factory=dict)


@dataclass(kw_only=True)
class LimitRangeData(LogEntryMetadata):
    """State of one limit range."""

    limits: list[LimitRangeItem] = field(default_factory=list)


def _quantities(values: Any) -> dict[str, str]:
    return {str(key): str(value) for key, value in (values or {}).items()}


def _item(limit: Mapping[str, Any]) -> LimitRangeItem:
    minimum = _quantities(limit.get("min"))
    first = next(iter(minimum), "")
    return LimitRangeItem(
        type=limit.get("type") or "",
        resource_type=first,
        resource_name=first,
        min=minimum,
        max=_quantities(limit.get("max")),
        default=_quantities(limit.get("default")),
        default_request=_quantities(limit.get("defaultRequest")),
        max_limit_request_ratio=_quantities(limit.get("maxLimitRequestRatio")),
    )


class LimitRangeHandler(ResourceHandler):
    """Builds log entries for the LimitRange kind."""

    kind = "LimitRange"

    def create_log_entry(self, obj: Mapping[str, Any]) -> LimitRangeData:
        spec = obj.get("spec") or {}
        return LimitRangeData(
            **extract_metadata(obj, "limitrange"),
            limits=[_item(limit) for limit in spec.get("limits") or []],
        )