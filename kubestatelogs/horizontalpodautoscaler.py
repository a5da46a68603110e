"""Log entries for HorizontalPodAutoscaler objects."""

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

RESOURCE_METRIC_TYPE = "Resource"
UTILIZATION_TARGET_TYPE = "Utilization"

# Kubernetes uses one replica when spec.minReplicas is not set.
DEFAULT_MIN_REPLICAS = 1


@dataclass(kw_only=True)
class HorizontalPodAutoscalerData(LogEntryMetadata):
    """State of one horizontal pod autoscaler."""

    min_replicas: int = DEFAULT_MIN_REPLICAS
    max_replicas: int = 0
    target_cpu_utilization_percentage: int | None = None
    target_memory_utilization_percentage: int | None = None
    current_replicas: int = 0
    desired_replicas: int = 0
    current_cpu_utilization_percentage: int | None = None
    current_memory_utilization_percentage: int | None = None
    condition_able_to_scale: bool | None = None
    condition_scaling_active: bool | None = None
    condition_scaling_limited: bool | None = None
    scale_target_ref: str = ""
    scale_target_kind: str = ""
    conditions: dict[str, bool | None] = field(default_factory=dict)


def _resource_metrics(metrics: Any):
    """Yield (resource name, resource block) for every metric of type Resource."""
    for metric in metrics or []:
        if metric.get("type") != RESOURCE_METRIC_TYPE:
            continue
        resource = metric.get("resource") or {}
        yield resource.get("name") or "", resource


class HorizontalPodAutoscalerHandler(ResourceHandler):
    """Builds log entries for the HorizontalPodAutoscaler kind."""

    kind = "HorizontalPodAutoscaler"

    def create_log_entry(self, obj: Mapping[str, Any]) -> HorizontalPodAutoscalerData:
        spec = obj.get("spec") or {}
        status = obj.get("status") or {}

        targets: dict[str, int | None] = {}
        for name, resource in _resource_metrics(spec.get("metrics")):
            target = resource.get("target") or {}
            if name in ("cpu", "memory") and target.get("type") == UTILIZATION_TARGET_TYPE:
                targets[name] = target.get("averageUtilization")

        currents: dict[str, int | None] = {}
        for name, resource in _resource_metrics(status.get("currentMetrics")):
            if name in ("cpu", "memory"):
                currents[name] = (resource.get("current") or {}).get("averageUtilization")

        able_to_scale = scaling_active = scaling_limited = None
        conditions: dict[str, bool | None] = {}
        for condition in status.get("conditions") or []:
            value = convert_condition_status(condition.get("status"))
            ctype = condition.get("type") or ""
            if ctype == "AbleToScale":
                able_to_scale = value
            elif ctype == "ScalingActive":
                scaling_active = value
            elif ctype == "ScalingLimited":
                scaling_limited = value
            else:
                conditions[ctype] = value

        min_replicas = spec.get("minReplicas")
        target_ref = spec.get("scaleTargetRef") or {}
        target_kind = target_ref.get("kind") or ""
        target_name = target_ref.get("name") or ""

        return HorizontalPodAutoscalerData(
            **extract_metadata(obj, "horizontalpodautoscaler"),
            min_replicas=DEFAULT_MIN_REPLICAS if min_replicas is None else min_replicas,
            max_replicas=spec.get("maxReplicas") or 0,
            target_cpu_utilization_percentage=targets.get("cpu"),
            target_memory_utilization_percentage=targets.get("memory"),
            current_replicas=status.get("currentReplicas") or 0,
            desired_replicas=status.get("desiredReplicas") or 0,
            current_cpu_utilization_percentage=currents.get("cpu"),
            current_memory_utilization_percentage=currents.get("memory"),
            condition_able_to_scale=able_to_scale,
            condition_scaling_active=scaling_active,
            condition_scaling_limited=scaling_limited,
            scale_target_ref=f"{target_kind}/{target_name}",
            scale_target_kind=target_kind,
            conditions=conditions,
        )