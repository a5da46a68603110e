"""Log entries for Node objects."""

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

ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"

# Kubernetes reports no phase on most nodes; the log shows "Unknown" then.
DEFAULT_PHASE = "Unknown"


@dataclass(kw_only=True)
class TaintData:
    """One taint placed on a node."""

    key: str = ""
    value: str = ""
    effect: str = ""


@dataclass(kw_only=True)
class NodeData(LogEntryMetadata):
    """State of one cluster node."""

    architecture: str = ""
    operating_system: str = ""
    kernel_version: str = ""
    kubelet_version: str = ""
    kube_proxy_version: str = ""
    container_runtime_version: str = ""
    capacity: dict[str, str] = field(default_factory=dict)
    allocatable: dict[str, str] = field(default_factory=dict)
    ready: bool | None = None
    phase: str = DEFAULT_PHASE
    conditions: dict[str, bool | None] = field(default_factory=dict)
    internal_ip: str = ""
    external_ip: str = ""
    hostname: str = ""
    unschedulable: bool = False
    role: str = ""
    taints: list[TaintData] = field(default_factory=list)
    deletion_timestamp: datetime | None = None


def _resource_map(values: Any) -> dict[str, str]:
    return {str(key): str(value) for key, value in (values or {}).items()}


def _addresses(addresses: Any) -> tuple[str, str, str]:
    """Return internal IP, external IP and hostname; the last of each type wins."""
    found = {"InternalIP": "", "ExternalIP": "", "Hostname": ""}
    for address in addresses or []:
        kind = address.get("type")
        if kind in found:
            found[kind] = address.get("address") or ""
    return found["InternalIP"], found["ExternalIP"], found["Hostname"]


def _role(labels: Mapping[str, Any]) -> str:
    for key in labels:
        if key.startswith(ROLE_LABEL_PREFIX):
            role = key[len(ROLE_LABEL_PREFIX):]
            if role:
                return role
    return ""


class NodeHandler(ResourceHandler):
    """Builds log entries for the cluster-scoped Node kind."""

    kind = "Node"
    namespaced = False

    def create_log_entry(self, obj: Mapping[str, Any]) -> NodeData:
        meta = extract_metadata(obj, "node")
        spec = obj.get("spec") or {}
        status = obj.get("status") or {}
        info = status.get("nodeInfo") or {}
        internal_ip, external_ip, hostname = _addresses(status.get("addresses"))

        ready = None
        conditions: dict[str, bool | None] = {}
        for condition in status.get("conditions") or []:
            value = convert_condition_status(condition.get("status"))
            ctype = condition.get("type") or ""
            if ctype == "Ready":
                ready = value
            else:
                conditions[ctype] = value

        taints = [
            TaintData(
                key=taint.get("key") or "",
                value=taint.get("value") or "",
                effect=taint.get("effect") or "",
            )
            for taint in spec.get("taints") or []
        ]
        metadata = obj.get("metadata") or {}

        return NodeData(
            **meta,
            architecture=info.get("architecture") or "",
            operating_system=info.get("operatingSystem") or "",
            kernel_version=info.get("kernelVersion") or "",
            kubelet_version=info.get("kubeletVersion") or "",
            kube_proxy_version=info.get("kubeProxyVersion") or "",
            container_runtime_version=info.get("containerRuntimeVersion") or "",
            capacity=_resource_map(status.get("capacity")),
            allocatable=_resource_map(status.get("allocatable")),
            ready=ready,
            phase=status.get("phase") or DEFAULT_PHASE,
            conditions=conditions,
            internal_ip=internal_ip,
            external_ip=external_ip,
            hostname=hostname,
            unschedulable=bool(spec.get("unschedulable")),
            role=_role(meta["labels"]),
            taints=taints,
            deletion_timestamp=parse_timestamp(metadata.get("deletionTimestamp")),
        )