"""Log entries for Ingress objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from kubestatelogs.core import LogEntryMetadata, ResourceHandler, extract_metadata


@dataclass(kw_only=True)
class LoadBalancerIngressData:
    """One load balancer endpoint reported for an ingress."""

    ip: str = ""
    hostname: str = ""


@dataclass(kw_only=True)
class IngressPathData:
    """One HTTP path routed by an ingress rule."""

    path: str = ""
    path_type: str = ""
    service: str = ""
    port: str = ""


@dataclass(kw_only=True)
class IngressRuleData:
    """One host rule of an ingress."""

    host: str = ""
    paths: list[IngressPathData] = field(default_factory=list)


@dataclass(kw_only=True)
class IngressTLSData:
    """One TLS block of an ingress."""

    hosts: list[str] = field(default_factory=list)
    secret_name: str = ""


@dataclass(kw_only=True)
class IngressData(LogEntryMetadata):
    """State of one ingress."""

    ingress_class_name: str | None = None
    load_balancer_ip: str = ""
    load_balancer_ingress: list[LoadBalancerIngressData] = field(default_factory=list)
    rules: list[IngressRuleData] = field(default_factory=list)
    tls: list[IngressTLSData] = field(default_factory=list)
    condition_load_balancer_ready: bool | None = None
    conditions: dict[str, bool | None] = field(default_factory=dict)


def _path(entry: Mapping[str, Any]) -> IngressPathData:
    service = (entry.get("backend") or {}).get("service")
    port = ""
    name = ""
    if service is not None:
        name = service.get("name") or ""
        port = str((service.get("port") or {}).get("number") or 0)
    return IngressPathData(
        path=entry.get("path") or "",
        path_type=entry.get("pathType") or "",
        service=name,
        port=port,
    )


def _rule(rule: Mapping[str, Any]) -> IngressRuleData:
    http = rule.get("http")
    paths = [_path(entry) for entry in (http or {}).get("paths") or []]
    return IngressRuleData(host=rule.get("host") or "", paths=paths)


class IngressHandler(ResourceHandler):
    """Builds log entries for the Ingress kind."""

    kind = "Ingress"

    def create_log_entry(self, obj: Mapping[str, Any]) -> IngressData:
        spec = obj.get("spec") or {}
        status = obj.get("status") or {}
        lb_entries = (status.get("loadBalancer") or {}).get("ingress") or []

        load_balancer_ingress = [
            LoadBalancerIngressData(ip=lb.get("ip") or "", hostname=lb.get("hostname") or "")
            for lb in lb_entries
        ]
        tls = [
            IngressTLSData(
                hosts=list(item.get("hosts") or []),
                secret_name=item.get("secretName") or "",
            )
            for item in spec.get("tls") or []
        ]

        return IngressData(
            **extract_metadata(obj, "ingress"),
            ingress_class_name=spec.get("ingressClassName"),
            load_balancer_ip="",
            load_balancer_ingress=load_balancer_ingress,
            rules=[_rule(rule) for rule in spec.get("rules") or []],
            tls=tls,
            condition_load_balancer_ready=True if lb_entries else None,
            conditions={},
        )