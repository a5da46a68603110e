"""Log entries for NetworkPolicy objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from kubestatelogs.core import LogEntryMetadata, ResourceHandler, extract_metadata


@dataclass(kw_only=True)
class NetworkPolicyPort:
    """One port range of a policy rule; a named port is reported as 0."""

    protocol: str = ""
    port: int = 0
    end_port: int = 0


@dataclass(kw_only=True)
class NetworkPolicyPeer:
    """One peer of a policy rule."""

    pod_selector: dict[str, str] | None = None
    namespace_selector: dict[str, str] | None = None
    ip_block: dict[str, Any] | None = None


@dataclass(kw_only=True)
class NetworkPolicyIngressRule:
    """One ingress rule."""

    ports: list[NetworkPolicyPort] = field(default_factory=list)
    from_: list[NetworkPolicyPeer] = field(default_factory=list)


@dataclass(kw_only=True)
class NetworkPolicyEgressRule:
    """One egress rule."""

    ports: list[NetworkPolicyPort] = field(default_factory=list)
    to: list[NetworkPolicyPeer] = field(default_factory=list)


@dataclass(kw_only=True)
class NetworkPolicyData(LogEntryMetadata):
    """State of one network policy."""

    policy_types: list[str] = field(default_factory=list)
    ingress_rules: list[NetworkPolicyIngressRule] = field(default_factory=list)
    egress_rules: list[NetworkPolicyEgressRule] = field(default_factory=list)


def _port(port: Mapping[str, Any]) -> NetworkPolicyPort:
    value = port.get("port")
    number = value if isinstance(value, int) and not isinstance(value, bool) else 0
    return NetworkPolicyPort(
        protocol=port.get("protocol") or "",
        port=number,
        end_port=port.get("endPort") or 0,
    )


def _match_labels(selector: Any) -> dict[str, str] | None:
    if selector is None:
        return None
    labels = selector.get("matchLabels")
    return dict(labels) if labels is not None else None


def _peer(peer: Mapping[str, Any]) -> NetworkPolicyPeer:
    block = peer.get("ipBlock")
    ip_block = None
    if block is not None:
        ip_block = {"cidr": block.get("cidr") or "", "except": block.get("except")}
    return NetworkPolicyPeer(
        pod_selector=_match_labels(peer.get("podSelector")),
        namespace_selector=_match_labels(peer.get("namespaceSelector")),
        ip_block=ip_block,
    )


def _ports(ports: Any) -> list[NetworkPolicyPort]:
    return [_port(port) for port in ports or []]


def _peers(peers: Any) -> list[NetworkPolicyPeer]:
    return [_peer(peer) for peer in peers or []]


class NetworkPolicyHandler(ResourceHandler):
    """Builds log entries for the NetworkPolicy kind."""

    kind = "NetworkPolicy"

    def create_log_entry(self, obj: Mapping[str, Any]) -> NetworkPolicyData:
        spec = obj.get("spec") or {}
        return NetworkPolicyData(
            **extract_metadata(obj, "networkpolicy"),
            policy_types=[str(kind) for kind in spec.get("policyTypes") or []],
            ingress_rules=[
                NetworkPolicyIngressRule(ports=_ports(rule.get("ports")), from_=_peers(rule.get("from")))
                for rule in spec.get("ingress") or []
            ],
            egress_rules=[
                NetworkPolicyEgressRule(ports=_ports(rule.get("ports")), to=_peers(rule.get("to")))
                for rule in spec.get("egress") or []
            ],
        )