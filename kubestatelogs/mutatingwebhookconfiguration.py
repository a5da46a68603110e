"""Log entries for MutatingWebhookConfiguration objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from kubestatelogs.core import LogEntryMetadata, ResourceHandler, extract_metadata


@dataclass(kw_only=True)
class WebhookServiceData:
    """The in-cluster service a webhook calls."""

    namespace: str = ""
    name: str = ""
    path: str = ""
    port: int = 0


@dataclass(kw_only=True)
class WebhookClientConfigData:
    """How the API server reaches a webhook."""

    url: str = ""
    service: WebhookServiceData | None = None
    ca_bundle: bytes | str | None = None


@dataclass(kw_only=True)
class WebhookRuleData:
    """One resource rule a webhook matches."""

    api_groups: list[str] = field(default_factory=list)
    api_versions: list[str] = field(default_factory=list)
    resources: list[str] = field(default_factory=list)
    scope: str = ""


@dataclass(kw_only=True)
class WebhookData:
    """One webhook of a configuration."""

    name: str = ""
    client_config: WebhookClientConfigData = field(default_factory=WebhookClientConfigData)
    rules: list[WebhookRuleData] = field(default_factory=list)
    failure_policy: str = ""
    match_policy: str = ""
    namespace_selector: dict[str, str] | None = None
    object_selector: dict[str, str] | None = None
    side_effects: str = ""
    timeout_seconds: int | None = None
    admission_review_versions: list[str] = field(default_factory=list)


@dataclass(kw_only=True)
class MutatingWebhookConfigurationData(LogEntryMetadata):
    """State of one mutating webhook configuration."""

    webhooks: list[WebhookData] = field(default_factory=list)


def _match_labels(selector: Any) -> dict[str, str] | None:
    if selector is None:
        return None
    labels = selector.get("matchLabels")
    return dict(labels) if labels is not None else None


def _client_config(config: Mapping[str, Any]) -> WebhookClientConfigData:
    service = config.get("service")
    service_data = None
    if service is not None:
        service_data = WebhookServiceData(
            namespace=service.get("namespace") or "",
            name=service.get("name") or "",
            path=service.get("path") or "",
            port=service.get("port") or 0,
        )
    return WebhookClientConfigData(
        url=config.get("url") or "",
        service=service_data,
        ca_bundle=config.get("caBundle"),
    )


def _rule(rule: Mapping[str, Any]) -> WebhookRuleData:
    return WebhookRuleData(
        api_groups=list(rule.get("apiGroups") or []),
        api_versions=list(rule.get("apiVersions") or []),
        resources=list(rule.get("resources") or []),
        scope=rule.get("scope") or "",
    )


def _webhook(hook: Mapping[str, Any]) -> WebhookData:
    return WebhookData(
        name=hook.get("name") or "",
        client_config=_client_config(hook.get("clientConfig") or {}),
        rules=[_rule(rule) for rule in hook.get("rules") or []],
        failure_policy=hook.get("failurePolicy") or "",
        match_policy=hook.get("matchPolicy") or "",
        namespace_selector=_match_labels(hook.get("namespaceSelector")),
        object_selector=_match_labels(hook.get("objectSelector")),
        side_effects=hook.get("sideEffects") or "",
        timeout_seconds=hook.get("timeoutSeconds"),
        admission_review_versions=list(hook.get("admissionReviewVersions") or []),
    )


class MutatingWebhookConfigurationHandler(ResourceHandler):
    """Builds log entries for the cluster-scoped MutatingWebhookConfiguration kind."""

    kind = "MutatingWebhookConfiguration"
    namespaced = False

    def create_log_entry(self, obj: Mapping[str, Any]) -> MutatingWebhookConfigurationData:
        return MutatingWebhookConfigurationData(
            **extract_metadata(obj, "mutatingwebhookconfiguration"),
            webhooks=[_webhook(hook) for hook in obj.get("webhooks") or []],
        )