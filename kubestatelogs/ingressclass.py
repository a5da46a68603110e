"""Log entries for IngressClass objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from kubestatelogs.core import LogEntryMetadata, ResourceHandler, extract_metadata

DEFAULT_CLASS_ANNOTATION = "ingressclass.kubernetes.io/is-default-class"


@dataclass(kw_only=True)
class IngressClassData(LogEntryMetadata):
    """State of one ingress class."""

    controller: str = ""
    is_default: bool = False


class IngressClassHandler(ResourceHandler):
    """Builds log entries for the cluster-scoped IngressClass kind."""

    kind = "IngressClass"
    namespaced = False

    def create_log_entry(self, obj: Mapping[str, Any]) -> IngressClassData:
        meta = extract_metadata(obj, "ingressclass")
        spec = obj.get("spec") or {}
        return IngressClassData(
            **meta,
            controller=spec.get("controller") or "",
            is_default=DEFAULT_CLASS_ANNOTATION in meta["annotations"],
        )