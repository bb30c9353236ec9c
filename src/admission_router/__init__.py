"""
Admission Router - first-match dispatch for Kubernetes admission webhooks.

Handlers are declared against a webhook type, a "group/version/plural"
resource and an optional subresource. At request time each admission review
goes to the first declared handler whose pattern matches.
"""

from .errors import ConfigError, DispatchError, ParseError, RegistryPhaseError
from .models import (
    Pattern,
    RequestContext,
    ResourceIdentifier,
    WebhookType,
    build_pattern,
    parse_resource,
)
from .observability import configure_logging
from .pipeline import AdmissionHandlerStep
from .registry import HandlerEntry, HandlerRegistry, RegistryPhase

__version__ = "0.1.0"

__all__ = [
    "AdmissionHandlerStep",
    "ConfigError",
    "DispatchError",
    "HandlerEntry",
    "HandlerRegistry",
    "ParseError",
    "Pattern",
    "RegistryPhase",
    "RegistryPhaseError",
    "RequestContext",
    "ResourceIdentifier",
    "WebhookType",
    "build_pattern",
    "configure_logging",
    "parse_resource",
]
