"""
Data models for admission request routing.

This module contains the resource identifier, match pattern and request
context types shared by the registry and the pipeline step.
"""

from .context import HANDLER_ASSIGNS_KEY, RequestContext
from .pattern import Pattern, WebhookType, build_pattern
from .resource import ResourceIdentifier, parse_resource

__all__ = [
    "ResourceIdentifier",
    "parse_resource",
    "WebhookType",
    "Pattern",
    "build_pattern",
    "RequestContext",
    "HANDLER_ASSIGNS_KEY",
]
