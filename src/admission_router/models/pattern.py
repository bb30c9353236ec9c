"""
Match patterns for admission handlers.

A pattern combines the webhook type, the resource and an optional
subresource a handler was declared for. Patterns are built once during setup
and compared against every incoming request by the dispatcher.
"""

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, ValidationError

from admission_router.errors import ConfigError, ParseError
from admission_router.models.resource import ResourceIdentifier, parse_resource

if TYPE_CHECKING:
    from admission_router.models.context import RequestContext

RESOURCE_FORMAT_HINT = (
    "resource has to be given in the form group/version/plural or version/plural, "
    "e.g. example.com/v1/someresources or v1/pods"
)


class WebhookType(str, Enum):
    """Kind of admission webhook a handler serves."""

    MUTATING = "mutating"
    VALIDATING = "validating"


class Pattern(BaseModel):
    """Immutable match pattern for one registered handler."""

    model_config = {"frozen": True}

    webhook_type: WebhookType = Field(..., description="mutating or validating")
    resource: ResourceIdentifier = Field(..., description="Resource to match")
    subresource: str | None = Field(
        None, description="Exact subresource to match, None matches any"
    )

    def matches(self, context: "RequestContext") -> bool:
        """
        Check whether a request context falls under this pattern.

        Resources are compared as stored, without re-normalizing here.
        ResourceIdentifier lower-cases its plural on construction, so a
        request built with "Pods" matches a pattern declared for "pods".
        """
        if self.webhook_type != context.webhook_type:
            return False
        if self.resource != context.resource:
            return False
        # A pattern without subresource matches requests with or without one
        if self.subresource is None:
            return True
        return self.subresource == context.subresource

    def __str__(self) -> str:
        target = f"{self.webhook_type.value}/{self.resource}"
        if self.subresource is not None:
            return f"{target}/{self.subresource}"
        return target


def build_pattern(
    webhook_type: WebhookType | str,
    resource: str,
    subresource: str | None = None,
) -> Pattern:
    """
    Build the match pattern for a handler declaration.

    Args:
        webhook_type: mutating or validating
        resource: "group/version/plural" or "version/plural"
        subresource: Optional subresource; omitted means any subresource

    Returns:
        Immutable pattern

    Raises:
        ConfigError: If the resource string or webhook type is malformed
    """
    try:
        gvr = parse_resource(resource)
    except ParseError as e:
        raise ConfigError(
            f"invalid resource '{resource}': {RESOURCE_FORMAT_HINT}",
            value=resource,
            cause=e,
        ) from e

    try:
        return Pattern(webhook_type=webhook_type, resource=gvr, subresource=subresource)
    except ValidationError as e:
        raise ConfigError(
            f"invalid webhook type '{webhook_type}' for resource '{resource}': "
            "expected mutating or validating",
            value=str(webhook_type),
            cause=e,
        ) from e
