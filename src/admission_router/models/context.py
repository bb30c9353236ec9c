"""
Per-request admission context.

The transport layer creates one RequestContext per incoming admission review
and hands it to the dispatcher. Handlers receive the context and return it,
possibly modified, or a replacement.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from admission_router.models.pattern import WebhookType
from admission_router.models.resource import ResourceIdentifier

# Key under which the pipeline step records its init options
HANDLER_ASSIGNS_KEY = "admission_control_handler"


class RequestContext(BaseModel):
    """Admission request as seen by the dispatcher and handlers."""

    webhook_type: WebhookType = Field(..., description="mutating or validating")
    resource: ResourceIdentifier = Field(..., description="Requested resource")
    subresource: str | None = Field(
        None, description="Requested subresource, None for the main resource"
    )
    payload: Any = Field(None, description="Admission request payload")
    assigns: dict[str, Any] = Field(
        default_factory=dict, description="Values shared between pipeline steps"
    )

    @classmethod
    def from_admission_request(
        cls, webhook_type: WebhookType | str, request: Mapping[str, Any]
    ) -> "RequestContext":
        """
        Build a context from a deserialized AdmissionReview request.

        Args:
            webhook_type: Type of webhook endpoint that received the review
            request: The review's "request" object

        Returns:
            A context whose payload is the request itself
        """
        resource = request.get("resource") or {}
        return cls(
            webhook_type=webhook_type,
            resource=ResourceIdentifier(
                group=resource.get("group", ""),
                version=resource.get("version", ""),
                plural=resource.get("resource", ""),
            ),
            subresource=request.get("subResource") or None,
            payload=dict(request),
        )
