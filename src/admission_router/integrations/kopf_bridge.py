"""
Serve admission handlers through kopf's webhook server.

kopf deserializes admission reviews and calls its handlers with keyword
arguments. The function built here turns those arguments into a
RequestContext, runs it through an AdmissionHandlerStep and reports requests
without a matching handler as failed admissions::

    step = AdmissionHandlerStep(registry, "validating")

    kopf.on.validate("example.com", "v1", "widgets", id="route-widgets")(
        make_kopf_handler(step)
    )

Handlers deny a request by raising ``kopf.AdmissionError`` and mutate it by
updating ``context.assigns["patch"]``.
"""

import logging
from typing import Any

from admission_router.errors import DispatchError
from admission_router.models.context import RequestContext
from admission_router.models.resource import ResourceIdentifier
from admission_router.pipeline import AdmissionHandlerStep

logger = logging.getLogger(__name__)


def make_kopf_handler(step: AdmissionHandlerStep):
    """
    Build a kopf admission handler dispatching through ``step``.

    Args:
        step: Step configured for the webhook type the handler is mounted as

    Returns:
        Async callable accepting kopf's admission handler kwargs
    """

    async def admission_handler(
        *,
        resource: Any,
        body: Any = None,
        subresource: str | None = None,
        patch: Any = None,
        warnings: list[str] | None = None,
        operation: str | None = None,
        dryrun: bool = False,
        userinfo: Any = None,
        uid: str | None = None,
        **kwargs,
    ) -> None:
        context = RequestContext(
            webhook_type=step.webhook_type,
            resource=ResourceIdentifier(
                group=resource.group or "",
                version=resource.version,
                plural=resource.plural,
            ),
            subresource=subresource or None,
            payload=body,
            assigns={
                "patch": patch,
                "warnings": warnings if warnings is not None else [],
                "operation": operation,
                "dryrun": dryrun,
                "userinfo": userinfo,
                "uid": uid,
            },
        )

        try:
            await step.call_async(context)
        except DispatchError as e:
            logger.error(f"Rejecting admission request: {e.message}")
            raise e.as_admission_error() from e

    return admission_handler
