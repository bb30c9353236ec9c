"""
Admission handler pipeline step.

The step is what a webhook server mounts for one admission endpoint. It is
initialized with the webhook type served by that endpoint, copies it into
each request context, and dispatches the request through the handler
registry. Requests that match no handler either fail with a DispatchError or,
when a fallback step is configured, are passed to the fallback.
"""

import inspect
import logging
import time
from collections.abc import Mapping

from admission_router.errors import ConfigError, DispatchError
from admission_router.models.context import HANDLER_ASSIGNS_KEY, RequestContext
from admission_router.models.pattern import WebhookType
from admission_router.observability.logging import (
    generate_correlation_id,
    set_correlation_id,
)
from admission_router.observability.metrics import (
    RESULT_ERROR,
    RESULT_HANDLED,
    RESULT_NO_MATCH,
    MetricsCollector,
)
from admission_router.registry import Handler, HandlerRegistry
from admission_router.settings import settings

logger = logging.getLogger(__name__)


class AdmissionHandlerStep:
    """Pipeline step dispatching admission requests of one webhook type."""

    def __init__(
        self,
        registry: HandlerRegistry,
        webhook_type: WebhookType | str,
        fallback: Handler | None = None,
        metrics: MetricsCollector | None = None,
        no_match_code: int | None = None,
    ):
        """
        Initialize the step and put the registry into serving mode.

        Args:
            registry: Registry holding every declared handler
            webhook_type: Webhook type served by this step's endpoint
            fallback: Step receiving requests no handler matches
            metrics: Metrics collector, defaults to one following settings
            no_match_code: Admission status code for unmatched requests

        Raises:
            ConfigError: If webhook_type is not mutating or validating
        """
        try:
            self.webhook_type = WebhookType(webhook_type)
        except ValueError as e:
            raise ConfigError(
                f"invalid webhook type '{webhook_type}': expected mutating or validating",
                value=str(webhook_type),
                cause=e,
            ) from e

        self.registry = registry
        self.fallback = fallback
        self.metrics = metrics or MetricsCollector(enabled=settings.metrics_enabled)
        self.no_match_code = (
            no_match_code
            if no_match_code is not None
            else settings.dispatch_no_match_code
        )

        registry.freeze()
        self.metrics.record_registered_handlers(
            [entry.pattern.webhook_type.value for entry in registry.entries]
        )

    def prepare(self, context: RequestContext) -> RequestContext:
        """Stamp this step's webhook type and options onto the context."""
        context.webhook_type = self.webhook_type
        context.assigns[HANDLER_ASSIGNS_KEY] = {
            "webhook_type": self.webhook_type.value
        }
        set_correlation_id(_request_uid(context) or generate_correlation_id())
        return context

    def __call__(self, context: RequestContext) -> RequestContext:
        """
        Dispatch a request synchronously.

        Coroutine handlers and an ``async def`` fallback need ``call_async``.

        Raises:
            ConfigError: If an ``async def`` fallback is configured
            DispatchError: If no handler matches and no fallback is configured
        """
        context = self.prepare(context)
        start = time.perf_counter()
        try:
            entry = self.registry.resolve(context)
        except DispatchError as e:
            self._record(context, RESULT_NO_MATCH, start)
            if inspect.iscoroutinefunction(self.fallback):
                raise ConfigError(
                    "async fallback step requires call_async",
                    user_action="Serve this step with call_async",
                    cause=e,
                ) from e
            return self._no_match(context, e)

        try:
            result = self.registry.invoke(entry, context)
        except Exception:
            self._record(context, RESULT_ERROR, start)
            raise

        self._record(context, RESULT_HANDLED, start)
        return result

    async def call_async(self, context: RequestContext) -> RequestContext:
        """Asynchronous variant of calling the step, for async handlers."""
        context = self.prepare(context)
        start = time.perf_counter()
        try:
            entry = self.registry.resolve(context)
        except DispatchError as e:
            self._record(context, RESULT_NO_MATCH, start)
            result = self._no_match(context, e)
            if inspect.isawaitable(result):
                result = await result
            return result

        try:
            result = await self.registry.invoke_async(entry, context)
        except Exception:
            self._record(context, RESULT_ERROR, start)
            raise

        self._record(context, RESULT_HANDLED, start)
        return result

    def _no_match(self, context: RequestContext, error: DispatchError):
        error.code = self.no_match_code
        if self.fallback is None:
            logger.warning(
                str(error),
                extra={
                    "webhook_type": self.webhook_type.value,
                    "resource": str(context.resource),
                    "subresource": context.subresource,
                    "error_type": type(error).__name__,
                },
            )
            raise error

        logger.debug(f"{error}, passing request to fallback step")
        return self.fallback(context)

    def _record(self, context: RequestContext, result: str, start: float) -> None:
        duration = time.perf_counter() - start
        resource = str(context.resource)
        self.metrics.record_dispatch(
            webhook_type=self.webhook_type.value,
            resource=resource,
            result=result,
            duration=duration,
        )
        logger.log(
            settings.dispatch_log_level_number,
            f"Admission request {self.webhook_type.value} {resource} {result}",
            extra={
                "webhook_type": self.webhook_type.value,
                "resource": resource,
                "subresource": context.subresource,
                "operation": result,
                "duration": duration,
            },
        )


def _request_uid(context: RequestContext) -> str:
    if context.assigns.get("uid"):
        return str(context.assigns["uid"])
    if isinstance(context.payload, Mapping):
        return str(context.payload.get("uid") or "")
    return ""
