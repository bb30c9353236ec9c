"""
Handler registry and dispatcher for admission requests.

Handlers are registered during setup, in declaration order, against a match
pattern built from a webhook type, a resource string and an optional
subresource. Once setup is finished the registry is frozen and serves
requests read-only: each request goes to the first registered handler whose
pattern matches, regardless of how specific later patterns are.

Example::

    registry = HandlerRegistry()

    @registry.mutate("v1/pods")
    def default_pod_labels(context):
        ...
        return context

    @registry.validate("example.com/v1/widgets", "scale")
    async def check_widget_scale(context):
        return context

    registry.freeze()
    result = registry.dispatch(context)
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from admission_router.errors import DispatchError, RegistryPhaseError
from admission_router.models.context import RequestContext
from admission_router.models.pattern import Pattern, WebhookType, build_pattern

logger = logging.getLogger(__name__)

Handler = Callable[[RequestContext], RequestContext | Awaitable[RequestContext]]


class RegistryPhase(Enum):
    """Lifecycle phase of a handler registry."""

    BUILDING = "building"
    SERVING = "serving"


@dataclass(frozen=True)
class HandlerEntry:
    """A registered handler and the pattern it answers to."""

    pattern: Pattern
    handler: Handler

    @property
    def handler_name(self) -> str:
        return getattr(self.handler, "__qualname__", repr(self.handler))


class HandlerRegistry:
    """
    Ordered collection of admission handlers.

    The registry starts in the building phase, where handlers may be added,
    and moves to the serving phase on ``freeze()``. There is no way back.
    Overlapping patterns are accepted; registration order decides which
    handler receives a request.
    """

    def __init__(self):
        self._entries: list[HandlerEntry] | tuple[HandlerEntry, ...] = []
        self._phase = RegistryPhase.BUILDING

    @property
    def phase(self) -> RegistryPhase:
        return self._phase

    @property
    def frozen(self) -> bool:
        return self._phase is RegistryPhase.SERVING

    @property
    def entries(self) -> tuple[HandlerEntry, ...]:
        """Registered entries in registration order."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def register(self, pattern: Pattern, handler: Handler) -> HandlerEntry:
        """
        Append a handler for the given pattern.

        Args:
            pattern: Pattern built with ``build_pattern``
            handler: Callable taking and returning a RequestContext

        Returns:
            The new registry entry

        Raises:
            RegistryPhaseError: If the registry is already serving
        """
        if self.frozen:
            raise RegistryPhaseError("register handler", self._phase.value)

        entry = HandlerEntry(pattern=pattern, handler=handler)
        self._entries.append(entry)
        logger.debug(
            f"Registered handler {entry.handler_name} for {pattern}",
            extra={
                "webhook_type": pattern.webhook_type.value,
                "resource": str(pattern.resource),
                "subresource": pattern.subresource,
                "handler": entry.handler_name,
                "entry_index": len(self._entries) - 1,
            },
        )
        return entry

    def register_handler(
        self,
        webhook_type: WebhookType | str,
        resource: str,
        subresource: str | None,
        handler: Handler,
    ) -> HandlerEntry:
        """
        Build a pattern from a handler declaration and register it.

        Raises:
            ConfigError: If the resource string is malformed
            RegistryPhaseError: If the registry is already serving
        """
        pattern = build_pattern(webhook_type, resource, subresource)
        return self.register(pattern, handler)

    def mutate(
        self, resource: str, subresource: str | None = None
    ) -> Callable[[Handler], Handler]:
        """Decorator registering a mutating handler for ``resource``."""

        def decorator(handler: Handler) -> Handler:
            self.register_handler(WebhookType.MUTATING, resource, subresource, handler)
            return handler

        return decorator

    def validate(
        self, resource: str, subresource: str | None = None
    ) -> Callable[[Handler], Handler]:
        """Decorator registering a validating handler for ``resource``."""

        def decorator(handler: Handler) -> Handler:
            self.register_handler(
                WebhookType.VALIDATING, resource, subresource, handler
            )
            return handler

        return decorator

    def freeze(self) -> None:
        """Finish setup and start serving. Calling it again is a no-op."""
        if self.frozen:
            return
        self._entries = tuple(self._entries)
        self._phase = RegistryPhase.SERVING
        logger.info(
            f"Handler registry serving with {len(self._entries)} handlers",
            extra={"registered_handlers": len(self._entries)},
        )

    def resolve(self, context: RequestContext) -> HandlerEntry:
        """
        Find the first entry whose pattern matches the request.

        Raises:
            RegistryPhaseError: If the registry is still building
            DispatchError: If no entry matches
        """
        if not self.frozen:
            raise RegistryPhaseError("dispatch request", self._phase.value)

        for entry in self._entries:
            if entry.pattern.matches(context):
                return entry

        resource = context.resource
        raise DispatchError(
            webhook_type=context.webhook_type.value,
            resource=f"{resource.group}/{resource.version}/{resource.plural}",
            subresource=context.subresource,
        )

    def dispatch(self, context: RequestContext) -> RequestContext:
        """
        Invoke the first matching handler and return its result.

        Exceptions raised by the handler propagate unchanged. Coroutine
        handlers need ``dispatch_async``.

        Raises:
            DispatchError: If no handler is registered for the request
        """
        return self.invoke(self.resolve(context), context)

    async def dispatch_async(self, context: RequestContext) -> RequestContext:
        """Like ``dispatch``, awaiting the handler result if it is awaitable."""
        return await self.invoke_async(self.resolve(context), context)

    def invoke(self, entry: HandlerEntry, context: RequestContext) -> RequestContext:
        """Run a resolved entry's handler. Handler exceptions propagate."""
        self._log_selection(entry, context)
        return entry.handler(context)

    async def invoke_async(
        self, entry: HandlerEntry, context: RequestContext
    ) -> RequestContext:
        """Run a resolved entry's handler, awaiting an awaitable result."""
        result = self.invoke(entry, context)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _log_selection(self, entry: HandlerEntry, context: RequestContext) -> None:
        logger.debug(
            f"Dispatching {context.webhook_type.value} request for "
            f"{context.resource} to {entry.handler_name}",
            extra={
                "webhook_type": context.webhook_type.value,
                "resource": str(context.resource),
                "subresource": context.subresource,
                "handler": entry.handler_name,
            },
        )
