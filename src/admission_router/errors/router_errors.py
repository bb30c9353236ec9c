"""
Admission router error hierarchy.

This module defines the error types raised while building the handler
registry and while dispatching admission requests, and their translation
into kopf admission failures.
"""

import kopf


class AdmissionRouterError(Exception):
    """
    Base error class for all admission router exceptions.

    Provides categorization and user guidance for resolution.
    """

    def __init__(
        self,
        message: str,
        category: str,
        user_action: str | None = None,
        cause: Exception | None = None,
        code: int = 500,
    ):
        """
        Initialize router error.

        Args:
            message: Human-readable error description
            category: Error category (parse, configuration, dispatch)
            user_action: What the operator should do to resolve the issue
            cause: Underlying exception that caused this error
            code: HTTP status code used when reported as an admission failure
        """
        super().__init__(message)
        self.message = message
        self.category = category
        self.user_action = user_action
        self.cause = cause
        self.code = code

    def as_admission_error(self) -> kopf.AdmissionError:
        """Convert to a kopf admission failure."""
        return kopf.AdmissionError(self.message, code=self.code)

    def __str__(self) -> str:
        """Enhanced string representation with user guidance."""
        base_msg = super().__str__()
        if self.user_action:
            return f"{base_msg}\nAction required: {self.user_action}"
        return base_msg


class ParseError(AdmissionRouterError):
    """Malformed resource identifier string."""

    def __init__(self, value: str, message: str = "malformed resource identifier"):
        super().__init__(message=message, category="parse")
        self.value = value


class ConfigError(AdmissionRouterError):
    """Invalid handler registration detected during setup."""

    def __init__(
        self,
        message: str,
        value: str | None = None,
        user_action: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category="configuration",
            user_action=user_action or "Fix the handler registration and restart",
            cause=cause,
        )
        self.value = value


class RegistryPhaseError(AdmissionRouterError):
    """Registry operation attempted in the wrong lifecycle phase."""

    def __init__(self, operation: str, phase: str):
        super().__init__(
            message=f"cannot {operation} while registry is {phase}",
            category="configuration",
            user_action="Register all handlers before the registry starts serving",
        )
        self.operation = operation
        self.phase = phase


class DispatchError(AdmissionRouterError):
    """No registered handler matches an admission request."""

    def __init__(
        self,
        webhook_type: str,
        resource: str,
        subresource: str | None = None,
        code: int = 500,
    ):
        target = f"{webhook_type}/{resource}"
        if subresource is not None:
            target = f"{target}/{subresource}"
        super().__init__(
            message=f"no handler registered for {target}",
            category="dispatch",
            code=code,
        )
        self.webhook_type = webhook_type
        self.resource = resource
        self.subresource = subresource
