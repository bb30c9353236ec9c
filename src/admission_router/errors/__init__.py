"""
Error handling module for the admission router.

This module provides the error hierarchy raised during handler registration
and request dispatch, with translation into kopf admission failures.
"""

from .router_errors import (
    AdmissionRouterError,
    ConfigError,
    DispatchError,
    ParseError,
    RegistryPhaseError,
)

__all__ = [
    "AdmissionRouterError",
    "ParseError",
    "ConfigError",
    "DispatchError",
    "RegistryPhaseError",
]
