"""Adapters serving the admission router from third-party webhook servers."""

from .kopf_bridge import make_kopf_handler

__all__ = ["make_kopf_handler"]
