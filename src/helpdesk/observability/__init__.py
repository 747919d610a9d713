"""Observability module for Helpdesk."""

from helpdesk.observability.logging import ContextLogger, build_logging_config, setup_logging

__all__ = ["ContextLogger", "build_logging_config", "setup_logging"]
