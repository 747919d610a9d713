"""Core errors and constants shared by every Helpdesk layer."""

from helpdesk.core.constants import BACK_TO_START_LABEL, ROOT_NODE_ID
from helpdesk.core.errors import (
    ConfigError,
    HelpdeskError,
    TransportError,
    TreeError,
)

__all__ = [
    "ROOT_NODE_ID",
    "BACK_TO_START_LABEL",
    "HelpdeskError",
    "ConfigError",
    "TreeError",
    "TransportError",
]
