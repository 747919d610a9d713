"""Core helpdesk errors."""


class HelpdeskError(Exception):
    """Base class for all Helpdesk errors."""

    pass


class ConfigError(HelpdeskError):
    """Raised when configuration is invalid."""


class TreeError(HelpdeskError):
    """Raised when a dialogue tree is malformed.

    Covers a missing root node, duplicate node ids and branches whose
    target does not exist.
    """

    pass


class TransportError(HelpdeskError):
    """Raised when the chat transport fails to carry out a request."""

    pass

