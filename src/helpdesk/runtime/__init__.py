"""Runtime services: message waits and temporary role expiry.

The helpdesk listener lives in helpdesk.runtime.listener.
"""

from helpdesk.runtime.waiter import EventWaiter, WaitHandle
from helpdesk.runtime.roles import TemporaryGrant, TemporaryRoleService

__all__ = ["EventWaiter", "WaitHandle", "TemporaryGrant", "TemporaryRoleService"]
