"""FastAPI dependencies for server endpoints.

Uses dependency injection instead of global state for better
testability and multi-worker safety.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from helpdesk.server.gateway import Gateway


def get_gateway(request: Request) -> Gateway:
    """Dependency to get the running Gateway.

    Raises:
        HTTPException: 503 if the gateway is not configured
    """
    gateway = getattr(request.app.state, "gateway", None)

    if gateway is None:
        raise HTTPException(
            status_code=503,
            detail={
                "error": "Service not configured",
                "message": "No helpdesk configuration loaded. Set HELPDESK_CONFIG_PATH.",
            },
        )

    return gateway


# Type alias for cleaner endpoint signatures
GatewayDep = Annotated[Gateway, Depends(get_gateway)]
