"""Helpdesk FastAPI Application.

An HTTP gateway over the in-memory chat backend: relays post the messages
users write, the helpdesk answers in the same channel, and relays read
back whatever is currently visible there.
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Literal

from fastapi import FastAPI, HTTPException, Request

from helpdesk import __version__
from helpdesk.core.errors import HelpdeskError
from helpdesk.dialogue.session import DialogueSession
from helpdesk.server.dependencies import GatewayDep
from helpdesk.server.errors import global_exception_handler
from helpdesk.server.gateway import Gateway
from helpdesk.server.models import (
    CancelResponse,
    ChannelMessage,
    HealthResponse,
    InboundMessageRequest,
    InboundMessageResponse,
    MemberRequest,
    MemberRolesResponse,
    ReadinessResponse,
    RoleRequest,
    SessionInfo,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HELPDESK_CONFIG_PATH"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - load config on startup, end dialogues on shutdown."""
    gateway: Gateway | None = getattr(app.state, "gateway", None)

    if gateway is None:
        from dotenv import load_dotenv

        load_dotenv()

        config_path = os.environ.get(CONFIG_ENV_VAR)
        if not config_path:
            default_path = "helpdesk.yaml"
            if os.path.exists(default_path):
                config_path = default_path

        if not config_path:
            logger.warning(
                f"{CONFIG_ENV_VAR} not set and helpdesk.yaml not found. "
                "App will start unconfigured."
            )
            yield
            return

        logger.info(f"Loading config from {config_path}")
        try:
            gateway = Gateway.from_config_file(config_path)
        except Exception as e:
            logger.error(f"Failed to load config: {e}")
            yield
            return
        app.state.gateway = gateway

    await gateway.start()
    try:
        yield
    finally:
        await gateway.stop()


def session_info(session: DialogueSession) -> SessionInfo:
    return SessionInfo(
        channel_id=session.channel_id,
        user_id=session.user_id,
        node_id=session.current_node.id,
        tracked_messages=len(session.tracked_message_ids),
    )


def create_app(gateway: Gateway | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        gateway: Pre-built gateway; if omitted it is loaded from
            HELPDESK_CONFIG_PATH when the app starts
    """
    app = FastAPI(
        title="Helpdesk Gateway",
        description="Branching question-and-answer dialogues over a sandbox chat backend",
        version=__version__,
        lifespan=lifespan,
    )
    if gateway is not None:
        app.state.gateway = gateway

    app.add_exception_handler(HelpdeskError, global_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request) -> HealthResponse:
        """Liveness probe."""
        current: Gateway | None = getattr(request.app.state, "gateway", None)
        status: Literal["healthy", "starting"] = "healthy" if current else "starting"
        return HealthResponse(
            status=status,
            version=__version__,
            timestamp=datetime.now().isoformat(),
            active_sessions=len(current.listener.active_sessions()) if current else 0,
        )

    @app.get("/ready", response_model=ReadinessResponse)
    async def readiness_check(request: Request) -> ReadinessResponse:
        """Readiness probe."""
        current: Gateway | None = getattr(request.app.state, "gateway", None)
        if current is None:
            return ReadinessResponse(
                ready=False, message="Gateway not configured", checks={"gateway": False}
            )
        return ReadinessResponse(ready=True, message="Service is ready", checks={"gateway": True})

    @app.post("/messages", response_model=InboundMessageResponse)
    async def post_message(
        request: InboundMessageRequest, gateway: GatewayDep
    ) -> InboundMessageResponse:
        """Post a user's message to a channel and let the helpdesk react to it."""
        if gateway.transport.get_channel(request.channel_id) is None:
            raise HTTPException(status_code=404, detail=f"Unknown channel {request.channel_id}")

        listener = gateway.listener
        before = listener.get_session(request.channel_id, request.author_id)

        message = gateway.transport.post_inbound(
            request.channel_id,
            request.author_id,
            request.content,
            author_is_bot=request.author_is_bot,
        )
        session = listener.on_message(message)
        await listener.drain()

        if session is None:
            return InboundMessageResponse(message_id=message.id, status="ignored")

        status: Literal["started", "continued"] = "continued" if session is before else "started"
        return InboundMessageResponse(
            message_id=message.id,
            status=status,
            session=None if session.done else session_info(session),
        )

    @app.get("/channels/{channel_id}/messages", response_model=list[ChannelMessage])
    async def get_channel_messages(channel_id: int, gateway: GatewayDep) -> list[ChannelMessage]:
        """Messages currently visible in a channel, oldest first."""
        if gateway.transport.get_channel(channel_id) is None:
            raise HTTPException(status_code=404, detail=f"Unknown channel {channel_id}")
        return [
            ChannelMessage(id=m.id, author_id=m.author_id, content=m.content)
            for m in gateway.transport.visible_messages(channel_id)
        ]

    @app.get("/sessions", response_model=list[SessionInfo])
    async def list_sessions(gateway: GatewayDep) -> list[SessionInfo]:
        """Live dialogue sessions."""
        return [session_info(s) for s in gateway.listener.active_sessions()]

    @app.delete("/sessions/{channel_id}/{user_id}", response_model=CancelResponse)
    async def cancel_session(channel_id: int, user_id: int, gateway: GatewayDep) -> CancelResponse:
        """End a user's dialogue and clean up its messages."""
        if not gateway.listener.cancel(channel_id, user_id):
            raise HTTPException(
                status_code=404,
                detail=f"No dialogue for user {user_id} in channel {channel_id}",
            )
        await gateway.listener.drain()
        return CancelResponse(cancelled=True, message="Dialogue ended")

    @app.post("/guilds/{guild_id}/members", status_code=201)
    async def add_member(guild_id: int, request: MemberRequest, gateway: GatewayDep) -> dict:
        """Add a member to the sandbox guild."""
        gateway.transport.add_member(guild_id, request.user_id, request.display_name)
        return {"guild_id": guild_id, "user_id": request.user_id}

    @app.post("/guilds/{guild_id}/roles", status_code=201)
    async def add_role(guild_id: int, request: RoleRequest, gateway: GatewayDep) -> dict:
        """Define a role in the sandbox guild."""
        gateway.transport.add_role(guild_id, request.role_id, request.name)
        return {"guild_id": guild_id, "role_id": request.role_id}

    @app.get("/guilds/{guild_id}/members/{user_id}/roles", response_model=MemberRolesResponse)
    async def get_member_roles(guild_id: int, user_id: int, gateway: GatewayDep) -> MemberRolesResponse:
        """Roles a sandbox member currently holds."""
        if gateway.transport.get_member(guild_id, user_id) is None:
            raise HTTPException(status_code=404, detail=f"Unknown member {user_id}")
        return MemberRolesResponse(
            guild_id=guild_id,
            user_id=user_id,
            role_ids=sorted(gateway.transport.roles_of(guild_id, user_id)),
        )

    return app


app = create_app()
