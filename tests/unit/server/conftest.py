"""Fixtures for the HTTP gateway tests."""

import pytest
from fastapi.testclient import TestClient

from helpdesk.server.api import create_app
from helpdesk.server.gateway import Gateway
from tests.helpers import DEMO_DIR, GUILD_ID, ROLE_ID, USER_ID


@pytest.fixture
def gateway() -> Gateway:
    gateway = Gateway.from_config_file(DEMO_DIR)
    gateway.transport.add_member(GUILD_ID, USER_ID, "alice")
    gateway.transport.add_role(GUILD_ID, ROLE_ID, "beta")
    return gateway


@pytest.fixture
def test_client(gateway):
    """Client whose lifespan starts and stops the gateway."""
    with TestClient(create_app(gateway)) as client:
        yield client


@pytest.fixture
def unconfigured_client(tmp_path, monkeypatch):
    monkeypatch.delenv("HELPDESK_CONFIG_PATH", raising=False)
    monkeypatch.chdir(tmp_path)
    with TestClient(create_app()) as client:
        yield client
