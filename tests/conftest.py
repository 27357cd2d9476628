"""
Pytest configuration and shared fixtures for twd-mcp tests.

Provides sample element descriptors, network exchanges and recordings
shared by the generator and adapter test modules.
"""

import logging

import pytest

from twd_mcp.core.logging_config import StructuredFormatter, TextFormatter
from twd_mcp.generation.models import (
    ElementDescriptor,
    Interaction,
    InteractionType,
    MockResponse,
    NetworkExchange,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep CI and twd-mcp environment variables out of the tests."""
    for name in ["CI", "TWD_MCP_LOG_LEVEL", "TWD_MCP_LOG_FORMAT", "TWD_MCP_LOG_FILE"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Remove handlers installed by setup_logging during a test."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, (StructuredFormatter, TextFormatter)):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


@pytest.fixture
def submit_button():
    return ElementDescriptor(tag_name="button", text_content="Submit")


@pytest.fixture
def email_input():
    return ElementDescriptor(tag_name="input", test_id="email", role=None)


@pytest.fixture
def users_exchange():
    return NetworkExchange(
        url="https://api.example.com/api/users?page=1",
        method="get",
        response=MockResponse(body=[{"id": 1, "name": "Ada"}]),
    )


@pytest.fixture
def login_exchange():
    return NetworkExchange(
        url="https://api.example.com/api/login",
        method="POST",
        response=MockResponse(body={"token": "abc"}, status=201),
    )


@pytest.fixture
def login_recording():
    """Interactions of a simple login flow."""
    return [
        Interaction(type=InteractionType.NAVIGATE, url="http://localhost:5173/login"),
        Interaction(
            type=InteractionType.TYPE,
            target=ElementDescriptor(tag_name="input", placeholder="Email"),
            value="ada@example.com",
        ),
        Interaction(
            type=InteractionType.CLICK,
            target=ElementDescriptor(tag_name="button", text_content="  Sign in  "),
        ),
    ]


@pytest.fixture
def login_arguments():
    """Raw generateTestFromRecording arguments, as a client would send them."""
    return {
        "interactions": [
            {"type": "navigate", "target": {"tagName": "body"}, "url": "http://localhost:5173/"},
            {
                "type": "type",
                "target": {"tagName": "input", "testId": "email"},
                "value": "ada@example.com",
                "timestamp": 1700000000000,
            },
            {"type": "click", "target": {"tagName": "button", "textContent": "Log in"}},
        ],
        "networkCalls": [
            {
                "url": "https://api.example.com/api/login",
                "method": "post",
                "response": {"status": 200, "body": {"ok": True}},
            }
        ],
        "testName": "login flow",
    }
