import logging

import pytest
from fastapi.testclient import TestClient

from task_notifications.app.main import create_app
from task_notifications.app.notifications.gateway import REGISTRATION_TOKEN_NOT_REGISTERED
from task_notifications.app.notifications.schemas import DeliveryOutcome, MulticastOutcome


class FakeGateway:
    """In-memory delivery gateway that records calls and replays scripted outcomes."""

    def __init__(self, outcomes=None, error=None):
        self.outcomes = outcomes or {}
        self.error = error
        self.calls = []

    async def send_multicast(self, message):
        self.calls.append(message)
        if self.error is not None:
            raise self.error
        responses = [self.outcomes.get(token, DeliveryOutcome(success=True)) for token in message.tokens]
        success_count = sum(1 for r in responses if r.success)
        return MulticastOutcome(
            success_count=success_count,
            failure_count=len(responses) - success_count,
            responses=responses,
        )


@pytest.fixture(autouse=True)
def root_logger():
    """Undo logging setup done by the app between tests."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


@pytest.fixture
def make_gateway():
    return FakeGateway


@pytest.fixture
def unregistered():
    return DeliveryOutcome(
        success=False,
        error_code=REGISTRATION_TOKEN_NOT_REGISTERED,
        error_message="Requested entity was not found.",
    )


@pytest.fixture
def failed():
    def _failed(code="internal-error", message="Internal error encountered."):
        return DeliveryOutcome(success=False, error_code=code, error_message=message)
    return _failed


@pytest.fixture
def gateway(make_gateway):
    return make_gateway()


@pytest.fixture
def client(gateway):
    """A test client for the app."""
    with TestClient(create_app(gateway=gateway)) as client:
        yield client
