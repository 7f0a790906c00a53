"""Shared test fixtures for wa-publisher."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock

import pytest
from loguru import logger
from nats.js.api import PubAck

from wa_publisher.core.config import Settings
from wa_publisher.schemas.webhooks import MetaWebhookPayload

VERIFY_TOKEN = "verify-secret"
PROJECT_ID = "test-project"
TOPIC_ID = "whatsapp-webhooks"


def make_settings(**kwargs: Any) -> Settings:
    defaults: dict[str, Any] = {
        "PROJECT_ID": PROJECT_ID,
        "TOPIC_ID": TOPIC_ID,
        "WEBHOOK_VERIFY_TOKEN": VERIFY_TOKEN,
        "NATS_URL": "nats://localhost:4222",
    }
    defaults.update(kwargs)
    return Settings(_env_file=None, **defaults)


# --- Factory functions for webhook payloads ---


def make_text_message(**kwargs: Any) -> dict[str, Any]:
    defaults: dict[str, Any] = {
        "from": "16315551181",
        "id": "wamid.ABC",
        "timestamp": "1717171717",
        "type": "text",
        "text": {"body": "hi"},
    }
    defaults.update(kwargs)
    return defaults


def make_status(**kwargs: Any) -> dict[str, Any]:
    defaults: dict[str, Any] = {
        "id": "stat-1",
        "status": "delivered",
        "timestamp": "1717171717",
        "recipient_id": "16315551181",
    }
    defaults.update(kwargs)
    return defaults


def make_value(
    messages: list[dict[str, Any]] | None = None,
    statuses: list[dict[str, Any]] | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    value: dict[str, Any] = {
        "messaging_product": "whatsapp",
        "metadata": {
            "display_phone_number": "15550783881",
            "phone_number_id": "106540352242922",
        },
    }
    if messages is not None:
        value["contacts"] = [
            {"profile": {"name": "Kerry Fisher"}, "wa_id": "16315551181"}
        ]
        value["messages"] = messages
    if statuses is not None:
        value["statuses"] = statuses
    value.update(kwargs)
    return value


def make_webhook_payload(
    value: dict[str, Any] | None = None,
    changes: list[dict[str, Any]] | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    if changes is None:
        if value is None:
            value = make_value(messages=[make_text_message()])
        changes = [{"field": "messages", "value": value}]

    payload: dict[str, Any] = {
        "object": "whatsapp_business_account",
        "entry": [{"id": "102290129340398", "changes": changes}],
    }
    payload.update(kwargs)
    return payload


def to_body(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")


def parse_payload(payload: dict[str, Any]) -> MetaWebhookPayload:
    return MetaWebhookPayload.model_validate_json(to_body(payload))


# --- Fixtures ---


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def jetstream() -> AsyncMock:
    """JetStream context whose publish acks with sequence 42."""
    js = AsyncMock()
    js.publish.return_value = PubAck(stream=PROJECT_ID, seq=42)
    return js


@pytest.fixture
def log_messages():
    """Formatted loguru output captured during the test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(str(message)),
        level="DEBUG",
        format="{level} {message} {extra}",
    )
    yield messages
    logger.remove(handler_id)


class FakePublisher:
    """In-memory stand-in for EventPublisher."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.published: list[tuple[MetaWebhookPayload, dict[str, str]]] = []

    async def publish(
        self, payload: MetaWebhookPayload, attributes: dict[str, str]
    ) -> str:
        if self.error is not None:
            raise self.error
        self.published.append((payload, attributes))
        return f"{PROJECT_ID}:{len(self.published)}"
