from loguru import logger

from wa_publisher.core.constants import (
    EVENT_TYPE,
    EVENT_TYPE_ATTRIBUTE,
    IDEMPOTENCY_KEY_ATTRIBUTE,
    WEBHOOK_OBJECT,
)
from wa_publisher.services.idempotency import derive_idempotency_key
from wa_publisher.services.publisher import EventPublisher
from wa_publisher.services.validation import validate_payload


class WebhookIngestService:
    """Validate, tag and forward one webhook delivery."""

    def __init__(self, publisher: EventPublisher):
        self.publisher = publisher

    async def ingest(self, body: bytes) -> str:
        payload = validate_payload(body)

        if payload.object != WEBHOOK_OBJECT:
            logger.warning(f"Unexpected webhook object: {payload.object!r}")

        logger.bind(
            entry_count=len(payload.entry),
            message_types=payload.message_types(),
            has_statuses=payload.has_statuses(),
        ).info("Webhook validated")

        idempotency_key = derive_idempotency_key(payload)

        with logger.contextualize(idempotency_key=idempotency_key):
            message_id = await self.publisher.publish(
                payload,
                {
                    EVENT_TYPE_ATTRIBUTE: EVENT_TYPE,
                    IDEMPOTENCY_KEY_ATTRIBUTE: idempotency_key,
                },
            )
            logger.info(f"Webhook forwarded as {message_id}")

        return message_id
