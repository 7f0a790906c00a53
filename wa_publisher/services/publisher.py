from faststream.nats import NatsBroker
from loguru import logger

from wa_publisher.core.broker import get_jetstream
from wa_publisher.core.constants import IDEMPOTENCY_KEY_ATTRIBUTE, NATS_MSG_ID_HEADER
from wa_publisher.core.exceptions import PublishError
from wa_publisher.schemas.webhooks import MetaWebhookPayload


class EventPublisher:
    """Forwards validated webhooks to a JetStream subject.

    Each call waits for the stream's ack, so a returned id means the message
    is persisted. Failures are not retried here: Meta redelivers webhooks that
    were not acknowledged with a 2xx.
    """

    def __init__(
        self,
        broker: NatsBroker,
        stream: str,
        subject: str,
        timeout: float = 5.0,
    ):
        self.broker = broker
        self.stream = stream
        self.subject = subject
        self.timeout = timeout

    async def publish(
        self, payload: MetaWebhookPayload, attributes: dict[str, str]
    ) -> str:
        headers = {"content-type": "application/json", **attributes}

        idempotency_key = attributes.get(IDEMPOTENCY_KEY_ATTRIBUTE)
        if idempotency_key:
            headers[NATS_MSG_ID_HEADER] = idempotency_key

        try:
            js = get_jetstream(self.broker)
            ack = await js.publish(
                self.subject,
                payload.to_json_bytes(),
                timeout=self.timeout,
                stream=self.stream,
                headers=headers,
            )
        except Exception as e:
            logger.bind(attributes=attributes, subject=self.subject).error(
                f"Failed to publish to {self.stream}/{self.subject}: {type(e).__name__}: {e}"
            )
            raise PublishError() from e

        message_id = f"{ack.stream}:{ack.seq}"

        if ack.duplicate:
            logger.info(f"Duplicate of already stored message {message_id}")

        logger.bind(message_id=message_id, attributes=attributes).info(
            "Message published"
        )
        return message_id
