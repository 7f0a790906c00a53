from faststream.nats import NatsBroker
from loguru import logger
from nats.js import JetStreamContext

from wa_publisher.core.config import Settings


async def _log_connection_error(e: Exception) -> None:
    logger.error(f"NATS broker unavailable: {type(e).__name__}: {e}")


def create_broker(settings: Settings) -> NatsBroker:
    return NatsBroker(
        settings.NATS_URL,
        # retries forever, including the first connect
        allow_reconnect=True,
        max_reconnect_attempts=-1,
        error_cb=_log_connection_error,
    )


def get_jetstream(broker: NatsBroker) -> JetStreamContext:
    """JetStream context of a connected broker."""
    connection = broker._connection
    if connection is None or not connection.is_connected:
        raise RuntimeError("NATS broker is not connected")
    return connection.jetstream()


def is_connected(broker: NatsBroker | None) -> bool:
    if broker is None or broker._connection is None:
        return False
    return broker._connection.is_connected
