import sentry_sdk
import uvicorn
from fastapi import FastAPI
from loguru import logger
from pydantic import ValidationError

from wa_publisher.core.broker import create_broker
from wa_publisher.core.config import Settings, get_settings
from wa_publisher.core.exceptions import ServiceError
from wa_publisher.core.handlers import global_exception_handler, local_exception_handler
from wa_publisher.core.lifecycle import lifespan
from wa_publisher.core.logger import setup_logging
from wa_publisher.routes import health, webhooks
from wa_publisher.services.publisher import EventPublisher


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    if settings.SENTRY_DSN:
        sentry_sdk.init(dsn=settings.SENTRY_DSN, send_default_pii=False)

    app = FastAPI(title="WhatsApp Webhook Publisher", lifespan=lifespan)

    broker = create_broker(settings)
    app.state.settings = settings
    app.state.broker = broker
    app.state.publisher = EventPublisher(
        broker,
        stream=settings.PROJECT_ID,
        subject=settings.TOPIC_ID,
        timeout=settings.PUBLISH_TIMEOUT,
    )

    app.add_exception_handler(ServiceError, local_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(health.router)
    app.include_router(webhooks.router)

    return app


def run() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.critical(f"Invalid configuration, refusing to start:\n{e}")
        raise SystemExit(1) from e

    app = create_app(settings)
    logger.info(f"Publisher listening on :{settings.PORT}")
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
