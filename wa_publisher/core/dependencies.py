from fastapi import Depends, Request

from wa_publisher.core.config import Settings
from wa_publisher.services.ingest import WebhookIngestService
from wa_publisher.services.publisher import EventPublisher
from wa_publisher.services.verification import WebhookVerifier


def get_app_settings(request: Request) -> Settings:
    """Settings the app was built with."""
    return request.app.state.settings


def get_verifier(settings: Settings = Depends(get_app_settings)) -> WebhookVerifier:
    return WebhookVerifier(settings.WEBHOOK_VERIFY_TOKEN)


def get_publisher(request: Request) -> EventPublisher:
    return request.app.state.publisher


def get_ingest_service(
    publisher: EventPublisher = Depends(get_publisher),
) -> WebhookIngestService:
    return WebhookIngestService(publisher)
