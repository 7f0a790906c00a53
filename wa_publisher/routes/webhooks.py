from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from loguru import logger

from wa_publisher.core.dependencies import get_ingest_service, get_verifier
from wa_publisher.services.ingest import WebhookIngestService
from wa_publisher.services.verification import WebhookVerifier

router = APIRouter(prefix="/webhook", tags=["Webhooks"])


@router.get("")
async def verify_webhook(
    hub_mode: str | None = Query(default=None, alias="hub.mode"),
    hub_verify_token: str | None = Query(default=None, alias="hub.verify_token"),
    hub_challenge: str | None = Query(default=None, alias="hub.challenge"),
    verifier: WebhookVerifier = Depends(get_verifier),
):
    challenge = verifier.verify(hub_mode, hub_verify_token, hub_challenge)
    return Response(content=challenge, media_type="text/plain")


@router.post("", status_code=status.HTTP_202_ACCEPTED)
async def receive_webhook(
    request: Request,
    service: WebhookIngestService = Depends(get_ingest_service),
):
    body = await request.body()
    logger.bind(
        body=body.decode("utf-8", errors="replace"),
        headers=dict(request.headers),
    ).debug("Webhook received")

    message_id = await service.ingest(body)

    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED, content={"messageId": message_id}
    )
