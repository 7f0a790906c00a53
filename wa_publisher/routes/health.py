import time

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse

from wa_publisher import __version__
from wa_publisher.core.broker import is_connected
from wa_publisher.schemas.health import HealthComponent, HealthResponse

router = APIRouter(tags=["Health"])

START_TIME = time.time()


@router.get("/healthz", response_class=PlainTextResponse)
async def liveness_probe():
    """Liveness probe. Does not look at the broker."""
    return "ok"


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_probe(request: Request, response: Response):
    """Readiness probe: is the NATS connection up."""
    broker = getattr(request.app.state, "broker", None)

    if is_connected(broker):
        broker_status = HealthComponent(status="up")
    else:
        broker_status = HealthComponent(status="down", details="NATS not connected")

    is_healthy = broker_status.status == "up"
    response.status_code = (
        status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    )

    return HealthResponse(
        status="healthy" if is_healthy else "unhealthy",
        version=__version__,
        uptime_seconds=round(time.time() - START_TIME, 2),
        components={"broker": broker_status},
    )
