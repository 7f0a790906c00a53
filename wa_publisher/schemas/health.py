from typing import Literal

from pydantic import BaseModel, ConfigDict

__all__ = ["HealthComponent", "HealthResponse"]


class HealthComponent(BaseModel):
    status: Literal["up", "down"]
    details: str | None = None


class HealthResponse(BaseModel):
    status: Literal["healthy", "unhealthy"]
    version: str
    uptime_seconds: float
    components: dict[str, HealthComponent]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "uptime_seconds": 3600.5,
                "components": {"broker": {"status": "up"}},
            }
        }
    )
