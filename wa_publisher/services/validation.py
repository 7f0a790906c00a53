import json
from typing import Any

from loguru import logger
from pydantic import ValidationError

from wa_publisher.core.exceptions import PayloadValidationError
from wa_publisher.schemas.webhooks import MetaWebhookPayload


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _describe_body(body: bytes) -> tuple[Any, list[str], str]:
    """Raw payload, its top-level keys and its JSON type, for diagnostics."""
    try:
        raw = json.loads(body)
    except ValueError:
        return body.decode("utf-8", errors="replace"), [], "invalid"

    keys = list(raw) if isinstance(raw, dict) else []
    return raw, keys, _json_type(raw)


def _issues(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": ".".join(str(part) for part in error["loc"]),
            "type": error["type"],
            "message": error["msg"],
        }
        for error in exc.errors(include_url=False)
    ]


def validate_payload(body: bytes) -> MetaWebhookPayload:
    """Parse and validate a raw webhook body.

    Invalid JSON and non-object bodies fail the same way as schema violations.
    Raises PayloadValidationError carrying every violated path, the raw
    payload and its top-level keys.
    """
    try:
        return MetaWebhookPayload.model_validate_json(body)
    except ValidationError as e:
        issues = _issues(e)
        raw, keys, payload_type = _describe_body(body)

        logger.bind(
            issues=issues,
            received_payload=raw,
            payload_type=payload_type,
            payload_keys=keys,
        ).error(f"Webhook validation failed with {len(issues)} issue(s)")

        raise PayloadValidationError(
            issues=issues,
            raw_payload=raw,
            payload_keys=keys,
            payload_type=payload_type,
        ) from e
