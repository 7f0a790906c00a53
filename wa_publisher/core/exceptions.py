from typing import Any


class ServiceError(Exception):
    """Base class for errors rendered as JSON by the exception handler."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        payload: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


class PayloadValidationError(ServiceError):
    """Body is not JSON or does not match the webhook schema (400)."""

    def __init__(
        self,
        issues: list[dict[str, Any]],
        raw_payload: Any = None,
        payload_keys: list[str] | None = None,
        payload_type: str = "object",
    ):
        self.issues = issues
        self.raw_payload = raw_payload
        self.payload_keys = payload_keys or []
        self.payload_type = payload_type
        super().__init__(
            message="Invalid body",
            status_code=400,
            payload={
                "message": "The webhook payload does not match the expected WhatsApp Cloud API schema",
                "details": self.details,
            },
        )

    @property
    def details(self) -> dict[str, Any]:
        form_errors: list[str] = []
        field_errors: dict[str, list[str]] = {}
        for issue in self.issues:
            if issue["path"]:
                field_errors.setdefault(issue["path"], []).append(issue["message"])
            else:
                form_errors.append(issue["message"])
        return {
            "formErrors": form_errors,
            "fieldErrors": field_errors,
            "issues": self.issues,
        }


class VerificationError(ServiceError):
    """Webhook verification handshake rejected (403)."""

    def __init__(self, detail: str = "Invalid verification token"):
        super().__init__(message=detail, status_code=403)


class PublishError(ServiceError):
    """Queue unreachable or message rejected (500)."""

    def __init__(self, detail: str = "Failed to publish the message"):
        super().__init__(
            message=detail,
            status_code=500,
            payload={"message": "The message could not be published to the queue"},
        )
