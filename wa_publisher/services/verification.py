import hmac

from loguru import logger

from wa_publisher.core.constants import SUBSCRIBE_MODE
from wa_publisher.core.exceptions import VerificationError


class WebhookVerifier:
    """Answers Meta's ``hub.challenge`` subscription handshake."""

    def __init__(self, verify_token: str):
        self._verify_token = verify_token

    def is_valid(self, mode: str | None, token: str | None) -> bool:
        if mode != SUBSCRIBE_MODE or token is None:
            return False
        return hmac.compare_digest(
            token.encode("utf-8"), self._verify_token.encode("utf-8")
        )

    def verify(
        self, mode: str | None, token: str | None, challenge: str | None
    ) -> str:
        """Return the challenge to echo back, or raise VerificationError.

        The configured token is compared as-is: an empty configured token
        only matches an empty received token.
        """
        if self.is_valid(mode, token):
            logger.info("Webhook verified")
            return challenge or ""

        # never log the configured token
        logger.bind(mode=mode, token=token).warning("Webhook verification failed")
        raise VerificationError()
