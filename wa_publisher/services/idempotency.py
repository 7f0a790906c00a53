import uuid

from wa_publisher.schemas.webhooks import MetaWebhookPayload


def derive_idempotency_key(payload: MetaWebhookPayload) -> str:
    """Dedup key for a webhook delivery.

    Only the first change of the first entry is inspected: the id of its first
    message, else of its first status, else a random UUID (no dedup possible).
    Meta sends one entry per delivery in practice, so later entries of a batch
    are not taken into account.
    """
    if payload.entry and payload.entry[0].changes:
        value = payload.entry[0].changes[0].value

        if value.messages:
            return value.messages[0].id

        if value.statuses:
            return value.statuses[0].id

    return str(uuid.uuid4())
