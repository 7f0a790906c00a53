WEBHOOK_OBJECT = "whatsapp_business_account"
EVENT_TYPE = "whatsapp"

SUBSCRIBE_MODE = "subscribe"

EVENT_TYPE_ATTRIBUTE = "eventType"
IDEMPOTENCY_KEY_ATTRIBUTE = "idempotencyKey"

# JetStream server-side deduplication header
NATS_MSG_ID_HEADER = "Nats-Msg-Id"
