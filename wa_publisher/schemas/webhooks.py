"""WhatsApp Cloud API webhook payload models.

Every model accepts and keeps unknown keys: Meta adds fields to the webhook
payload without notice and ingestion must not break on them. Message
sub-records are independent optional fields, the ``type`` discriminator does
not restrict which of them may be present.

Reference: https://developers.facebook.com/docs/whatsapp/cloud-api/webhooks/components
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "MessageType",
    "DeliveryStatus",
    "MetaBaseModel",
    "MetaProfile",
    "MetaContact",
    "MetaMetadata",
    "MetaImage",
    "MetaVideo",
    "MetaAudio",
    "MetaDocument",
    "MetaSticker",
    "MetaText",
    "MetaLocation",
    "MetaContactAddress",
    "MetaContactEmail",
    "MetaContactName",
    "MetaContactOrg",
    "MetaContactPhone",
    "MetaContactUrl",
    "MetaContactCard",
    "MetaReaction",
    "InteractiveButtonReply",
    "InteractiveListReply",
    "MetaInteractive",
    "MetaProductItem",
    "MetaOrder",
    "MetaReferral",
    "MetaSystem",
    "MetaIdentity",
    "MetaReferredProduct",
    "MetaContext",
    "MetaErrorData",
    "MetaError",
    "MetaMessage",
    "MetaPricing",
    "MetaConversationOrigin",
    "MetaConversation",
    "MetaStatus",
    "MetaValue",
    "MetaChange",
    "MetaEntry",
    "MetaWebhookPayload",
]

MessageType = Literal[
    "text",
    "image",
    "video",
    "audio",
    "document",
    "sticker",
    "location",
    "contacts",
    "reaction",
    "button",
    "interactive",
    "order",
    "system",
    "unknown",
]

DeliveryStatus = Literal["sent", "delivered", "read", "failed"]


class MetaBaseModel(BaseModel):
    # strict: ids and timestamps arrive as JSON strings, codes as numbers
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        strict=True,
        frozen=True,
    )


# Value level


class MetaProfile(MetaBaseModel):
    name: str


class MetaContact(MetaBaseModel):
    profile: MetaProfile
    wa_id: str


class MetaMetadata(MetaBaseModel):
    phone_number_id: str
    display_phone_number: str


# Media


class MetaImage(MetaBaseModel):
    id: str
    mime_type: str
    sha256: str
    caption: str | None = None


class MetaVideo(MetaBaseModel):
    id: str
    mime_type: str
    sha256: str
    caption: str | None = None


class MetaAudio(MetaBaseModel):
    """Audio and voice notes. Voice notes may come without a hash."""

    id: str
    mime_type: str
    sha256: str | None = None


class MetaDocument(MetaBaseModel):
    id: str
    mime_type: str
    sha256: str
    filename: str
    caption: str | None = None


class MetaSticker(MetaBaseModel):
    id: str
    mime_type: str
    sha256: str
    animated: bool | None = None


# Content


class MetaText(MetaBaseModel):
    body: str


class MetaLocation(MetaBaseModel):
    latitude: float
    longitude: float
    name: str | None = None
    address: str | None = None


class MetaContactAddress(MetaBaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    country_code: str | None = None
    type: str | None = None


class MetaContactEmail(MetaBaseModel):
    email: str | None = None
    type: str | None = None


class MetaContactName(MetaBaseModel):
    formatted_name: str
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    suffix: str | None = None
    prefix: str | None = None


class MetaContactOrg(MetaBaseModel):
    company: str | None = None
    department: str | None = None
    title: str | None = None


class MetaContactPhone(MetaBaseModel):
    phone: str | None = None
    wa_id: str | None = None
    type: str | None = None


class MetaContactUrl(MetaBaseModel):
    url: str | None = None
    type: str | None = None


class MetaContactCard(MetaBaseModel):
    """A contact card shared inside a ``contacts`` message."""

    addresses: list[MetaContactAddress] | None = None
    birthday: str | None = None
    emails: list[MetaContactEmail] | None = None
    name: MetaContactName
    org: MetaContactOrg | None = None
    phones: list[MetaContactPhone] | None = None
    urls: list[MetaContactUrl] | None = None


class MetaReaction(MetaBaseModel):
    message_id: str
    emoji: str


# Interactive


class InteractiveButtonReply(MetaBaseModel):
    id: str
    title: str


class InteractiveListReply(MetaBaseModel):
    id: str
    title: str
    description: str | None = None


class MetaInteractive(MetaBaseModel):
    type: Literal["button_reply", "list_reply"]
    button_reply: InteractiveButtonReply | None = None
    list_reply: InteractiveListReply | None = None


# Orders


class MetaProductItem(MetaBaseModel):
    product_retailer_id: str
    quantity: str
    item_price: str
    currency: str


class MetaOrder(MetaBaseModel):
    catalog_id: str
    text: str | None = None
    product_items: list[MetaProductItem]


class MetaReferral(MetaBaseModel):
    """Click-to-WhatsApp ad referral."""

    source_url: str
    source_type: str
    source_id: str
    headline: str | None = None
    body: str | None = None
    media_type: str | None = None
    image_url: str | None = None
    video_url: str | None = None
    thumbnail_url: str | None = None
    ctwa_clid: str | None = None


# System


class MetaSystem(MetaBaseModel):
    """Customer changed number or identity."""

    body: str | None = None
    identity: str | None = None
    new_wa_id: str | None = None
    wa_id: str | None = None
    type: Literal["customer_changed_number", "customer_identity_changed"] | None = None
    customer: str | None = None
    group_id: str | None = None


class MetaIdentity(MetaBaseModel):
    acknowledged: bool | None = None
    created_timestamp: str | None = None
    hash: str | None = None


class MetaReferredProduct(MetaBaseModel):
    catalog_id: str
    product_retailer_id: str


class MetaContext(MetaBaseModel):
    forwarded: bool | None = None
    frequently_forwarded: bool | None = None
    from_: str | None = Field(default=None, alias="from")
    id: str | None = None
    referred_product: MetaReferredProduct | None = None


# Errors


class MetaErrorData(MetaBaseModel):
    details: str


class MetaError(MetaBaseModel):
    code: int | float
    title: str
    message: str | None = None
    error_data: MetaErrorData | None = None


class MetaMessage(MetaBaseModel):
    id: str
    from_: str = Field(alias="from")
    timestamp: str
    type: MessageType

    text: MetaText | None = None
    image: MetaImage | None = None
    video: MetaVideo | None = None
    audio: MetaAudio | None = None
    document: MetaDocument | None = None
    sticker: MetaSticker | None = None
    location: MetaLocation | None = None
    contacts: list[MetaContactCard] | None = None
    reaction: MetaReaction | None = None
    button: InteractiveButtonReply | None = None
    interactive: MetaInteractive | None = None
    order: MetaOrder | None = None
    system: MetaSystem | None = None
    referral: MetaReferral | None = None

    context: MetaContext | None = None
    identity: MetaIdentity | None = None
    errors: list[MetaError] | None = None


# Statuses


class MetaPricing(MetaBaseModel):
    billable: bool
    category: str
    pricing_model: str


class MetaConversationOrigin(MetaBaseModel):
    type: str


class MetaConversation(MetaBaseModel):
    id: str
    origin: MetaConversationOrigin
    expiration_timestamp: str | None = None


class MetaStatus(MetaBaseModel):
    id: str
    status: DeliveryStatus
    timestamp: str
    recipient_id: str
    conversation: MetaConversation | None = None
    pricing: MetaPricing | None = None
    errors: list[MetaError] | None = None
    biz_opaque_callback_data: str | None = None


class MetaValue(MetaBaseModel):
    messaging_product: str
    metadata: MetaMetadata

    contacts: list[MetaContact] | None = None
    messages: list[MetaMessage] | None = None
    statuses: list[MetaStatus] | None = None
    errors: list[MetaError] | None = None


class MetaChange(MetaBaseModel):
    field: str
    value: MetaValue


class MetaEntry(MetaBaseModel):
    id: str
    changes: list[MetaChange]


class MetaWebhookPayload(MetaBaseModel):
    object: str
    entry: list[MetaEntry]

    def message_types(self) -> list[str]:
        return [
            message.type
            for entry in self.entry
            for change in entry.changes
            for message in change.value.messages or []
        ]

    def has_statuses(self) -> bool:
        return any(
            change.value.statuses
            for entry in self.entry
            for change in entry.changes
        )

    def to_json_bytes(self) -> bytes:
        """Serialize back to the wire shape, unknown fields included."""
        return self.model_dump_json(by_alias=True, exclude_unset=True).encode("utf-8")
