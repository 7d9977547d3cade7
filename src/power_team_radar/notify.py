from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import AppConfig
from .models import DeliveryReceipt

logger = logging.getLogger(__name__)

MESSAGE_MAX_LENGTH = 1000


@dataclass(slots=True)
class NotifyRequest:
    items: list[str] = field(default_factory=list)
    recipient: str | None = None
    template: str | None = None


@dataclass(slots=True)
class NotifyResult:
    status: str
    count: int
    recipient: str | None
    receipts: list[DeliveryReceipt]


def notify(request: NotifyRequest, config: AppConfig) -> NotifyResult:
    """Acknowledge a delivery without contacting any messaging provider."""
    template = request.template or config.notify.default_template
    receipts = [
        DeliveryReceipt(
            item_id=item_id,
            recipient=request.recipient,
            status="sent",
            message=_format_message(item_id, template, config.notify.channel),
        )
        for item_id in request.items
    ]
    logger.info(
        "Mock %s delivery: %d items to %s",
        config.notify.channel,
        len(receipts),
        request.recipient or "<none>",
    )
    return NotifyResult(
        status="sent",
        count=len(request.items),
        recipient=request.recipient,
        receipts=receipts,
    )


def _format_message(item_id: str, template: str, channel: str) -> str:
    return f"[{channel}:{template}] opportunity {item_id}"[:MESSAGE_MAX_LENGTH]
