from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class BookingAction(str, Enum):
    ACCEPT = "accept"
    DECLINE = "decline"
    COMPLETE = "complete"
    CANCEL = "cancel"
    INITIATE_REFUND = "initiate_refund"
    ATTACH_REFUND_PROOF = "attach_refund_proof"
    CONFIRM_REFUND = "confirm_refund"


class TransitionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    action: BookingAction
    reason: str | None = None
    with_refund: bool = False
    refund_reference_id: str | None = None
    proof_url: str | None = None


class AdminListResponse(BaseModel):
    list_name: str
    tab: str
    search: str
    page: int
    total: int
    total_pages: int
    items: list[dict[str, Any]]
    stats: dict[str, Any]


class ExpireLeadsResponse(BaseModel):
    expired: int


def decimal_to_str(stats: dict[str, Any]) -> dict[str, Any]:
    return {k: str(v) if isinstance(v, Decimal) else v for k, v in stats.items()}
