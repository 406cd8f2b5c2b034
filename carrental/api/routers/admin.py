from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Response, status

from carrental.api.dependencies import get_services
from carrental.api.schemas.admin import (
    AdminListResponse,
    BookingAction,
    ExpireLeadsResponse,
    TransitionRequest,
    decimal_to_str,
)
from carrental.api.schemas.bookings import BookingResponse
from carrental.application.admin_sync import AdminListView
from carrental.application.dtos.booking_dto import BookingResult
from carrental.application.queries.admin_lists import (
    BOOKINGS_SPEC,
    INVOICES_SPEC,
    LEADS_SPEC,
    LeadStats,
    booking_stats,
    invoice_stats,
    lead_stats,
    load_bookings,
    load_invoices,
    load_leads,
)
from carrental.domain.errors import NotFoundError, ValidationError

router = APIRouter(prefix="/admin")

_LISTS = {
    "bookings": (BOOKINGS_SPEC, load_bookings, booking_stats),
    "leads": (LEADS_SPEC, load_leads, lead_stats),
    "invoices": (INVOICES_SPEC, load_invoices, invoice_stats),
}


def _raise_on_failure(result: BookingResult) -> BookingResponse:
    if not result.success:
        raise result.error
    return BookingResponse.from_entity(result.booking)


@router.post("/bookings/{booking_id}/transitions", response_model=BookingResponse)
async def transition_booking(
    booking_id: str,
    payload: TransitionRequest,
    services=Depends(get_services),
) -> BookingResponse:
    lifecycle = services["lifecycle"]
    action = payload.action

    if action == BookingAction.ACCEPT:
        result = await lifecycle.accept(booking_id)
    elif action == BookingAction.DECLINE:
        result = await lifecycle.decline(booking_id, payload.reason)
    elif action == BookingAction.COMPLETE:
        result = await lifecycle.complete(booking_id)
    elif action == BookingAction.CANCEL:
        result = await lifecycle.cancel(booking_id, payload.reason, payload.with_refund)
    elif action == BookingAction.INITIATE_REFUND:
        result = await lifecycle.initiate_refund(booking_id, payload.refund_reference_id)
    elif action == BookingAction.ATTACH_REFUND_PROOF:
        if not payload.refund_reference_id:
            raise ValidationError("refund_reference_id", "Refund reference is required")
        result = await lifecycle.attach_refund_proof(
            booking_id, payload.refund_reference_id, payload.proof_url
        )
    else:
        result = await lifecycle.confirm_refund(booking_id)

    return _raise_on_failure(result)


@router.delete("/bookings/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(booking_id: str, services=Depends(get_services)) -> Response:
    result = await services["lifecycle"].delete_booking(booking_id)
    if not result.success:
        raise result.error
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/leads/expire", response_model=ExpireLeadsResponse)
async def expire_leads(services=Depends(get_services)) -> ExpireLeadsResponse:
    return ExpireLeadsResponse(expired=await services["expire_leads"].execute())


@router.get("/{list_name}", response_model=AdminListResponse)
async def admin_list(
    list_name: str,
    tab: str = Query(default="all"),
    q: str = Query(default=""),
    page: int = Query(default=1, ge=1),
    services=Depends(get_services),
) -> AdminListResponse:
    if list_name not in _LISTS:
        raise NotFoundError("Admin list", list_name)
    spec, loader, stats_fn = _LISTS[list_name]
    if tab not in spec.tabs:
        raise ValidationError("tab", f"Unknown tab '{tab}'")

    view = AdminListView(
        services["persistence"],
        loader,
        spec,
        page_size=services["settings"].admin_page_size,
    )
    await view.refresh()
    view.set_tab(tab)
    view.set_search(q)

    summary = stats_fn(view.rows)
    stats = asdict(summary)
    if isinstance(summary, LeadStats):
        stats["conversion_rate"] = summary.conversion_rate

    return AdminListResponse(
        list_name=list_name,
        tab=tab,
        search=q,
        page=page,
        total=len(view.items()),
        total_pages=view.total_pages,
        items=view.page(page),
        stats=decimal_to_str(stats),
    )
