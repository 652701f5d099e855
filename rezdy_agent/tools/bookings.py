from typing import Any, Dict

from ..models import (
    BookingIdArgs,
    CancelBookingArgs,
    CreateBookingParams,
    QuoteBookingParams,
    SearchAvailabilityParams,
    UpdateBookingArgs,
    UpdateBookingParams,
)
from ..session import AgentSession


async def search_availability(session: AgentSession, args: SearchAvailabilityParams) -> Dict[str, Any]:
    """Search availability sessions for a product with pricing."""
    return await session.require_client().search_availability(args)


async def quote_booking(session: AgentSession, args: QuoteBookingParams) -> Dict[str, Any]:
    """Get a quote for a booking with pricing details."""
    return await session.require_client().quote_booking(args)


async def create_booking(session: AgentSession, args: CreateBookingParams) -> Dict[str, Any]:
    """Create a confirmed booking."""
    return await session.require_client().create_booking(args)


async def get_booking(session: AgentSession, args: BookingIdArgs) -> Dict[str, Any]:
    return await session.require_client().get_booking(args.booking_id)


async def update_booking(session: AgentSession, args: UpdateBookingArgs) -> Dict[str, Any]:
    client = session.require_client()
    params = UpdateBookingParams.model_validate(args.model_dump(exclude={"booking_id"}))
    return await client.update_booking(args.booking_id, params)


async def cancel_booking(session: AgentSession, args: CancelBookingArgs) -> Dict[str, Any]:
    return await session.require_client().cancel_booking(args.booking_id, args.reason)
