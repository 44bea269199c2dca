from typing import List, Optional

from fastapi import APIRouter, Query

from costume_rental.core.common_deps import AdminDep, BookingServiceDep
from costume_rental.core.service_utils import ensure_exists
from costume_rental.models.booking import BookingStatus
from costume_rental.schemas.booking import Booking, BookingStatusUpdate, BookingUpdate

router = APIRouter()


@router.get("", response_model=List[Booking])
async def get_bookings(
    service: BookingServiceDep,
    current_admin: AdminDep,
    status: Optional[BookingStatus] = Query(
        None, description="Filter by booking status"
    ),
):
    """Get list of bookings with optional status filter"""
    return await service.get_all(status)


@router.get("/{booking_id}", response_model=Booking)
async def get_booking(
    booking_id: str, service: BookingServiceDep, current_admin: AdminDep
):
    """Get booking with its items"""
    return ensure_exists(await service.get_by_id(booking_id), "Booking", booking_id)


@router.put("/{booking_id}", response_model=Booking)
async def update_booking(
    booking_id: str,
    booking_data: BookingUpdate,
    service: BookingServiceDep,
    current_admin: AdminDep,
):
    """Update customer details, notes or payment status"""
    return await service.update(booking_id, booking_data)


@router.patch("/{booking_id}/status", response_model=Booking)
async def update_booking_status(
    booking_id: str,
    status_data: BookingStatusUpdate,
    service: BookingServiceDep,
    current_admin: AdminDep,
):
    """Change booking status; completing or cancelling frees the items"""
    return await service.update_status(booking_id, status_data.status)
