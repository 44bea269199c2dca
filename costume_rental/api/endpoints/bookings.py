from fastapi import APIRouter, status

from costume_rental.core.common_deps import BookingServiceDep
from costume_rental.schemas.booking import AvailabilityRequest, Booking, BookingCreate
from costume_rental.schemas.responses import AvailabilityResponse, ErrorResponse

router = APIRouter()


@router.post(
    "/bookings",
    response_model=Booking,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid booking request"},
        409: {"model": ErrorResponse, "description": "Item unavailable"},
    },
)
async def create_booking(booking_data: BookingCreate, service: BookingServiceDep):
    """Submit a booking; totals are computed from current item prices"""
    return await service.create(booking_data)


@router.post("/availability", response_model=AvailabilityResponse)
async def check_availability(
    availability_data: AvailabilityRequest, service: BookingServiceDep
):
    """Check whether an item can be rented for a date range"""
    available = await service.check_availability(
        availability_data.item_id,
        availability_data.start_date,
        availability_data.end_date,
    )
    return AvailabilityResponse(item_id=availability_data.item_id, available=available)
