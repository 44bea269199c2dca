"""Per-request service instances, each bound to the request's database session."""

from typing import Annotated, Callable, Type, TypeVar

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from costume_rental.core.config import settings
from costume_rental.core.database import get_db
from costume_rental.services.auth_service import AuthService
from costume_rental.services.booking_service import BookingService
from costume_rental.services.category_service import CategoryService
from costume_rental.services.dashboard_service import DashboardService
from costume_rental.services.item_service import ItemService

T = TypeVar("T")


def get_service(service_class: Type[T], **options) -> Callable[[AsyncSession], T]:
    """Build a dependency that constructs ``service_class(db, **options)``."""

    def dependency(db: AsyncSession = Depends(get_db)) -> T:
        return service_class(db, **options)

    return dependency


GetAuthService = Annotated[AuthService, Depends(get_service(AuthService))]
GetBookingService = Annotated[
    BookingService,
    Depends(get_service(BookingService, deposit_rate=settings.SECURITY_DEPOSIT_RATE)),
]
GetCategoryService = Annotated[CategoryService, Depends(get_service(CategoryService))]
GetDashboardService = Annotated[
    DashboardService, Depends(get_service(DashboardService))
]
GetItemService = Annotated[ItemService, Depends(get_service(ItemService))]
