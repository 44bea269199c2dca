from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from costume_rental.models.booking import Booking, BookingStatus, PaymentStatus
from costume_rental.models.item import Item, ItemStatus
from costume_rental.schemas.responses import DashboardStats


class DashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, stmt) -> int:
        result = await self.db.execute(stmt)
        return int(result.scalar() or 0)

    async def get_stats(self, today: Optional[date] = None) -> DashboardStats:
        """Aggregate the dashboard figures from the bookings and items tables"""
        today = today or date.today()

        revenue_result = await self.db.execute(
            select(func.coalesce(func.sum(Booking.total_amount), 0)).where(
                Booking.payment_status == PaymentStatus.PAID
            )
        )
        total_revenue = Decimal(str(revenue_result.scalar() or 0))

        active_rentals = await self._count(
            select(func.count(Booking.id)).where(
                Booking.status == BookingStatus.ACTIVE
            )
        )
        available_items = await self._count(
            select(func.count(Item.id)).where(Item.status == ItemStatus.AVAILABLE)
        )
        overdue_returns = await self._count(
            select(func.count(Booking.id)).where(
                or_(
                    Booking.status == BookingStatus.OVERDUE,
                    and_(
                        Booking.status == BookingStatus.ACTIVE,
                        Booking.end_date < today,
                    ),
                )
            )
        )

        return DashboardStats(
            total_revenue=total_revenue,
            active_rentals=active_rentals,
            available_items=available_items,
            overdue_returns=overdue_returns,
        )
