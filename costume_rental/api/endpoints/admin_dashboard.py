from fastapi import APIRouter

from costume_rental.core.common_deps import AdminDep, DashboardServiceDep
from costume_rental.schemas.responses import DashboardStats

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(service: DashboardServiceDep, current_admin: AdminDep):
    """Revenue, active rentals, available items and overdue returns"""
    return await service.get_stats()
