from fastapi import APIRouter, Request

from costume_rental.core.common_deps import AdminDep, AuthServiceDep
from costume_rental.core.security import end_admin_session, start_admin_session
from costume_rental.schemas.admin_user import AdminLoginRequest, AdminUser
from costume_rental.schemas.responses import MessageResponse

router = APIRouter()


@router.post("/login", response_model=AdminUser)
async def login(
    login_data: AdminLoginRequest, request: Request, service: AuthServiceDep
):
    """Log in and bind the admin to the session cookie"""
    admin = await service.login(login_data)
    start_admin_session(request, admin)
    return admin


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request):
    end_admin_session(request)
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=AdminUser)
async def get_current_user(current_admin: AdminDep):
    """Return the logged-in admin, or 401 without a session"""
    return current_admin
