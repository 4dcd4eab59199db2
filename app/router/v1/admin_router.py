from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from app.schemas.admin_schemas import AdminLoginRequest, AdminLoginResponse
from app.schemas.common import SuccessResponse
from app.schemas.subscriber_schemas import SubscriberItem
from app.services.admin_service import (
    ADMIN_SESSION_KEY,
    AdminService,
    get_admin_service,
    require_admin,
)
from app.services.subscriber_service import get_subscriber_service, SubscriberService


router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login", response_model=AdminLoginResponse)
async def admin_login_router(
    request: Request,
    form_data: AdminLoginRequest,
    admin_service: AdminService = Depends(get_admin_service),
):
    """管理员登录"""

    if not admin_service.authenticate(form_data.password):
        request.session.pop(ADMIN_SESSION_KEY, None)
        return JSONResponse(
            status_code=401,
            content={"success": False, "message": "Invalid admin password"},
        )

    request.session[ADMIN_SESSION_KEY] = True
    return AdminLoginResponse(success=True, message="Admin authenticated successfully")


@router.post("/logout", response_model=SuccessResponse)
async def admin_logout_router(request: Request):
    request.session.pop(ADMIN_SESSION_KEY, None)
    return SuccessResponse(message="Logged out")


@router.get(
    "/subscribers",
    response_model=List[SubscriberItem],
    dependencies=[Depends(require_admin)],
)
async def get_subscribers_router(
    subscriber_service: SubscriberService = Depends(get_subscriber_service),
):
    """获取订阅者列表（不含已退订）"""

    subscribers = await subscriber_service.get_active_subscribers()
    return [SubscriberItem.model_validate(s, from_attributes=True) for s in subscribers]


@router.delete(
    "/subscribers/{subscriber_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_subscriber_router(
    subscriber_id: str,
    subscriber_service: SubscriberService = Depends(get_subscriber_service),
):
    """删除订阅者"""

    if not await subscriber_service.remove_subscriber(subscriber_id):
        raise HTTPException(status_code=404, detail="Subscriber not found")
    return SuccessResponse(message="Subscriber removed successfully")
