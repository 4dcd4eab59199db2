from fastapi import APIRouter, BackgroundTasks, Depends, Request
from app.core.logger import logger_manager
from app.decorators.rate_limiter import rate_limiter
from app.schemas.common import SuccessResponse
from app.schemas.subscriber_schemas import (
    EmailSchema,
    SubscribeResponse,
    SubscriberCountResponse,
)
from app.services.notification_service import (
    NotificationDispatcher,
    get_notification_dispatcher,
)
from app.services.subscriber_service import get_subscriber_service, SubscriberService


router = APIRouter(tags=["Subscriber"])
logger = logger_manager.get_logger(__name__)


@router.post("/subscribe", response_model=SubscribeResponse)
@rate_limiter()
async def subscribe_router(
    request: Request,
    form_data: EmailSchema,
    background_tasks: BackgroundTasks,
    subscriber_service: SubscriberService = Depends(get_subscriber_service),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """订阅 newsletter"""

    logger.info(f"📧 New subscription attempt: {form_data.email}")
    result = await subscriber_service.reconcile(form_data.email)

    # broker calls block, so they run in the threadpool after the response is sent
    background_tasks.add_task(dispatcher.dispatch, result.notifications)

    return SubscribeResponse(isNew=result.is_new, message=result.message)


@router.post("/unsubscribe", response_model=SuccessResponse)
async def unsubscribe_router(
    form_data: EmailSchema,
    subscriber_service: SubscriberService = Depends(get_subscriber_service),
):
    """取消订阅"""

    # the same response whether or not the address was registered
    await subscriber_service.unsubscribe(form_data.email)
    return SuccessResponse(message="Successfully unsubscribed")


@router.get("/subscribers/count", response_model=SubscriberCountResponse)
async def subscriber_count_router(
    subscriber_service: SubscriberService = Depends(get_subscriber_service),
):
    count = await subscriber_service.count_active_subscribers()
    return SubscriberCountResponse(count=count)
