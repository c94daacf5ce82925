from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, Response

from .gateway import DeliveryGateway
from .schemas import (
    ActionNotificationRequest,
    AssignNotificationRequest,
    DispatchResult,
    NotificationKind,
    ReminderNotificationRequest,
)
from .payloads import NotificationRequest
from .service import dispatch
from ..dependencies import get_delivery_gateway


router = APIRouter(tags=["Notifications"])


async def _respond(kind: NotificationKind,
                   request: NotificationRequest,
                   gateway: DeliveryGateway) -> Response:
    result: Optional[DispatchResult] = await dispatch(kind, request, gateway)
    if result is None:
        # No tokens: acknowledge without a body
        return Response(status_code=200)
    return result


@router.post('/notificationReminder', response_model=DispatchResult)
async def notification_reminder(
    gateway: Annotated[DeliveryGateway, Depends(get_delivery_gateway)],
    request: Annotated[Optional[ReminderNotificationRequest], Body()] = None
):
    """
    Remind the task's watchers about a task
    """
    return await _respond(NotificationKind.REMINDER, request or ReminderNotificationRequest(), gateway)


@router.post('/notificationAction', response_model=DispatchResult)
async def notification_action(
    gateway: Annotated[DeliveryGateway, Depends(get_delivery_gateway)],
    request: Annotated[Optional[ActionNotificationRequest], Body()] = None
):
    """
    Tell the task's watchers that someone added, removed or completed it
    """
    return await _respond(NotificationKind.ACTION, request or ActionNotificationRequest(), gateway)


@router.post('/notificationAssign', response_model=DispatchResult)
async def notification_assign(
    gateway: Annotated[DeliveryGateway, Depends(get_delivery_gateway)],
    request: Annotated[Optional[AssignNotificationRequest], Body()] = None
):
    """
    Tell the assignee that a task was assigned to them
    """
    return await _respond(NotificationKind.ASSIGN, request or AssignNotificationRequest(), gateway)
