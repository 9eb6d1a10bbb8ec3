from fastapi import APIRouter, Depends, HTTPException

from househelp.api.v1.schemas import MarkReadSchema, NotificationCreateSchema
from househelp.application.use_cases.notifications import NotificationUseCase
from househelp.wiring.dependencies import get_notification_use_case

router = APIRouter(prefix="/notifications")


@router.post("")
async def create_notification(
    req: NotificationCreateSchema,
    uc: NotificationUseCase = Depends(get_notification_use_case),
) -> dict[str, str]:
    notification_id = await uc.create_notification(req.user_id, req.title, req.body, req.type, req.data)
    if notification_id is None:
        raise HTTPException(status_code=502, detail="Failed to create notification")
    return {"id": notification_id}


@router.get("/{user_id}")
async def list_notifications(user_id: str, uc: NotificationUseCase = Depends(get_notification_use_case)):
    return await uc.get_notifications(user_id)


@router.get("/{user_id}/unread-count")
async def unread_count(user_id: str, uc: NotificationUseCase = Depends(get_notification_use_case)) -> dict[str, int]:
    return {"count": await uc.get_unread_count(user_id)}


@router.post("/{user_id}/read")
async def mark_read(
    user_id: str,
    req: MarkReadSchema,
    uc: NotificationUseCase = Depends(get_notification_use_case),
) -> dict[str, bool]:
    return {"success": await uc.mark_as_read(user_id, req.notification_ids)}


@router.post("/{user_id}/subscription")
async def subscribe(user_id: str, uc: NotificationUseCase = Depends(get_notification_use_case)) -> dict[str, bool]:
    uc.initialize(user_id)
    return {"subscribed": uc.is_subscribed}


@router.delete("/{user_id}/subscription")
async def unsubscribe(user_id: str, uc: NotificationUseCase = Depends(get_notification_use_case)) -> dict[str, bool]:
    if uc.is_subscribed and uc.subscribed_user_id != user_id:
        raise HTTPException(status_code=409, detail="Another user holds the notification subscription")
    uc.cleanup()
    return {"subscribed": False}
