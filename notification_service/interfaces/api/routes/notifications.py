"""Endpoints and websocket handler for a user's notifications."""

from __future__ import annotations

import logging
from uuid import uuid4

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from notification_service.application.errors import ApplicationError, AuthError
from notification_service.application.use_cases.notifications import (
    delete_notification as delete_notification_uc,
    list_user_notifications as list_user_notifications_uc,
    mark_all_notifications_read as mark_all_notifications_read_uc,
    mark_notification_read as mark_notification_read_uc,
)
from notification_service.domain.entities import Principal
from notification_service.infrastructure.database import get_db
from notification_service.infrastructure.notifications import NotificationConnectionManager
from notification_service.interfaces.api.dependencies import (
    TOKEN_COOKIE,
    get_current_principal,
    resolve_principal,
)
from notification_service.interfaces.api.errors import to_http_exception
from notification_service.interfaces.api.schemas import (
    EmptyResponse,
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationRead,
    NotificationResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/user/{user_id}", response_model=NotificationListResponse)
def list_user_notifications(
    user_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> NotificationListResponse:
    """Return the 50 most recent notifications of ``user_id``, newest first."""

    try:
        inbox = list_user_notifications_uc(db, user_id=user_id, requester=principal)
    except ApplicationError as exc:
        raise to_http_exception(exc) from exc

    items = [NotificationRead.from_entity(n) for n in inbox.notifications]
    return NotificationListResponse(
        count=len(items), unread_count=inbox.unread_count, data=items
    )


@router.put("/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> NotificationResponse:
    try:
        notification = mark_notification_read_uc(
            db, notification_id=notification_id, requester=principal
        )
    except ApplicationError as exc:
        raise to_http_exception(exc) from exc
    return NotificationResponse(data=NotificationRead.from_entity(notification))


@router.put("/user/{user_id}/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_read(
    user_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> MarkAllReadResponse:
    try:
        modified = mark_all_notifications_read_uc(db, user_id=user_id, requester=principal)
    except ApplicationError as exc:
        raise to_http_exception(exc) from exc
    return MarkAllReadResponse(
        count=modified, message=f"{modified} notifications marked as read"
    )


@router.delete("/{notification_id}", response_model=EmptyResponse)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> EmptyResponse:
    try:
        delete_notification_uc(db, notification_id=notification_id, requester=principal)
    except ApplicationError as exc:
        raise to_http_exception(exc) from exc
    return EmptyResponse()


def _token_from_websocket(websocket: WebSocket) -> str | None:
    token = websocket.query_params.get("token")
    if token:
        return token
    authorization = websocket.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return websocket.cookies.get(TOKEN_COOKIE) or None


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Stream new notifications to the authenticated user.

    The client must send ``{"type": "join"}`` before anything is pushed. The
    group is always the token's user; a different ``userId`` in the join
    message is refused.
    """

    try:
        principal = resolve_principal(_token_from_websocket(websocket))
    except AuthError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    manager: NotificationConnectionManager = (
        websocket.app.state.notification_publisher.manager
    )
    session_id = uuid4().hex
    await websocket.accept()
    manager.register(session_id, websocket)
    logger.info("Realtime session %s opened for user %s", session_id, principal.id)

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except Exception:
                # Binary or malformed frames are ignored.
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type == "join":
                claimed = message.get("userId")
                if claimed is not None and str(claimed) != principal.id:
                    logger.warning(
                        "Session %s of user %s tried to join group %s",
                        session_id,
                        principal.id,
                        claimed,
                    )
                    await websocket.send_json(
                        {
                            "type": "error",
                            "data": {"message": "Cannot join another user's notifications"},
                        }
                    )
                    continue
                manager.join(session_id, principal.id)
                await websocket.send_json(
                    {"type": "joined", "data": {"userId": principal.id}}
                )
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(session_id)
        logger.info("Realtime session %s closed", session_id)
