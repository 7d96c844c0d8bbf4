"""FastAPI dependency utilities."""

from fastapi import BackgroundTasks, Cookie, Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from notification_service.application.errors import AuthError
from notification_service.application.use_cases.notifications import StatusEventGateway
from notification_service.application.use_cases.notifications.status_events import (
    StatusEmailSender,
)
from notification_service.domain.entities import Principal
from notification_service.infrastructure.database import get_db
from notification_service.infrastructure.email import send_order_status_email
from notification_service.infrastructure.notifications import NotificationPublisher
from notification_service.infrastructure.repositories import NotificationRepository
from notification_service.infrastructure.security import (
    decode_access_token,
    verify_service_api_key,
)

bearer_scheme = HTTPBearer(auto_error=False)

SERVICE_KEY_HEADER = "x-api-key"
TOKEN_COOKIE = "token"
USER_AUTH_ERROR = "Not authorized to access this route"
SERVICE_AUTH_ERROR = "Not authorized for service-to-service communication"


def resolve_principal(token: str | None) -> Principal:
    """Resolve the authenticated caller for the provided token.

    Raises :class:`AuthError` when the token is missing, invalid or carries
    no user id.
    """

    if not token:
        raise AuthError(USER_AUTH_ERROR)

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise AuthError(USER_AUTH_ERROR) from exc

    subject = payload.get("id") or payload.get("sub")
    if subject is None or str(subject).strip() == "":
        raise AuthError(USER_AUTH_ERROR)

    role = payload.get("role")
    return Principal(id=str(subject), role=str(role) if role is not None else None)


def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    cookie_token: str | None = Cookie(default=None, alias=TOKEN_COOKIE),
) -> Principal:
    """Return the end user identified by the bearer token or the ``token`` cookie.

    The ``Authorization`` header wins when both are present.
    """

    token = credentials.credentials if credentials else cookie_token
    return resolve_principal(token)


def require_service_credential(
    api_key: str | None = Header(default=None, alias=SERVICE_KEY_HEADER),
) -> None:
    """Reject internal endpoints called without the shared service key."""

    if not verify_service_api_key(api_key):
        raise AuthError(SERVICE_AUTH_ERROR)


def get_notification_publisher(request: Request) -> NotificationPublisher:
    """Return the realtime publisher owned by the running application."""

    return request.app.state.notification_publisher


def get_status_email_sender() -> StatusEmailSender:
    """Return the function used to email delivery status updates."""

    return send_order_status_email


def get_status_event_gateway(
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
    send_status_email: StatusEmailSender = Depends(get_status_email_sender),
) -> StatusEventGateway:
    """Build a gateway whose email side channel runs after the response."""

    return StatusEventGateway(
        NotificationRepository(db),
        publisher,
        send_status_email,
        schedule=background_tasks.add_task,
    )
