"""Internal endpoint that validates status changes before they are applied."""

from fastapi import APIRouter, Depends

from notification_service.application.errors import ApplicationError
from notification_service.application.use_cases.order_lifecycle import apply_transition
from notification_service.interfaces.api.dependencies import require_service_credential
from notification_service.interfaces.api.errors import to_http_exception
from notification_service.interfaces.api.schemas import (
    OrderLifecycleSnapshot,
    TransitionRequest,
    TransitionResponse,
)

router = APIRouter(
    prefix="/order-lifecycle",
    tags=["order-lifecycle"],
    dependencies=[Depends(require_service_credential)],
)


@router.post("/transitions", response_model=TransitionResponse)
def validate_transition(payload: TransitionRequest) -> TransitionResponse:
    """Return the snapshot after the requested change, or 409 if it is illegal.

    Callers persist the returned snapshot only if their stored version still
    equals ``expectedVersion``.
    """

    try:
        next_state = apply_transition(
            payload.current.to_entity(),
            axis=payload.axis,
            target=payload.target,
            expected_version=payload.expected_version,
        )
    except ApplicationError as exc:
        raise to_http_exception(exc) from exc
    return TransitionResponse(data=OrderLifecycleSnapshot.from_entity(next_state))
