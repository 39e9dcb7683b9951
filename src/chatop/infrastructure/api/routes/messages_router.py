"""Message API routes."""

from fastapi import APIRouter

from chatop.infrastructure.api.dependencies import CurrentUser, MessageServiceDep
from chatop.infrastructure.api.schemas import CreateMessageRequest, InfoResponse

router = APIRouter()


@router.post(
    "",
    response_model=InfoResponse,
    responses={
        403: {"description": "Declared sender is not the caller"},
        404: {"description": "Rental not found"},
    },
)
async def send_message(
    request: CreateMessageRequest,
    current_user: CurrentUser,
    message_service: MessageServiceDep,
) -> InfoResponse:
    """Send a message about a rental as the caller."""
    await message_service.send_message(
        request.message,
        user_id=request.user_id,
        rental_id=request.rental_id,
        identity=current_user,
    )
    return InfoResponse(message="Message send with success")
