"""
Messaging API endpoints for conversations about listings.
Every endpoint requires a signed-in member.
"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from subto.database import get_db
from subto.models.message import Message
from subto.models.profile import Profile
from subto.schemas.error import get_error_responses
from subto.schemas.message import (
    MessageCreate,
    MessageListResponse,
    MessageResponse,
    UnreadCountResponse,
)
from subto.services.message import MessageService
from subto.utils.dependencies import get_current_user


router = APIRouter(prefix="/messages", tags=["Messages"])


async def get_message_service(db: AsyncSession = Depends(get_db)) -> MessageService:
    return MessageService(db)


def _list(messages: List[Message]) -> MessageListResponse:
    return MessageListResponse(data=[MessageResponse.model_validate(m.to_dict()) for m in messages])


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
    description="Message another member about a listing",
    responses=get_error_responses(400, 401, 404, 422)
)
async def send_message(
    message_data: MessageCreate,
    current_user: Profile = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service)
) -> MessageResponse:
    message = await message_service.send_message(message_data, current_user)
    return MessageResponse.model_validate(message.to_dict())


@router.get(
    "/received",
    response_model=MessageListResponse,
    status_code=status.HTTP_200_OK,
    summary="Inbox",
    responses=get_error_responses(401)
)
async def received_messages(
    current_user: Profile = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service)
) -> MessageListResponse:
    return _list(await message_service.get_received_messages(current_user))


@router.get(
    "/sent",
    response_model=MessageListResponse,
    status_code=status.HTTP_200_OK,
    summary="Sent messages",
    responses=get_error_responses(401)
)
async def sent_messages(
    current_user: Profile = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service)
) -> MessageListResponse:
    return _list(await message_service.get_sent_messages(current_user))


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    status_code=status.HTTP_200_OK,
    summary="Unread message count",
    responses=get_error_responses(401)
)
async def unread_count(
    current_user: Profile = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service)
) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=await message_service.get_unread_count(current_user))


@router.put(
    "/{message_id}/read",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Mark as read",
    description="Only messages the caller received can be marked",
    responses=get_error_responses(401, 404, 422)
)
async def mark_as_read(
    message_id: UUID = Path(..., description="Message ID"),
    current_user: Profile = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service)
) -> MessageResponse:
    message = await message_service.mark_as_read(message_id, current_user)
    return MessageResponse.model_validate(message.to_dict())


@router.get(
    "/conversation/{property_id}/{other_user_id}",
    response_model=MessageListResponse,
    status_code=status.HTTP_200_OK,
    summary="Conversation about a listing",
    description="Messages between the caller and another member about one listing, oldest first",
    responses=get_error_responses(401, 422)
)
async def conversation(
    property_id: UUID = Path(..., description="Property ID"),
    other_user_id: UUID = Path(..., description="The other member's profile ID"),
    current_user: Profile = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service)
) -> MessageListResponse:
    messages = await message_service.get_property_conversation(property_id, other_user_id, current_user)
    return _list(messages)
