"""
Message Listing Routes

Endpoints:
    GET /api/applications/{application_id}/messages   - One application's thread
    GET /api/messages/unread/{user_id}                - Unread messages for a user
"""

import logging

from fastapi import APIRouter, Depends

from src.common.repositories import APPLICATIONS, MESSAGES, CollectionRepositoryInterface
from src.services import ListPage, list_filters

from ..dependencies import PageParams, list_response, page_params, repository_for
from ..models import list_response_model

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messages"])


@router.get(
    "/api/applications/{application_id}/messages",
    response_model=list_response_model("messages"),
)
def list_application_messages(
    application_id: str,
    params: PageParams = Depends(page_params),
    applications: CollectionRepositoryInterface = Depends(repository_for(APPLICATIONS)),
    messages: CollectionRepositoryInterface = Depends(repository_for(MESSAGES)),
):
    """
    Messages on an application.

    Page 1 holds the newest messages; each page is returned oldest first so
    it reads as a conversation.
    """
    query = list_filters.application_messages(application_id, applications)
    return list_response(messages, query, params, "messages", transform=ListPage.reversed)


@router.get("/api/messages/unread/{user_id}", response_model=list_response_model("messages"))
def list_unread_messages(
    user_id: str,
    params: PageParams = Depends(page_params),
    messages: CollectionRepositoryInterface = Depends(repository_for(MESSAGES)),
):
    return list_response(messages, list_filters.unread_messages(user_id), params, "messages")
