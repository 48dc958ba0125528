# =============================================================================
# app/routers/conversations.py - Buyer/Seller Messaging
# =============================================================================
# Pages and form posts for conversations about items.
# All endpoints require a session.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Form, Path, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.auth.dependencies import CurrentUser
from core.models.conversation import ConversationStartForm, MessageForm
from core.services.conversation_service import ConversationService
from lib.database import Database
from lib.schema import MAX_INTEGER

ConversationId = Annotated[int, Path(ge=1, le=MAX_INTEGER, description="Conversation ID")]


def create_router(db: Database, templates: Jinja2Templates) -> APIRouter:
    """Build the /conversations router around the shared database handle."""
    router = APIRouter()
    conversations = ConversationService(db)

    @router.get("", response_class=HTMLResponse)
    async def list_conversations(request: Request, user: CurrentUser):
        """Inbox: every conversation the user takes part in."""
        rows = await conversations.list_for_user(user.user_id)
        return templates.TemplateResponse(
            request,
            "conversations.html",
            {"username": user.name, "user_id": user.user_id, "conversations": rows},
        )

    @router.get("/{conversation_id}", response_class=HTMLResponse)
    async def show_conversation(
        request: Request,
        conversation_id: ConversationId,
        user: CurrentUser,
    ):
        """One conversation with its messages, oldest first."""
        conversation = await conversations.get_for_participant(conversation_id, user.user_id)
        messages = await conversations.list_messages(conversation_id)
        return templates.TemplateResponse(
            request,
            "conversation.html",
            {
                "username": user.name,
                "user_id": user.user_id,
                "conversation": conversation,
                "messages": messages,
            },
        )

    @router.post("")
    async def start_conversation(
        user: CurrentUser,
        form: Annotated[ConversationStartForm, Form()],
    ):
        """Message an item's seller (reuses an existing conversation)."""
        conversation_id = await conversations.start(user.user_id, form.item_id, form.body)
        return RedirectResponse(
            f"/conversations/{conversation_id}",
            status_code=status.HTTP_303_SEE_OTHER,
        )

    @router.post("/{conversation_id}/messages")
    async def post_message(
        conversation_id: ConversationId,
        user: CurrentUser,
        form: Annotated[MessageForm, Form()],
    ):
        """Reply in a conversation."""
        await conversations.add_message(conversation_id, user.user_id, form.body)
        return RedirectResponse(
            f"/conversations/{conversation_id}",
            status_code=status.HTTP_303_SEE_OTHER,
        )

    return router
