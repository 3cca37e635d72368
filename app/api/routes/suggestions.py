"""
Message suggestion endpoint.
"""
from fastapi import APIRouter
from pydantic import BaseModel

from app.services.suggestions import suggest_message

router = APIRouter(prefix="/api", tags=["suggestions"])


class SuggestionRequest(BaseModel):
    messageContext: str = ""
    userPreferences: str = ""


@router.post("/ai-message-suggestions")
async def message_suggestions(body: SuggestionRequest):
    """Templated marketing message for a campaign context."""
    return {"suggestedMessage": suggest_message(body.messageContext, body.userPreferences)}
