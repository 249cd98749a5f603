"""Per-entry tutor conversation."""

import logging
from typing import TYPE_CHECKING, List, Optional

from ..models import ChatMessage, Entry
from ..services.errors import ChatError

if TYPE_CHECKING:
    from ..services.ai_service import AIService

logger = logging.getLogger(__name__)


class ChatSession:
    """
    Conversation about a single entry. Not persisted.
    
    Usage:
        chat = controller.open_chat()
        reply = await chat.send("Quando uso 'estar'?")
    """
    
    EMPTY_REPLY = "Sorry, I couldn't answer that."
    ERROR_REPLY = "Error connecting to the brain."
    
    def __init__(self, tutor: "AIService", entry: Entry):
        self.tutor = tutor
        self.entry = entry
        self.messages: List[ChatMessage] = []
        self.loading = False
    
    async def send(self, text: str) -> Optional[ChatMessage]:
        """
        Send a user message and append the tutor's reply.
        
        Blank messages are ignored. Backend failures become a fallback
        reply instead of an exception.
        
        Returns:
            The reply message, or None for a blank message
        """
        if not text or not text.strip():
            return None
        
        prior_turns = list(self.messages)
        self.messages.append(ChatMessage(role="user", text=text))
        self.loading = True
        try:
            answer = await self.tutor.answer_chat(prior_turns, text, self.entry)
            reply = ChatMessage(role="model", text=answer or self.EMPTY_REPLY)
        except ChatError as e:
            logger.warning("Chat about %r failed: %s", self.entry.term, e)
            reply = ChatMessage(role="model", text=self.ERROR_REPLY)
        finally:
            self.loading = False
        
        self.messages.append(reply)
        return reply
