"""Conversation state for the chat client.

All conversation data is owned by the client. The store is an explicit
container handed to the page; persistence happens only through `dump`
and `load`.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from lingua_relay.prompts import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

Sender = Literal["user", "bot"]
ModelType = Literal["chat", "translate"]


def _new_id() -> str:
    return uuid.uuid4().hex


class FileInfo(BaseModel):
    """Metadata about a file attached to a message."""

    name: str
    size: int = Field(ge=0)
    type: str = ""


class Message(BaseModel):
    """A single message in a conversation.

    Attributes:
        id: Unique message identifier.
        content: Message text.
        sender: Who wrote it, "user" or "bot".
        timestamp: When the message was created.
        file_info: Attached file metadata for upload messages.
    """

    id: str = Field(default_factory=_new_id)
    content: str
    sender: Sender
    timestamp: datetime = Field(default_factory=datetime.now)
    file_info: FileInfo | None = None


class ConversationRecord(BaseModel):
    """A conversation with its messages and settings."""

    id: str = Field(default_factory=_new_id)
    title: str
    messages: list[Message] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    language: str = DEFAULT_LANGUAGE
    model_type: ModelType = "chat"


class ConversationStore:
    """Ordered collection of conversations with a current selection.

    Newest conversations come first. Every mutation goes through a method
    so callers can persist the store right after changing it.
    """

    def __init__(self, conversations: list[ConversationRecord] | None = None) -> None:
        self.conversations: list[ConversationRecord] = list(conversations or [])
        self.current_id: str | None = None

    @property
    def current(self) -> ConversationRecord | None:
        if self.current_id is None:
            return None
        return self.find(self.current_id)

    def find(self, conversation_id: str) -> ConversationRecord | None:
        """Return a conversation by id, or None if it no longer exists."""
        for conversation in self.conversations:
            if conversation.id == conversation_id:
                return conversation
        return None

    def get(self, conversation_id: str) -> ConversationRecord:
        """Return a conversation by id.

        Raises:
            KeyError: If no conversation has that id.
        """
        conversation = self.find(conversation_id)
        if conversation is None:
            raise KeyError(conversation_id)
        return conversation

    def create_conversation(
        self,
        language: str = DEFAULT_LANGUAGE,
        model_type: ModelType = "chat",
    ) -> ConversationRecord:
        """Start a new conversation, put it first, and select it."""
        conversation = ConversationRecord(
            title=f"New Chat {len(self.conversations) + 1}",
            language=language,
            model_type=model_type,
        )
        self.conversations.insert(0, conversation)
        self.current_id = conversation.id
        return conversation

    def select(self, conversation_id: str) -> ConversationRecord:
        conversation = self.get(conversation_id)
        self.current_id = conversation.id
        return conversation

    def add_message(
        self,
        conversation_id: str,
        content: str,
        sender: Sender,
        file_info: FileInfo | None = None,
    ) -> Message:
        conversation = self.get(conversation_id)
        message = Message(content=content, sender=sender, file_info=file_info)
        conversation.messages.append(message)
        return message

    def delete_message(self, conversation_id: str, message_id: str) -> None:
        conversation = self.get(conversation_id)
        conversation.messages = [m for m in conversation.messages if m.id != message_id]

    def delete_conversation(self, conversation_id: str) -> None:
        """Remove a conversation, clearing the selection if it was current."""
        conversation = self.get(conversation_id)
        self.conversations.remove(conversation)
        if self.current_id == conversation_id:
            self.current_id = None

    def copy_conversation(self, conversation_id: str) -> ConversationRecord:
        """Duplicate a conversation with fresh message ids and select the copy."""
        source = self.get(conversation_id)
        copy = ConversationRecord(
            title=f"{source.title} (Copy)",
            messages=[m.model_copy(update={"id": _new_id()}) for m in source.messages],
            language=source.language,
            model_type=source.model_type,
        )
        self.conversations.insert(0, copy)
        self.current_id = copy.id
        return copy

    def set_language(self, conversation_id: str, language: str) -> None:
        self.get(conversation_id).language = language

    def set_model_type(self, conversation_id: str, model_type: ModelType) -> None:
        self.get(conversation_id).model_type = model_type

    def dump(self) -> dict[str, Any]:
        """Serialize the store to JSON-safe data."""
        return {
            "current_id": self.current_id,
            "conversations": [c.model_dump(mode="json") for c in self.conversations],
        }

    @classmethod
    def load(cls, data: dict[str, Any] | None) -> "ConversationStore":
        """Rebuild a store from `dump` output.

        Records that fail validation are skipped with a warning. A current
        id that no longer matches a conversation is dropped.
        """
        if not data:
            return cls()

        conversations: list[ConversationRecord] = []
        for raw in data.get("conversations") or []:
            try:
                conversations.append(ConversationRecord.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed conversation record: {e}")

        store = cls(conversations)
        current_id = data.get("current_id")
        if current_id is not None and store.find(current_id) is not None:
            store.current_id = current_id
        return store
