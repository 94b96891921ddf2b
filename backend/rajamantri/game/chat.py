from __future__ import annotations

from .models import CHAT_HISTORY_LIMIT, ChatMessage, Room


class ChatLog:
    def __init__(self, message_max_length: int = 200, name_max_length: int = 20):
        self.message_max_length = message_max_length
        self.name_max_length = name_max_length

    def append(self, room: Room, sender_id: str, name: str, message: str) -> ChatMessage | None:
        """Store a chat line in the room. Blank messages are dropped and return None."""
        text = (message or "").strip()[: self.message_max_length]
        if not text:
            return None

        msg = ChatMessage(
            sender_id=sender_id,
            name=(name or "").strip()[: self.name_max_length],
            message=text,
        )
        room.chat.append(msg)
        if len(room.chat) > CHAT_HISTORY_LIMIT:
            room.chat = room.chat[-CHAT_HISTORY_LIMIT:]
        return msg

    def history(self, room: Room) -> list[ChatMessage]:
        return list(room.chat)
