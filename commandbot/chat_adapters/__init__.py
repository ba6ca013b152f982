"""Transport integrations."""

from .i_chat_adapter import IChatAdapter, MessageHandler

__all__ = ["IChatAdapter", "MessageHandler"]
