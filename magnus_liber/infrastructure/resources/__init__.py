"""Static text loaders."""
from .messages_loader import UiMessagesLoader
from .text_loader import SystemMessageLoader

__all__ = ["UiMessagesLoader", "SystemMessageLoader"]
