import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Registration:
    factory: Callable[[], Any]
    singleton: bool = False


@dataclass
class Container:
    """Minimal dependency container keyed by interface type."""

    _registrations: dict[type, Registration] = field(default_factory=dict)
    # Creation order, so close() can release in reverse.
    _instances: dict[type, Any] = field(default_factory=dict)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._registrations[interface] = Registration(factory, singleton)
        self._instances.pop(interface, None)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._instances:
            return self._instances[interface]

        registration = self._registrations.get(interface)
        if registration is None:
            raise KeyError(f"No factory registered for {interface.__name__}")

        instance = registration.factory()
        if registration.singleton:
            self._instances[interface] = instance
        return instance

    def is_resolved(self, interface: type) -> bool:
        return interface in self._instances

    def close(self) -> None:
        """Close cached singletons that hold resources, newest first."""
        for interface, instance in reversed(list(self._instances.items())):
            close = getattr(instance, "close", None)
            if callable(close):
                logger.info(f"Closing {interface.__name__}")
                close()
        self._instances.clear()

    def reset(self) -> None:
        """Drop cached singletons without closing them (for testing)."""
        self._instances.clear()


container = Container()


def configure_container(settings: Settings) -> Container:
    """Configure container with all dependencies.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.models.chat import ChatHistory
    from .core.models.ui import UiMessages
    from .core.protocols.llm import LLMProtocol
    from .core.services.chat_service import ChatService
    from .infrastructure.llm.azure_client import AzureChatClient
    from .infrastructure.resources import SystemMessageLoader, UiMessagesLoader
    from .presentation.console import ChatSession

    container.register(
        UiMessages,
        lambda: UiMessagesLoader().load(Path(settings.messages_path)),
        singleton=True,
    )

    container.register(
        LLMProtocol,
        lambda: AzureChatClient(
            endpoint=settings.openai_uri,
            api_key=settings.openai_key,
            deployment=settings.deployment,
        ),
        singleton=True,
    )

    def build_chat_service() -> ChatService:
        # Static text first: a missing file must not leave an open client behind.
        system_message = SystemMessageLoader().load(Path(settings.system_message_path))
        return ChatService(
            llm=container.resolve(LLMProtocol),
            system_message=system_message,
            max_tokens=settings.max_tokens,
            sampling=settings.sampling,
        )

    container.register(ChatService, build_chat_service, singleton=True)

    def build_session() -> ChatSession:
        messages = container.resolve(UiMessages)
        return ChatSession(
            chat_service=container.resolve(ChatService),
            messages=messages,
            history=ChatHistory(max_messages=settings.history_length),
        )

    # A fresh session gets a fresh history.
    container.register(ChatSession, build_session)

    logger.info("Container configured")
    return container
