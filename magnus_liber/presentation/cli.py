import logging
import sys

from ..config.settings import load_settings
from ..container import configure_container, container
from ..core.errors import ConfigurationError
from .console import ChatSession

logging.basicConfig(level=logging.WARNING, format="%(message)s")
logger = logging.getLogger(__name__)


def _fail_startup(error: ConfigurationError) -> None:
    logger.error(f"Startup failed: {error!r}")
    print(f"Error: {error}", file=sys.stderr)
    sys.exit(1)


def main():
    """CLI entry point."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        _fail_startup(e)

    logging.getLogger().setLevel(settings.log_level)
    logger.info(
        f"Using deployment {settings.deployment} at {settings.openai_uri} "
        f"(history={settings.history_length}, max_tokens={settings.max_tokens})"
    )

    configure_container(settings)

    try:
        # Static text is loaded here so missing files stop us before the first prompt.
        try:
            session = container.resolve(ChatSession)
        except ConfigurationError as e:
            _fail_startup(e)

        session.run()
    except KeyboardInterrupt:
        print()
        sys.exit(130)
    finally:
        container.close()


if __name__ == "__main__":
    main()
