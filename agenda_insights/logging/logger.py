import logging
import sys


class Log:
    """Centralized logging with a key=value context suffix.

    Context keyword arguments are rendered after the message, e.g.
    ``Log.info("Stage finished", stage="redact", item_id="42")`` becomes
    ``Stage finished stage=redact item_id=42``. Callers pass identifiers,
    counts and stage names only; document text never goes through here.
    """

    _logger: logging.Logger = logging.getLogger("agenda_insights")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        cls._logger.propagate = False
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(cls._render(message, context))

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(cls._render(message, context))

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(cls._render(message, context))

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(cls._render(message, context))

    @staticmethod
    def _render(message: str, context: dict[str, object]) -> str:
        if not context:
            return message
        suffix = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{message} {suffix}"
