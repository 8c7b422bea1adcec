"""Logging configuration and service."""
import json
import logging
import logging.config
from typing import Any, Dict, Optional

from .config import Settings

# Attributes every LogRecord carries; anything else was passed via ``extra``.
STANDARD_LOG_RECORD_ATTRIBUTES = frozenset(
    set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}
)


def _non_serializable(value: Any) -> str:
    return f"<non-serializable: {type(value).__name__}>"


class BaseFormatter(logging.Formatter):
    """Splits a record into base fields, ``extra`` fields and exception text."""

    def __init__(self, settings_instance: Settings) -> None:
        """Initialize formatter.

        Args:
            settings_instance: Settings instance for configuration
        """
        super().__init__()
        self.settings = settings_instance

    def get_base_fields(self, record: logging.LogRecord) -> Dict[str, Any]:
        return {
            "time": self.formatTime(record),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

    def get_extra_fields(self, record: logging.LogRecord) -> Dict[str, Any]:
        """Fields passed through ``extra={...}`` plus ``LOG_EXTRA_FIELDS``.

        Args:
            record: Log record to process

        Returns:
            Dictionary with extra fields
        """
        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in STANDARD_LOG_RECORD_ATTRIBUTES
        }
        for field in self.settings.LOG_EXTRA_FIELDS:
            if hasattr(record, field):
                extra[field] = getattr(record, field)
        return extra

    def get_exception_text(self, record: logging.LogRecord) -> Optional[str]:
        if not record.exc_info:
            return None
        return self.formatException(record.exc_info) or None


class JsonFormatter(BaseFormatter):
    """One JSON object per line.

    Extra fields are merged into the top level. Values that cannot be
    serialized are replaced with a placeholder naming their type.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = self.get_base_fields(record)
        log_data.update(self.get_extra_fields(record))
        exception_text = self.get_exception_text(record)
        if exception_text:
            log_data["exception"] = exception_text
        return json.dumps(log_data, default=_non_serializable)


class TextFormatter(BaseFormatter):
    """Human-readable ``time - level - name - message`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        msg = " - ".join(str(v) for v in self.get_base_fields(record).values())
        extra = self.get_extra_fields(record)
        if extra:
            msg += f" - extra={extra}"
        exception_text = self.get_exception_text(record)
        if exception_text:
            msg += f"\n{exception_text}"
        return msg


class StructuredFormatter(BaseFormatter):
    """Space-separated ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        fields = self.get_base_fields(record)
        fields.update(self.get_extra_fields(record))
        exception_text = self.get_exception_text(record)
        if exception_text:
            fields["exception"] = exception_text
        return " ".join(f"{key}={value}" for key, value in fields.items())


class LoggerService:
    """Service for configuring and providing loggers."""

    def __init__(
        self,
        settings_instance: Settings,
        config: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize logging configuration.

        Args:
            settings_instance: Settings instance to use
            config: Optional ``logging.config.dictConfig`` dictionary
        """
        self.settings = settings_instance
        self.formatters: Dict[str, logging.Formatter] = {
            "json": JsonFormatter(settings_instance),
            "text": TextFormatter(settings_instance),
            "structured": StructuredFormatter(settings_instance),
        }
        if settings_instance.LOG_FORMAT not in self.formatters:
            raise ValueError(f"Unknown log format: {settings_instance.LOG_FORMAT}")

        if config:
            logging.config.dictConfig(config)
            return

        level = logging.getLevelName(settings_instance.LOG_LEVEL.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {settings_instance.LOG_LEVEL}")
        logging.getLogger().setLevel(level)

        # httpx and httpcore log every upstream call at INFO
        for name in settings_instance.LOG_QUIET_LOGGERS:
            logging.getLogger(name).setLevel(max(level, logging.WARNING))

    def get_logger(self, name: str, format: Optional[str] = None) -> logging.Logger:
        """Get logger instance.

        A stream handler with the configured formatter is attached the first
        time a logger name is requested.

        Args:
            name: Logger name, typically __name__
            format: Optional format override (json, text, structured)

        Returns:
            Logger instance
        """
        logger = logging.getLogger(name)

        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(self.formatters[format or self.settings.LOG_FORMAT])
            logger.addHandler(handler)

        return logger
