"""Structured logging module with JSON output support."""

import json
import sys
import traceback
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

LEVEL_ORDER = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}


class StructuredLogger:
    """Logger that outputs one JSON object per log entry."""

    def __init__(self, component: str, file_path: str | None = None, min_level: str = "DEBUG"):
        """
        Initialize the structured logger.

        Args:
            component: Name of the component using this logger
            file_path: Optional path to append logs to
            min_level: Entries below this level are dropped
        """
        self.component = component
        self.file_path = file_path
        self.min_level = min_level.upper()
        if file_path:
            Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    def is_enabled_for(self, level: str) -> bool:
        """Check whether entries of the given level are written."""
        return LEVEL_ORDER.get(level, LEVEL_ORDER["INFO"]) >= LEVEL_ORDER.get(self.min_level, 0)

    @staticmethod
    def _exception_details(exception: Exception) -> dict[str, Any]:
        return {
            "type": type(exception).__name__,
            "message": str(exception),
            "stack_trace": "".join(
                traceback.format_exception(type(exception), exception, exception.__traceback__)
            ),
        }

    def _format_log_entry(
        self,
        level: str,
        message: str,
        context: dict[str, Any] | None = None,
        exception: Exception | None = None,
    ) -> str:
        entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level,
            "component": self.component,
            "message": message,
        }
        if context:
            entry["context"] = context
        if exception is not None:
            entry["exception"] = self._exception_details(exception)

        # default=str keeps dates and enums in context serializable
        return json.dumps(entry, default=str)

    def _write_log(self, log_entry: str) -> None:
        try:
            print(log_entry, file=sys.stdout)
            if self.file_path:
                with open(self.file_path, "a") as f:
                    f.write(log_entry + "\n")
        except OSError as e:
            print(f"Failed to write log: {e}", file=sys.stderr)

    def log(
        self,
        level: str,
        message: str,
        context: dict[str, Any] | None = None,
        exception: Exception | None = None,
    ) -> None:
        """
        Log a message with the specified level.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown levels log as INFO
            message: Log message
            context: Optional context fields
            exception: Optional exception, recorded with type, message and stack trace
        """
        level = level.upper()
        if level not in LEVEL_ORDER:
            level = "INFO"
        if not self.is_enabled_for(level):
            return
        self._write_log(self._format_log_entry(level, message, context, exception))

    def debug(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.log("DEBUG", message, context)

    def info(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.log("INFO", message, context)

    def warning(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.log("WARNING", message, context)

    def error(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        exception: Exception | None = None,
    ) -> None:
        self.log("ERROR", message, context, exception)

    def critical(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        exception: Exception | None = None,
    ) -> None:
        self.log("CRITICAL", message, context, exception)
