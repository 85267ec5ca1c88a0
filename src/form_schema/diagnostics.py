"""
Logging and diagnostics for the form-schema package.

Decoding is deliberately permissive: unknown discriminators, legacy
representations and malformed bounds are repaired or dropped instead of
raising. Every such repair is reported as a ``Diagnostic`` so callers can
surface it, and (when enabled in the config) mirrored to the package logger.
"""

import json
import logging

from pydantic import BaseModel, Field

from form_schema.config import get_config

logger = logging.getLogger("form_schema")
logger.addHandler(logging.NullHandler())


class Diagnostic(BaseModel):
    """A single non-fatal anomaly found while decoding a record."""

    code: str = Field(..., description="Machine readable anomaly code")
    message: str = Field(..., description="Human-readable description")
    field_id: str | None = Field(default=None, description="Id of the affected field")
    attribute: str | None = Field(default=None, description="Affected attribute (wire name)")


class DiagnosticReport(BaseModel):
    """Diagnostics collected during one decode call."""

    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def count(self) -> int:
        """Get the number of collected diagnostics."""
        return len(self.diagnostics)

    def codes(self) -> list[str]:
        """Get the anomaly codes in the order they were reported."""
        return [d.code for d in self.diagnostics]

    def for_field(self, field_id: str) -> list[Diagnostic]:
        """Get all diagnostics reported for a specific field."""
        return [d for d in self.diagnostics if d.field_id == field_id]


def report_diagnostic(
    report: DiagnosticReport | None,
    code: str,
    message: str,
    field_id: str | None = None,
    attribute: str | None = None,
) -> Diagnostic:
    """
    Record a diagnostic on ``report`` (if given) and log it.

    Returns:
        The created Diagnostic.
    """
    diagnostic = Diagnostic(code=code, message=message, field_id=field_id, attribute=attribute)
    if report is not None:
        report.diagnostics.append(diagnostic)
    if get_config().log_diagnostics:
        logger.warning("[%s] %s (field=%s)", code, message, field_id)
    return diagnostic


class JsonLinesFileHandler(logging.FileHandler):
    """
    A logging handler that writes each record as one JSON object per line.

    Useful for persistent logging and later analysis.
    """

    def __init__(self, file_path: str = "form_schema.jsonl"):
        super().__init__(file_path, mode="a", encoding="utf-8")

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps({
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
            "time": record.created,
        })


def setup_logging(
    enabled: bool = True,
    console: bool = True,
    level: str | None = None,
    file_path: str | None = None,
) -> None:
    """
    Configure logging for the form-schema package.

    Args:
        enabled: Whether package logging is enabled.
        console: Whether to print log records to stderr.
        level: Log level name. If None, uses config.log_level.
        file_path: Optional file path to write JSON-lines records to.

    Example:
        >>> from form_schema.diagnostics import setup_logging
        >>> setup_logging(level="INFO", file_path="decode.jsonl")
    """
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())

    if not enabled:
        logger.disabled = True
        return

    logger.disabled = False
    logger.setLevel(level or get_config().log_level)

    if console:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)

    if file_path:
        logger.addHandler(JsonLinesFileHandler(file_path=file_path))


def disable_logging() -> None:
    """Disable all package logging."""
    logger.disabled = True


def enable_logging() -> None:
    """Enable package logging (handlers are left as configured)."""
    logger.disabled = False
