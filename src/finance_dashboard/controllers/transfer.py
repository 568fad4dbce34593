"""One-shot import and export of asset/debt files."""

import logging
from datetime import date
from pathlib import Path
from typing import Optional, Union

from finance_dashboard.api.client import FinanceAPI
from finance_dashboard.api.schemas import ImportResult
from finance_dashboard.controllers.base import MutationResult
from finance_dashboard.controllers.notifications import (
    NotificationLevel,
    Notifier,
    handle_error,
)
from finance_dashboard.core.exceptions import AppError, ValidationError
from finance_dashboard.domain.enums import ExportFormat, TransferTarget

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def detect_format(path: PathLike) -> ExportFormat:
    """Map a file's extension to an import format (json or csv only)."""
    extension = Path(path).suffix.lstrip(".").lower()
    try:
        return ExportFormat(extension)
    except ValueError:
        raise ValidationError("Please select a JSON or CSV file")


def default_export_filename(
    target: TransferTarget,
    fmt: ExportFormat,
    today: Optional[date] = None,
) -> str:
    """File name the service uses for its downloads, e.g. assets_2024-03-05.json."""
    target = TransferTarget(target)
    stem = "portfolio" if target is TransferTarget.ALL else target.value
    day = (today or date.today()).isoformat()
    return f"{stem}_{day}.{ExportFormat(fmt).value}"


def summarize_import(result: ImportResult, noun: str) -> str:
    """One-line human summary of an import result."""
    message = f"Imported {result.imported} {noun}"
    if result.skipped > 0:
        message += f", skipped {result.skipped} duplicates"
    if result.errors:
        message += f", {len(result.errors)} errors"
    return message


class TransferController:
    """Stateless import/export actions; nothing here is kept between calls."""

    def __init__(self, api: FinanceAPI, notifier: Notifier):
        self.api = api
        self.notifier = notifier

    def export_url(self, target: TransferTarget, fmt: ExportFormat) -> str:
        return self.api.export_url(target, fmt)

    def export_to(
        self,
        target: TransferTarget,
        fmt: ExportFormat,
        destination: PathLike,
    ) -> MutationResult:
        """Download a server-generated export and save it to destination."""
        destination = Path(destination)
        try:
            content = self.api.download_export(target, fmt)
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
                destination.write_bytes(content)
            except OSError as e:
                raise AppError(f"Cannot write {destination}: {e.strerror or e}") from e
        except AppError as e:
            message = handle_error(e, self.notifier)
            return MutationResult(ok=False, action="failed", message=message)

        message = f"Exported {TransferTarget(target).value} to {destination.name}"
        logger.info("Exported %s (%s) to %s", target, fmt, destination)
        self.notifier.notify(message, NotificationLevel.SUCCESS)
        return MutationResult(ok=True, action="exported", message=message, details=destination)

    def import_file(self, target: TransferTarget, path: PathLike) -> MutationResult:
        """
        Upload a JSON/CSV file for bulk import.

        The extension is checked before anything is read or sent.
        """
        target = TransferTarget(target)
        path = Path(path)
        try:
            fmt = detect_format(path)
            try:
                body = path.read_bytes()
            except OSError as e:
                raise AppError(f"Cannot read {path.name}: {e.strerror or e}") from e
            result = self.api.import_records(target, fmt, body)
        except AppError as e:
            message = handle_error(e, self.notifier)
            return MutationResult(ok=False, action="failed", message=message)

        if result.errors:
            logger.error("Import errors: %s", result.errors)

        message = summarize_import(result, target.value)
        level = NotificationLevel.WARNING if result.has_errors else NotificationLevel.SUCCESS
        self.notifier.notify(message, level)
        return MutationResult(ok=True, action="imported", message=message, details=result)
