"""Write row sets out as CSV files for download."""

import csv
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Sequence

from userhub.app.errors import InternalError
from userhub.models.export import ExportColumn, ExportRow

logger = logging.getLogger(__name__)


class ExportService:
    """Serializes rows to CSV files in `export_dir`.

    Callers own the returned file and are expected to delete it once sent.
    """

    def __init__(self, export_dir: str | Path | None = None) -> None:
        self.export_dir = Path(export_dir) if export_dir else Path(tempfile.gettempdir())

    def export_rows(
        self, rows: Iterable[ExportRow], columns: Sequence[ExportColumn]
    ) -> Path:
        """Write `rows` to a new CSV file and return its path.

        The header line holds the column titles; each row is written in
        column order. Missing keys become empty fields, extra keys are dropped.

        Raises:
            InternalError: the file could not be written. No partial file is left.
        """
        path: Path | None = None
        try:
            fd, name = tempfile.mkstemp(
                prefix="export-", suffix=".csv", dir=self.export_dir
            )
            path = Path(name)
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                write_csv(f, rows, columns)
        except OSError:
            logger.exception("Error writing CSV export")
            if path is not None:
                path.unlink(missing_ok=True)
            raise InternalError()

        logger.info(f"CSV file created at {path}")
        return path


def write_csv(f, rows: Iterable[ExportRow], columns: Sequence[ExportColumn]) -> None:
    writer = csv.DictWriter(
        f,
        fieldnames=[column.id for column in columns],
        restval="",
        extrasaction="ignore",
        lineterminator="\n",
    )
    writer.writerow({column.id: column.title for column in columns})
    writer.writerows(rows)
