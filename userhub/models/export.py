from typing import Any

from pydantic import BaseModel

# A single exported row: column id -> scalar value.
ExportRow = dict[str, Any]


class ExportColumn(BaseModel):
    """An output column: `id` keys into each row, `title` goes in the header."""

    id: str
    title: str
