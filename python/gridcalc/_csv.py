"""CSV exchange: load a sheet from CSV text and dump it back."""

from __future__ import annotations

import csv
import io
import logging

from gridcalc._spreadsheet import Spreadsheet
from gridcalc._utils import column_index, is_ascii_digits, make_ref, split_ref

logger = logging.getLogger(__name__)


def load_csv(
    text: str,
    sheet: Spreadsheet | None = None,
    delimiter: str = ",",
) -> Spreadsheet:
    """Bulk-load CSV *text* into *sheet* (a new one by default).

    Field ``(i, j)`` goes to ``column_label(j) + str(i + 1)`` verbatim, so a
    field like ``=A1+1`` is stored as a literal and not evaluated.
    """
    if sheet is None:
        sheet = Spreadsheet()
    count = 0
    for row_idx, row in enumerate(csv.reader(io.StringIO(text), delimiter=delimiter)):
        for col_idx, field in enumerate(row):
            sheet.init_cell(make_ref(col_idx, row_idx), field)
            count += 1
    logger.debug("Loaded %d field(s) from CSV", count)
    return sheet


def _grid_position(ref: str) -> tuple[int, int] | None:
    """0-based (row, col) of a well-formed reference, else None."""
    column, row = split_ref(ref)
    if not column or not is_ascii_digits(row) or int(row) < 1:
        return None
    return int(row) - 1, column_index(column)


def dump_csv(sheet: Spreadsheet, delimiter: str = ",") -> str:
    """Render *sheet* as CSV text.

    The grid spans up to the last row and last column holding a non-empty
    value. Formula cells are written as their formula, others as their value.
    """
    placed: dict[tuple[int, int], str] = {}
    last_row = last_col = -1
    for ref, cell in sheet.store.items():
        pos = _grid_position(ref)
        if pos is None:
            logger.debug("Skipping malformed reference %r in CSV export", ref)
            continue
        placed[pos] = cell.formula if cell.formula is not None else cell.value
        if cell.value != "":
            last_row = max(last_row, pos[0])
            last_col = max(last_col, pos[1])

    out = io.StringIO()
    writer = csv.writer(out, delimiter=delimiter)
    for r in range(last_row + 1):
        writer.writerow([placed.get((r, c), "") for c in range(last_col + 1)])
    return out.getvalue()
