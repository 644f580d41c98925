"""gridcalc — a reactive spreadsheet computation engine.

Usage::

    from gridcalc import Spreadsheet

    sheet = Spreadsheet()
    sheet["A1"] = "5"
    sheet["A2"] = "=A1*2"
    print(sheet["A2"].value)   # "10"

    sheet["A1"] = "7"
    print(sheet["A2"].value)   # "14"
"""

from gridcalc._cell import Cell
from gridcalc._csv import dump_csv, load_csv
from gridcalc._spreadsheet import Spreadsheet
from gridcalc._store import CellStore
from gridcalc._utils import column_index, column_label, make_ref, split_ref

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Cell",
    "CellStore",
    "Spreadsheet",
    "column_index",
    "column_label",
    "dump_csv",
    "load_csv",
    "make_ref",
    "split_ref",
]
