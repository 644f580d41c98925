"""Cell reference helpers: split "AZ7" into parts, convert column labels."""

from __future__ import annotations


def split_ref(ref: str) -> tuple[str, str]:
    """Split a reference into ``(column, row)``.

    Leading ``A``-``Z`` characters form the column. Everything from the
    first other character onward is the row, taken verbatim, so
    ``"B12"`` -> ``("B", "12")`` and ``"B"`` -> ``("B", "")``.
    """
    for i, ch in enumerate(ref):
        if not ("A" <= ch <= "Z"):
            return ref[:i], ref[i:]
    return ref, ""


def column_label(index: int) -> str:
    """0-based column index -> bijective base-26 label (0 -> A, 26 -> AA)."""
    if index < 0:
        raise ValueError(f"Column index must be non-negative, got {index}")
    label = ""
    n = index + 1
    while n > 0:
        remainder = (n - 1) % 26
        label = chr(ord("A") + remainder) + label
        n = (n - 1) // 26
    return label


def column_index(label: str) -> int:
    """Inverse of :func:`column_label` (``"AA"`` -> 26)."""
    if not label or not all("A" <= ch <= "Z" for ch in label):
        raise ValueError(f"Invalid column label: {label!r}")
    index = 0
    for ch in label:
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index - 1


def make_ref(col_index: int, row_index: int) -> str:
    """0-based (column, row) -> reference string, e.g. (0, 0) -> ``"A1"``."""
    return f"{column_label(col_index)}{row_index + 1}"


def is_ascii_digits(text: str) -> bool:
    """True for a non-empty run of ``0``-``9`` only (``"²"`` and ``"５"`` fail)."""
    return bool(text) and all("0" <= ch <= "9" for ch in text)
