"""
Kiosk Estimator - Import File Parser

Reads {name, quantity} rows from a CSV or Excel file for bulk cabinet import.
"""
import logging
import os
from io import BytesIO
from typing import BinaryIO

import pandas as pd

from estimator.application.importer import ImportEntry
from estimator.domain.exceptions import ImportParsingError

logger = logging.getLogger(__name__)

NAME_HEADERS = ("name", "item", "description", "cabinet")
QUANTITY_HEADERS = ("quantity", "qty", "count")


def _find_column(df: pd.DataFrame, candidates: tuple[str, ...]):
    lookup = {str(c).strip().lower(): c for c in df.columns}
    for candidate in candidates:
        if candidate in lookup:
            return lookup[candidate]
    return None


def parse_import_file(file: BinaryIO | bytes, file_name: str) -> list[ImportEntry]:
    """
    Parse an import list.

    Header matching is case-insensitive; "name"/"item"/"description" and
    "quantity"/"qty" are accepted. Blank rows are skipped. Quantities are
    passed through untouched (the matcher validates them).

    Args:
        file: File object or raw bytes
        file_name: Original file name (extension picks CSV vs Excel)

    Returns:
        ImportEntry list in file order

    Raises:
        ImportParsingError: If the file cannot be read or lacks the columns
    """
    try:
        content = file.read() if hasattr(file, "read") else file
        ext = os.path.splitext(file_name)[1].lower()
        if ext in (".xlsx", ".xlsm", ".xls"):
            df = pd.read_excel(BytesIO(content), engine="openpyxl")
        else:
            df = pd.read_csv(BytesIO(content))
    except Exception as e:
        logger.error(f"Import file parsing failed: {e}", exc_info=True)
        raise ImportParsingError(f"Failed to read import file: {e}", file_name=file_name)

    name_col = _find_column(df, NAME_HEADERS)
    qty_col = _find_column(df, QUANTITY_HEADERS)
    if name_col is None or qty_col is None:
        raise ImportParsingError("Import file needs 'name' and 'quantity' columns", file_name=file_name)

    entries = []
    for _, row in df.iterrows():
        name = row[name_col]
        quantity = row[qty_col]
        if pd.isna(name) or not str(name).strip():
            continue
        entries.append(ImportEntry(
            name=str(name).strip(),
            quantity=None if pd.isna(quantity) else quantity,
        ))

    logger.info(f"✅ Parsed import file {file_name}: {len(entries)} rows")
    return entries
