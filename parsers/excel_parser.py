"""
Excel parser for product imports.

Reads the first sheet of an uploaded workbook into raw row dicts keyed by the
header text. Header aliasing happens later, in parsers.field_map.
"""

from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Union
import structlog

import pandas as pd

from exceptions import ExcelParseError, UnsupportedFileTypeError

logger = structlog.get_logger(__name__)

RawRow = dict[str, Any]

SUPPORTED_EXTENSIONS = {".xlsx": "openpyxl", ".xls": "xlrd"}


def read_first_sheet(
    file: Union[str, Path, bytes, BytesIO],
    filename: Optional[str] = None,
) -> list[RawRow]:
    """
    Parse the first sheet of an Excel workbook.

    Args:
        file: File path, raw bytes or file-like object
        filename: Original upload name, used to pick the engine

    Returns:
        One dict per non-blank data row, header -> cell value (None for empty cells)

    Raises:
        UnsupportedFileTypeError: If the name is not .xlsx/.xls
        ExcelParseError: If the workbook cannot be read
    """
    if isinstance(file, bytes):
        file = BytesIO(file)
    if filename is None and isinstance(file, (str, Path)):
        filename = str(file)

    logger.info("parsing_excel", filename=filename, file_type=type(file).__name__)

    df = _read_dataframe(file, _engines_for(filename))

    df.columns = [str(col).strip() for col in df.columns]
    df = df.dropna(how="all")
    df = df.astype(object).where(pd.notna(df), None)

    rows = df.to_dict(orient="records")

    logger.info("excel_parsed", filename=filename, row_count=len(rows))

    return rows


# ===================
# HELPER FUNCTIONS
# ===================

def _engines_for(filename: Optional[str]) -> tuple[str, ...]:
    """Engines to try, in order, for the given file name."""
    if filename is None:
        # Try openpyxl first (xlsx), fall back to xlrd (xls)
        return ("openpyxl", "xlrd")

    extension = Path(filename).suffix.lower()
    if extension not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(filename)
    return (SUPPORTED_EXTENSIONS[extension],)


def _read_dataframe(file: Union[str, Path, BytesIO], engines: tuple[str, ...]) -> pd.DataFrame:
    last_error: Optional[Exception] = None

    for engine in engines:
        try:
            return pd.read_excel(file, sheet_name=0, engine=engine)
        except Exception as e:
            last_error = e
            logger.debug("excel_engine_failed", engine=engine, error=str(e))
            if hasattr(file, "seek"):
                file.seek(0)

    logger.error("excel_read_failed", error=str(last_error))
    raise ExcelParseError(
        message="Failed to read Excel file",
        details={"original_error": str(last_error)}
    )
