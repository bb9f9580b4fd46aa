"""Use case for importing uploaded transaction CSV files."""

from io import BytesIO
from typing import Any, Dict, List

import pandas as pd

from statement_generator.core.exceptions import FileProcessingError
from statement_generator.shared.utils.logging_config import get_logger

logger = get_logger(__name__)


class ImportStatementCsvUseCase:
    """
    Reads a transaction CSV into raw rows.

    Every cell is kept as the text written in the file; column names are not
    interpreted here (the field resolver matches them against the bank schema).
    """

    def __init__(self, encoding: str = "utf-8-sig"):
        self.encoding = encoding

    def execute(self, file_bytes: bytes, file_name: str = None) -> List[Dict[str, Any]]:
        """
        Parse CSV bytes into row dictionaries.

        Args:
            file_bytes: Uploaded file content
            file_name: Original file name (for error messages)

        Returns:
            One dict per data row, keyed by the header row's column names

        Raises:
            FileProcessingError: Empty file, missing header row or undecodable content
        """
        if not file_bytes or not file_bytes.strip():
            raise FileProcessingError("Uploaded file is empty", file_name=file_name)

        try:
            df = pd.read_csv(
                BytesIO(file_bytes),
                dtype=str,
                keep_default_na=False,
                encoding=self.encoding,
                skip_blank_lines=True,
            )
        except UnicodeDecodeError as e:
            raise FileProcessingError(
                "Could not decode file",
                details=f"Expected {self.encoding} text: {e}",
                file_name=file_name
            ) from e
        except pd.errors.EmptyDataError as e:
            raise FileProcessingError("Uploaded file is empty", details=str(e), file_name=file_name) from e
        except pd.errors.ParserError as e:
            raise FileProcessingError("Could not parse CSV content", details=str(e), file_name=file_name) from e

        columns = [str(column).strip() for column in df.columns]
        if not any(columns) or all(column.startswith("Unnamed:") for column in columns):
            raise FileProcessingError("CSV file has no header row", file_name=file_name)

        rows = df.to_dict(orient="records")
        # drop rows where every cell is blank
        rows = [row for row in rows if any(str(value).strip() for value in row.values())]

        logger.info(f"Imported {len(rows)} rows with {len(columns)} columns from {file_name or 'upload'}")
        return rows
