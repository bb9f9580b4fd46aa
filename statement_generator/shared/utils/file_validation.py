# statement_generator/shared/utils/file_validation.py
"""Validation of uploaded transaction files."""

from pathlib import Path
from typing import Any, Dict, Iterable

from fastapi import UploadFile

from statement_generator.core.exceptions import FileProcessingError
from statement_generator.shared.utils.logging_config import get_logger

logger = get_logger(__name__)

# Characters that never belong in an uploaded file name
DANGEROUS_CHARS = ['..', '/', '\\', '<', '>', ':', '"', '|', '?', '*']


class CsvFileValidator:
    """Checks name, extension and size of an uploaded CSV before it is parsed."""

    def __init__(self, max_file_size: int = 10 * 1024 * 1024, allowed_extensions: Iterable[str] = (".csv",)):
        self.max_file_size = max_file_size
        self.allowed_extensions = {extension.lower() for extension in allowed_extensions}

    async def read_validated(self, file: UploadFile) -> bytes:
        """
        Read an upload after validating it.

        Returns:
            The file content

        Raises:
            FileProcessingError: If validation fails
        """
        logger.info(f"Validating uploaded file: {file.filename}")
        self.validate_name(file.filename)
        content = await file.read()
        self.validate_content(content, file.filename)
        return content

    def validate_name(self, filename: str) -> None:
        if not filename:
            raise FileProcessingError("No filename provided")

        if any(char in filename for char in DANGEROUS_CHARS):
            raise FileProcessingError("Filename contains dangerous characters", file_name=filename)

        extension = Path(filename).suffix.lower()
        if extension not in self.allowed_extensions:
            raise FileProcessingError(
                f"Invalid file extension: {extension or '(none)'}",
                details=f"Allowed extensions: {', '.join(sorted(self.allowed_extensions))}",
                file_name=filename
            )

    def validate_content(self, content: bytes, filename: str = None) -> None:
        if len(content) == 0:
            raise FileProcessingError("Uploaded file is empty", file_name=filename)

        if len(content) > self.max_file_size:
            size_mb = len(content) / (1024 * 1024)
            max_mb = self.max_file_size / (1024 * 1024)
            raise FileProcessingError(
                f"File size {size_mb:.1f}MB exceeds maximum allowed size of {max_mb:.1f}MB",
                file_name=filename
            )

    def describe(self) -> Dict[str, Any]:
        return {
            "max_file_size": self.max_file_size,
            "allowed_extensions": sorted(self.allowed_extensions),
        }
