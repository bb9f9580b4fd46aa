# statement_generator/core/exceptions.py
"""Custom exceptions and error handlers with business-friendly messages."""

from datetime import datetime
from typing import Iterable, List, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from statement_generator.shared.utils.logging_config import get_logger

logger = get_logger(__name__)


class StatementError(Exception):
    """Base exception for statement generation errors with business-friendly messaging."""

    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        details: str = None,
        user_message: str = None,
        error_code: str = None,
        suggestions: list = None
    ):
        self.message = message
        self.details = details
        self.user_message = user_message or "The statement could not be generated. Please check your input and try again."
        self.error_code = error_code or self.__class__.__name__.upper()
        self.suggestions = suggestions or []
        self.timestamp = datetime.now().isoformat()
        super().__init__(self.message)


class UnknownInstitutionError(StatementError):
    """Requested institution identifier is not in the schema registry."""

    def __init__(self, bank_id: str, supported: Optional[Iterable[str]] = None):
        self.bank_id = bank_id
        self.supported: List[str] = list(supported or [])
        super().__init__(
            message=f"Unknown institution identifier: {bank_id!r}",
            details=f"Supported institutions: {', '.join(self.supported)}" if self.supported else None,
            user_message=f"The bank '{bank_id}' is not supported.",
            error_code="UNKNOWN_INSTITUTION",
            suggestions=[
                "Pick one of the supported bank codes",
                "Bank codes are short identifiers such as PNB or HDFC"
            ]
        )


class MeasurementFailureError(StatementError):
    """Text height could not be determined, so the row cannot be paginated safely."""

    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, message: str, details: str = None):
        super().__init__(
            message=message,
            details=details,
            user_message="A transaction row could not be measured, so the statement layout was aborted.",
            error_code="MEASUREMENT_FAILURE",
            suggestions=[
                "Check the transaction text for unusual characters",
                "Shorten very long descriptions"
            ]
        )


class RowOverflowError(MeasurementFailureError):
    """A single row is taller than a whole continuation page."""

    def __init__(self, position: int, row_height: float, available: float):
        self.position = position
        self.row_height = row_height
        self.available = available
        super().__init__(
            message=f"Row {position} needs {row_height:.1f}pt but a page only offers {available:.1f}pt",
            details="The row would be split across pages, which the statement layout does not support."
        )
        self.error_code = "ROW_OVERFLOW"


class FileProcessingError(StatementError):
    """Exception for uploaded file errors with specific guidance."""

    def __init__(self, message: str, details: str = None, file_name: str = None):
        self.file_name = file_name
        super().__init__(
            message=message,
            details=details,
            user_message=self._get_file_error_message(message, file_name),
            error_code="FILE_PROCESSING_ERROR",
            suggestions=[
                "Download the CSV template for your bank and fill it in",
                "Make sure the first row contains the column names",
                "Save the file as comma-separated values (.csv)"
            ]
        )

    def _get_file_error_message(self, message: str, file_name: str = None) -> str:
        """Generate specific file error messages."""
        file_ref = f" '{file_name}'" if file_name else ""
        lowered = message.lower()

        if "empty" in lowered:
            return f"The uploaded file{file_ref} appears to be empty. Please upload a file with data."
        elif "size" in lowered or "large" in lowered:
            return f"The file{file_ref} is too large. Please upload a smaller file."
        elif "extension" in lowered or "type" in lowered:
            return f"The file{file_ref} is not a CSV file. Please upload a .csv file."
        elif "header" in lowered:
            return f"The file{file_ref} has no header row. The first row must list the column names."
        return f"We couldn't read the file{file_ref}. Please check the file format."


def _error_payload(exc: StatementError) -> dict:
    return {
        "success": False,
        "error_code": exc.error_code,
        "message": exc.user_message,
        "technical_details": exc.details,
        "suggestions": exc.suggestions,
        "timestamp": exc.timestamp,
        "type": exc.__class__.__name__
    }


# Error handlers with enhanced user experience
async def statement_error_handler(request: Request, exc: StatementError) -> JSONResponse:
    """Handle statement errors with user-friendly messages."""
    logger.error(f"Statement error: {exc.message}", extra={
        "error_code": exc.error_code,
        "details": exc.details,
        "timestamp": exc.timestamp,
        "request_url": str(request.url)
    })

    payload = _error_payload(exc)
    if isinstance(exc, UnknownInstitutionError):
        payload["supported_banks"] = exc.supported

    return JSONResponse(status_code=exc.http_status, content=payload)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle validation errors with user-friendly messages."""
    logger.warning(f"Validation error on {request.method} {request.url.path}", extra={
        "request_url": str(request.url),
        "method": request.method,
        "errors": exc.errors()
    })

    user_friendly_errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error.get('loc', []))
        msg = error.get('msg', '')
        user_friendly_errors.append({
            "field": field,
            "message": _convert_validation_error_to_user_message(field, msg),
            "type": error.get('type'),
            "technical_message": msg
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "success": False,
            "error_code": "VALIDATION_ERROR",
            "message": "Please check your input and try again.",
            "validation_errors": user_friendly_errors,
            "timestamp": datetime.now().isoformat(),
            "type": "ValidationError"
        }
    )


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP errors with consistent format."""
    logger.info(f"HTTP error {exc.status_code}: {exc.detail}", extra={
        "request_url": str(request.url),
        "status_code": exc.status_code
    })

    status_messages = {
        400: "Bad request. Please check your input and try again.",
        404: "The requested resource was not found.",
        413: "File too large. Please upload a smaller file.",
        415: "Unsupported file type. Please upload a CSV file.",
        500: "Internal server error. Please try again later."
    }

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error_code": f"HTTP_{exc.status_code}",
            "message": status_messages.get(exc.status_code, exc.detail),
            "technical_details": exc.detail,
            "timestamp": datetime.now().isoformat(),
            "type": "HTTPException"
        }
    )


async def general_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle general exceptions without exposing internal details."""
    logger.error(f"Unexpected error: {str(exc)}", extra={
        "request_url": str(request.url),
        "exception_type": exc.__class__.__name__
    }, exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error_code": "INTERNAL_SERVER_ERROR",
            "message": "We encountered an unexpected error while generating your statement.",
            "suggestions": [
                "Please try again in a few moments",
                "If the problem persists, contact support"
            ],
            "timestamp": datetime.now().isoformat(),
            "type": "InternalServerError"
        }
    )


def _convert_validation_error_to_user_message(field: str, msg: str) -> str:
    """Convert technical validation errors to user-friendly messages."""
    lowered = msg.lower()
    if "required" in lowered:
        return f"The field '{field}' is required. Please provide a value."
    elif "valid dictionary" in lowered or "object" in lowered:
        return f"The field '{field}' must be a set of named values."
    elif "valid list" in lowered or "array" in lowered:
        return f"The field '{field}' must be a list."
    elif "string" in lowered:
        return f"The field '{field}' must be text."
    return f"The field '{field}' has an invalid value. Please check and try again."


def register_exception_handlers(app) -> None:
    """Attach every handler above to a FastAPI application."""
    app.add_exception_handler(StatementError, statement_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(Exception, general_error_handler)
