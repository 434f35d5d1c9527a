"""Maps domain exceptions to JSON error responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from contract_analyzer.config.settings import Settings
from contract_analyzer.database.exceptions import (
    StatusTransitionError,
    StoreReadError,
    StoreWriteError,
)
from contract_analyzer.extraction.exceptions import (
    ExtractionError,
    InvalidResponseFormatError,
    ProviderAuthError,
    ProviderQuotaExceededError,
    ProviderRateLimitedError,
)
from contract_analyzer.logging.logger import Log
from contract_analyzer.pdf.exceptions import PdfExtractionError
from contract_analyzer.processor.exceptions import (
    ContractNotFoundError,
    EmptyExtractedTextError,
    FileTooLargeError,
    NoFileUploadedError,
    UnsupportedFileTypeError,
)

# exception class -> (HTTP status, code, public message or None to use str(exc))
_CLIENT_ERRORS: dict[type[Exception], tuple[int, str, str | None]] = {
    NoFileUploadedError: (400, "NO_FILE", "No PDF uploaded"),
    UnsupportedFileTypeError: (400, "UNSUPPORTED_FILE_TYPE", "Only PDF files are allowed"),
    FileTooLargeError: (413, "FILE_TOO_LARGE", None),
    EmptyExtractedTextError: (
        400,
        "EMPTY_PDF",
        "PDF contains no extractable text. It may be a scanned image or empty.",
    ),
    PdfExtractionError: (400, "INVALID_PDF", "Could not read the uploaded PDF"),
}

_SERVER_ERRORS: dict[type[Exception], tuple[str, str]] = {
    InvalidResponseFormatError: (
        "INVALID_RESPONSE_FORMAT",
        "AI returned a response that could not be parsed",
    ),
    ProviderAuthError: ("AUTH_ERROR", "AI provider authentication failed"),
    ExtractionError: ("PROCESSING_ERROR", "Failed to process PDF"),
    StoreWriteError: ("STORE_ERROR", "Failed to save contract"),
    StatusTransitionError: ("STORE_ERROR", "Failed to save contract"),
    StoreReadError: ("STORE_ERROR", "Failed to load contract"),
}

_RATE_LIMITED_RETRY_AFTER_SECONDS = 60


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Install one handler per domain exception on the app."""

    async def handle_not_found(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": "Not found"})

    async def handle_client_error(request: Request, exc: Exception) -> JSONResponse:
        status_code, code, message = _lookup(_CLIENT_ERRORS, exc)
        Log.warning(f"{request.method} {request.url.path} rejected: {code} {exc}")
        return JSONResponse(
            status_code=status_code,
            content={"error": message or str(exc), "code": code},
        )

    async def handle_rate_limit(request: Request, exc: Exception) -> JSONResponse:
        if isinstance(exc, ProviderQuotaExceededError):
            code = "QUOTA_EXCEEDED"
            message = "AI provider quota exceeded. Please try again later."
            default_retry = settings.quota_retry_after_seconds
        else:
            code = "RATE_LIMITED"
            message = "AI provider rate limit reached. Please retry shortly."
            default_retry = _RATE_LIMITED_RETRY_AFTER_SECONDS
        retry_after = getattr(exc, "retry_after_seconds", None) or default_retry
        Log.warning(f"{request.method} {request.url.path} throttled: {code} {exc}")
        return JSONResponse(
            status_code=429,
            content={"error": message, "code": code, "retryAfter": retry_after},
            headers={"Retry-After": str(retry_after)},
        )

    async def handle_server_error(request: Request, exc: Exception) -> JSONResponse:
        code, message = _lookup(_SERVER_ERRORS, exc)
        Log.error(f"{request.method} {request.url.path} failed: {code} {exc}")
        content: dict[str, object] = {"error": message, "code": code}
        if not settings.is_production:
            content["details"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    app.add_exception_handler(ContractNotFoundError, handle_not_found)
    for exc_class in _CLIENT_ERRORS:
        app.add_exception_handler(exc_class, handle_client_error)
    app.add_exception_handler(ProviderRateLimitedError, handle_rate_limit)
    for exc_class in _SERVER_ERRORS:
        app.add_exception_handler(exc_class, handle_server_error)


def _lookup(table: dict[type[Exception], tuple], exc: Exception) -> tuple:
    for exc_class in type(exc).__mro__:
        if exc_class in table:
            return table[exc_class]
    raise KeyError(type(exc).__name__)
