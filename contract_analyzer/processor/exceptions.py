class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class ContractNotFoundError(ProcessorError):
    """Raised when a contract record cannot be found in the database."""


class NoFileUploadedError(ProcessorError):
    """Raised when a request that needs a PDF carries none."""


class UnsupportedFileTypeError(ProcessorError):
    """Raised when the upload is not a PDF."""


class FileTooLargeError(ProcessorError):
    """Raised when the upload exceeds the configured size limit."""


class EmptyExtractedTextError(ProcessorError):
    """Raised when a PDF yields no text after normalization."""
