from fastapi import UploadFile

from contract_analyzer.processor.exceptions import (
    FileTooLargeError,
    NoFileUploadedError,
    UnsupportedFileTypeError,
)

PDF_MIME_TYPE = "application/pdf"


def read_pdf_upload(upload: UploadFile | None, max_bytes: int) -> tuple[str, bytes]:
    """Validate a multipart PDF upload and return (file name, bytes).

    The spooled upload file is closed on every path.

    Raises:
        NoFileUploadedError: if no file was sent.
        UnsupportedFileTypeError: if the file is not a PDF.
        FileTooLargeError: if the file exceeds max_bytes.
    """
    if upload is None:
        raise NoFileUploadedError("No PDF uploaded")
    try:
        if not upload.filename:
            raise NoFileUploadedError("No PDF uploaded")
        if upload.content_type != PDF_MIME_TYPE or not upload.filename.lower().endswith(".pdf"):
            raise UnsupportedFileTypeError("Only PDF files are allowed")
        data = upload.file.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise FileTooLargeError(f"File exceeds the {max_bytes // (1024 * 1024)}MB upload limit")
        return upload.filename, data
    finally:
        upload.file.close()
