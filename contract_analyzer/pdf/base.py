from abc import ABC, abstractmethod
from collections.abc import Iterable


def join_pages(page_texts: Iterable[str]) -> str:
    """Join page texts, tagging each non-blank page with a [Page N] marker.

    Blank pages are skipped, so a PDF without any text layer yields "".
    """
    parts = [
        f"[Page {number}]\n{text.strip()}"
        for number, text in enumerate(page_texts, start=1)
        if text and text.strip()
    ]
    return "\n".join(parts)


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract text from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Page texts in order, each prefixed with "[Page N]" so the
            provider can cite page numbers. A PDF without a text layer
            (e.g. a scan) yields "".

        Raises:
            PdfExtractionError: if the bytes are not a readable PDF.
        """
