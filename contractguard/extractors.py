"""Text extraction from uploaded contracts, dispatched on declared MIME type."""

import io
import logging

from .errors import PdfNotSupportedError, ReadError, UnsupportedFormatError
from .models import DOCX_MIME, PDF_MIME, TEXT_MIME, UploadedDocument

logger = logging.getLogger(__name__)


def _split_mime(mime_type: str) -> tuple[str, dict]:
    """Split 'text/plain; charset=latin-1' into the bare type and its parameters."""
    base, *params = (mime_type or "").split(";")
    parsed = {}
    for p in params:
        k, _, v = p.partition("=")
        if k.strip():
            parsed[k.strip().lower()] = v.strip().strip("\"'")
    return base.strip().lower(), parsed


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------

def read_plain_text(content: bytes, charset: str | None = None) -> str:
    encoding = charset or "utf-8-sig"
    try:
        return content.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise ReadError("Error reading text file") from e


# ---------------------------------------------------------------------------
# DOCX
# ---------------------------------------------------------------------------

def read_docx_text(content: bytes) -> str:
    """Raw text of a .docx: paragraphs and table rows in body order, one per line."""
    from docx import Document
    from docx.table import Table

    try:
        doc = Document(io.BytesIO(content))
        lines: list[str] = []
        for block in doc.iter_inner_content():
            if isinstance(block, Table):
                for row in block.rows:
                    cells = []
                    seen = set()
                    for cell in row.cells:
                        # a merged cell is yielded once per grid column it spans
                        if cell._tc in seen:
                            continue
                        seen.add(cell._tc)
                        cells.append(cell.text)
                    lines.append("\t".join(cells))
            else:
                lines.append(block.text)
        return "\n".join(lines)
    except Exception as e:
        logger.warning("DOCX extraction failed: %s", e)
        raise UnsupportedFormatError(
            "Error reading DOCX file. Please ensure the file is not corrupted."
        ) from e


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def extract_text(document: UploadedDocument) -> str:
    """Convert an upload into plain text based on its declared MIME type."""
    mime, params = _split_mime(document.mime_type)

    if mime == PDF_MIME:
        raise PdfNotSupportedError(
            "PDF files are not yet supported. Please convert your contract to a "
            "DOCX file or copy/paste the text into a new Word document and upload "
            "that instead."
        )
    if mime == DOCX_MIME:
        text = read_docx_text(document.content)
    elif mime == TEXT_MIME:
        text = read_plain_text(document.content, params.get("charset"))
    else:
        raise UnsupportedFormatError("Unsupported file type. Please upload a DOCX or TXT file.")

    logger.info("Extracted %d characters from %s (%s)", len(text), document.filename, mime)
    return text
