import logging
import os
from dataclasses import dataclass

import docx
import fitz  # PyMuPDF
from pdfminer.high_level import extract_text as pdfminer_extract_text

from segmenter import normalize_text

PDF_TEXT_MIN_LENGTH = 80  # Heuristic threshold to trigger the pdfminer fallback
SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")

logger = logging.getLogger(__name__)


class UnsupportedDocumentType(ValueError):
    """The uploaded file is not a PDF, DOCX or TXT document."""


@dataclass(frozen=True)
class ExtractedDocument:
    text: str
    non_text_elements: int = 0


def extract_text_from_file(file_path: str) -> ExtractedDocument:
    """Extract text from PDF, DOCX, or TXT files and count images/tables found."""
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found at {file_path}")

    ext = os.path.splitext(file_path)[1].lower()
    if ext == ".pdf":
        text, non_text = _extract_pdf_text(file_path)
    elif ext == ".docx":
        text, non_text = _extract_docx_text(file_path)
    elif ext == ".txt":
        text, non_text = _extract_txt_text(file_path), 0
    else:
        raise UnsupportedDocumentType(f"Unsupported file type for {file_path}")

    return ExtractedDocument(text=normalize_text(text), non_text_elements=non_text)


def _extract_pdf_text(file_path: str):
    text_parts = []
    non_text = 0
    with fitz.open(file_path) as pdf:
        for page in pdf:
            text_parts.append(page.get_text("text"))
            non_text += len(page.get_images(full=True))
            non_text += _count_pdf_tables(page)
    text = "\n".join(text_parts)

    if len(text.strip()) < PDF_TEXT_MIN_LENGTH:
        logger.warning("PyMuPDF returned little text for %s; trying pdfminer", file_path)
        fallback = pdfminer_extract_text(file_path) or ""
        if len(fallback.strip()) > len(text.strip()):
            text = fallback
    return text, non_text


def _count_pdf_tables(page) -> int:
    if not hasattr(page, "find_tables"):
        return 0
    return len(page.find_tables().tables)


def _extract_docx_text(file_path: str):
    document = docx.Document(file_path)
    text = "\n".join(para.text for para in document.paragraphs)
    return text, len(document.tables) + len(document.inline_shapes)


def _extract_txt_text(file_path: str) -> str:
    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()
