"""Text extraction from uploaded PDF handouts.

The extractor reads every page in order, joins the page's words with single
spaces and separates pages with a blank line. The final string is flattened:
every whitespace run becomes one space and the ends are trimmed.
"""

import io
import logging
import re

import pdfplumber

from quizzer.errors import ParseError

logger = logging.getLogger(__name__)

WHITESPACE_RUN = re.compile(r"\s+")
PAGE_SEPARATOR = "\n\n"


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and trim both ends."""
    return WHITESPACE_RUN.sub(" ", text).strip()


def extract_text(file_bytes: bytes) -> str:
    """Extract normalized text from raw PDF bytes.

    Args:
        file_bytes: Raw contents of a PDF document

    Returns:
        All page text as one flat string (empty for a document without pages)

    Raises:
        ParseError: The bytes are not a readable PDF or a page fails to decode
    """
    text_parts = []

    try:
        with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
            for page_num, page in enumerate(pdf.pages, 1):
                words = [
                    w["text"]
                    for w in page.extract_words()
                    if isinstance(w.get("text"), str) and w["text"]
                ]
                text_parts.append(" ".join(words) + PAGE_SEPARATOR)
                logger.debug(f"Page {page_num}: {len(words)} words")
    except Exception as e:
        logger.error(f"Error extracting text from PDF: {e}")
        raise ParseError(f"Could not read PDF: {e}") from e

    text = normalize_whitespace("".join(text_parts))
    logger.info(f"Extracted {len(text)} characters from {len(text_parts)} pages")
    return text
