"""
File operations utilities.

Reads court decisions from disk: PDFs through pypdf text extraction, anything
else as plain text.
"""

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from citematch.citation.exceptions import DocumentReadError


def is_pdf(path: str) -> bool:
    return path.lower().endswith(".pdf")


def read_document(path: str, encoding: str = "utf-8", read_pdf: bool = True) -> str:
    """
    Read a PDF (text-only) or plain-text file and return its full text.

    Args:
        path: The path to the document.
        encoding: Encoding used for plain-text files.
        read_pdf: If False, PDFs are read as plain text like any other file.

    Returns:
        The document text. May be empty.

    Raises:
        DocumentReadError: On any I/O, decoding or text extraction error.
    """
    try:
        if read_pdf and is_pdf(path):
            reader = PdfReader(path)
            pages = []
            for page in reader.pages:
                txt = page.extract_text()
                if txt:
                    pages.append(txt)
            return "\n".join(pages)

        with open(path, "r", encoding=encoding) as f:
            return f.read()
    except FileNotFoundError:
        raise DocumentReadError(path, "file not found")
    except (OSError, UnicodeDecodeError, PdfReadError) as e:
        raise DocumentReadError(path, str(e))
    except Exception as e:
        # pypdf raises a wide range of errors on malformed files
        raise DocumentReadError(path, f"text extraction failed: {e}")
