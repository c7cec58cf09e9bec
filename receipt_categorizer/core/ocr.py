"""
OCR functionality for turning receipt images and PDFs into text.
"""

import io
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .logger import get_logger
from .models import OCRResult
from .utils import IMAGE_EXTS, PDF_EXTS

logger = get_logger(__name__)


class ExtractionError(Exception):
    """The OCR engine could not produce text for a file."""


def _lazy_import_ocr_deps():
    """Lazy import heavy OCR dependencies."""
    global pytesseract, PIL_Image, fitz
    import importlib
    if pytesseract is None:
        pytesseract = importlib.import_module("pytesseract")
    if PIL_Image is None:
        PIL_Image = importlib.import_module("PIL.Image")
    if fitz is None:
        fitz = importlib.import_module("fitz")  # pymupdf


# Initialize on first use
pytesseract = None
PIL_Image = None
fitz = None


def configure_tesseract(tesseract_cmd: Optional[str]):
    """Point pytesseract at a specific tesseract binary."""
    if not tesseract_cmd:
        return
    _lazy_import_ocr_deps()
    pytesseract.pytesseract.tesseract_cmd = tesseract_cmd


def _lines_from_data(data: Dict[str, List]) -> Tuple[str, float]:
    """
    Rebuild text lines from pytesseract.image_to_data output and average the
    word confidences (tesseract reports -1 for non-word boxes).
    """
    lines: Dict[Tuple[int, int, int], List[str]] = {}
    confidences = []
    for i, word in enumerate(data.get("text", [])):
        word = (word or "").strip()
        if not word:
            continue
        key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
        lines.setdefault(key, []).append(word)
        conf = float(data["conf"][i])
        if conf >= 0:
            confidences.append(conf)

    text = "\n".join(" ".join(words) for words in lines.values())
    confidence = sum(confidences) / len(confidences) if confidences else 0.0
    return text, confidence


def _ocr_pil_image(img, lang: str) -> OCRResult:
    # Improve OCR: convert to grayscale
    if img.mode != "L":
        img = img.convert("L")
    try:
        data = pytesseract.image_to_data(img, lang=lang, output_type=pytesseract.Output.DICT)
    except Exception as e:
        raise ExtractionError(f"Tesseract failed: {e}") from e
    text, confidence = _lines_from_data(data)
    return OCRResult(text=text, confidence=confidence)


def ocr_image(img_path: Path, lang: str = "eng") -> OCRResult:
    """OCR an image file to text with a mean word confidence."""
    _lazy_import_ocr_deps()
    try:
        img = PIL_Image.open(img_path)
        img.load()
    except (OSError, ValueError) as e:
        raise ExtractionError(f"Cannot open image {img_path.name}: {e}") from e
    return _ocr_pil_image(img, lang)


def pdf_to_text(pdf_path: Path, lang: str = "eng") -> OCRResult:
    """
    Extract text from a PDF using PyMuPDF.

    Pages with a text layer are taken as-is (confidence 100); pages without one
    are rasterized and run through Tesseract.
    """
    _lazy_import_ocr_deps()
    try:
        doc = fitz.open(pdf_path.as_posix())
    except Exception as e:
        raise ExtractionError(f"Cannot open PDF {pdf_path.name}: {e}") from e

    chunks = []
    confidences = []
    try:
        for page in doc:
            page_text = page.get_text()
            if page_text.strip():
                chunks.append(page_text)
                confidences.append(100.0)
                continue
            logger.debug("%s page %d has no text layer, running OCR", pdf_path.name, page.number + 1)
            pix = page.get_pixmap(matrix=fitz.Matrix(2, 2), alpha=False)
            img = PIL_Image.open(io.BytesIO(pix.tobytes("png")))
            result = _ocr_pil_image(img, lang)
            chunks.append(result.text)
            confidences.append(result.confidence)
    finally:
        doc.close()

    confidence = sum(confidences) / len(confidences) if confidences else 0.0
    return OCRResult(text="\n".join(chunks), confidence=confidence)


def extract_text(path: Path, lang: str = "eng") -> OCRResult:
    """
    Extract text from a receipt file (image or PDF).

    Raises:
        ExtractionError: unsupported file type, unreadable file or OCR failure
    """
    ext = path.suffix.lower()
    if ext in IMAGE_EXTS:
        return ocr_image(path, lang)
    if ext in PDF_EXTS:
        return pdf_to_text(path, lang)
    raise ExtractionError(f"Unsupported file type: {path}")
