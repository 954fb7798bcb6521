import re
from functools import cmp_to_key
from pathlib import Path
from typing import List, Tuple, Union

from pdfminer.converter import PDFPageAggregator
from pdfminer.layout import LAParams, LTContainer, LTTextLineHorizontal
from pdfminer.pdfdocument import PDFDocument
from pdfminer.pdfinterp import PDFPageInterpreter, PDFResourceManager
from pdfminer.pdfpage import PDFPage
from pdfminer.pdfparser import PDFParser

from app.models.models import ExtractionResult, FileInfo, FileStats, TextFragment, ValidationResult
from app.utils.exceptions import ContentValidationError, DocumentExtractionError
from app.utils.logging_config import get_logger
from app.utils.utils import format_size, round_half_up

logger = get_logger(__name__)

MAX_FILE_SIZE = 50 * 1024 * 1024
LINE_TOLERANCE = 5
MIN_RESUME_LENGTH = 50
MIN_RESUME_KEYWORDS = 3

RESUME_KEYWORDS = [
    "experience", "education", "skills", "work", "employment",
    "university", "college", "degree", "certification", "project",
    "email", "phone", "address", "linkedin", "github", "resume",
    "objective", "summary", "achievements", "responsibilities",
    "career", "professional", "qualification", "internship",
]

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_WHITESPACE = re.compile(r"\s+")
_EXTRA_NEWLINES = re.compile(r"\n\s*\n\s*\n+")

PathLike = Union[str, Path]


def clean_text(x: str) -> str:
    if not x:
        return ""
    x = _CONTROL_CHARS.sub("", x)
    x = _WHITESPACE.sub(" ", x)
    x = _EXTRA_NEWLINES.sub("\n\n", x)
    return x.strip()


def _compare_fragments(a: TextFragment, b: TextFragment) -> float:
    if abs(b.y - a.y) > LINE_TOLERANCE:
        return b.y - a.y
    return a.x - b.x


def fragments_to_text(fragments: List[TextFragment]) -> str:
    """Order fragments top-to-bottom, left-to-right and rebuild the page's lines."""
    ordered = sorted(fragments, key=cmp_to_key(_compare_fragments))

    lines = []
    current: List[TextFragment] = []
    current_y = None
    for frag in ordered:
        y = round_half_up(frag.y)
        if current_y is None or abs(current_y - y) <= LINE_TOLERANCE:
            current.append(frag)
        else:
            lines.append(" ".join(f.text for f in current))
            current = [frag]
        current_y = y
    if current:
        lines.append(" ".join(f.text for f in current))

    return "\n".join(lines)


def _collect_fragments(element, out: List[TextFragment]) -> None:
    if isinstance(element, LTTextLineHorizontal):
        text = element.get_text().strip()
        if text:
            out.append(TextFragment(x=element.x0, y=element.y0, text=text))
    elif isinstance(element, LTContainer):
        # text boxes, and figures from Form XObjects
        for child in element:
            _collect_fragments(child, out)


def _page_fragments(interpreter: PDFPageInterpreter, device: PDFPageAggregator, page: PDFPage) -> List[TextFragment]:
    interpreter.process_page(page)
    layout = device.get_result()
    fragments: List[TextFragment] = []
    for element in layout:
        _collect_fragments(element, fragments)
    return fragments


def read_pdf(p: Path) -> Tuple[List[str], int]:
    """Return the non-empty page texts of a PDF and its total page count.

    Pages that fail to parse are logged and skipped.
    """
    page_texts = []
    page_count = 0
    with open(p, "rb") as fh:
        document = PDFDocument(PDFParser(fh))
        rsrcmgr = PDFResourceManager()
        device = PDFPageAggregator(rsrcmgr, laparams=LAParams(all_texts=True))
        interpreter = PDFPageInterpreter(rsrcmgr, device)

        for page_number, page in enumerate(PDFPage.create_pages(document), start=1):
            page_count += 1
            try:
                fragments = _page_fragments(interpreter, device, page)
            except Exception as e:
                logger.warning(f"Error extracting text from page {page_number} of {p.name}: {e}")
                continue
            page_text = fragments_to_text(fragments)
            if page_text.strip():
                page_texts.append(page_text)

    return page_texts, page_count


def extract_text(file_path: PathLike) -> ExtractionResult:
    """Extract normalized text from a PDF resume. Failures come back as data, never raised."""
    p = Path(file_path)
    try:
        if not p.exists():
            return ExtractionResult(
                success=False,
                error="File not found",
                details=f"No file found at path: {file_path}",
            )
        if not p.is_file():
            return ExtractionResult(
                success=False,
                error="Invalid file path - not a file",
                details="The provided path does not point to a valid file",
            )

        ext = p.suffix.lower()
        if ext != ".pdf":
            return ExtractionResult(
                success=False,
                error="Only PDF files are supported",
                details=f"Received format: {ext or 'unknown'}. Supported formats: .pdf",
            )

        size = p.stat().st_size
        if size > MAX_FILE_SIZE:
            return ExtractionResult(
                success=False,
                error="File too large",
                details=(
                    f"File size {round_half_up(size / 1024 / 1024)}MB exceeds maximum allowed size "
                    f"of {MAX_FILE_SIZE // 1024 // 1024}MB"
                ),
            )
    except OSError as e:
        logger.error(f"Could not inspect {file_path}: {e}")
        return ExtractionResult(success=False, error="Failed to extract text from file", details=str(e))

    try:
        page_texts, page_count = read_pdf(p)
    except Exception as e:
        # pdfminer raises a wide range of parser errors on malformed input
        logger.error(f"PDF extraction error for {p.name}: {e}")
        return ExtractionResult(success=False, error="Failed to extract text from PDF", details=str(e))

    text = clean_text("\n\n".join(page_texts))
    result = ExtractionResult(
        success=True,
        text=text,
        pages=page_count,
        word_count=len(text.split()),
        character_count=len(text),
    )
    if text:
        result.file_info = FileStats(size=size, size_formatted=format_size(size))

    logger.debug(f"Extracted {len(text)} characters from {page_count} page(s) of {p.name}")
    return result


def validate_resume_content(text: str) -> ValidationResult:
    if not text or len(text) < MIN_RESUME_LENGTH:
        return ValidationResult(
            is_valid=False,
            reason="Extracted text is too short to be a meaningful resume",
            suggestion="Please upload a text-based PDF rather than a scanned image",
        )

    lowered = text.lower()
    found = [k for k in RESUME_KEYWORDS if k in lowered]

    if len(found) < MIN_RESUME_KEYWORDS:
        return ValidationResult(
            is_valid=False,
            reason=(
                f"Content does not appear to be a resume "
                f"(found {len(found)}/{MIN_RESUME_KEYWORDS} resume keywords)"
            ),
            suggestion="Please ensure the file contains resume content with sections like experience, education, skills, etc.",
            found_keywords=found,
            keyword_count=len(found),
        )

    return ValidationResult(
        is_valid=True,
        confidence=min(len(found) / len(RESUME_KEYWORDS) * 100, 100.0),
        found_keywords=found,
        keyword_count=len(found),
    )


def validate_file(file_path: PathLike) -> FileInfo:
    p = Path(file_path)
    try:
        stats = p.stat()
    except OSError as e:
        return FileInfo(exists=False, error=str(e))
    ext = p.suffix.lower()
    return FileInfo(
        exists=True,
        is_file=p.is_file(),
        size=stats.st_size,
        size_formatted=format_size(stats.st_size),
        extension=ext,
        is_pdf=ext == ".pdf",
    )


def extract_resume_text(file_path: PathLike, filename: str = None) -> str:
    """Extract and validate resume text from an uploaded file.

    Raises DocumentExtractionError or ContentValidationError so the HTTP
    layer can answer with a client error.
    """
    result = extract_text(file_path)
    if not result.success:
        raise DocumentExtractionError(
            f"Failed to extract text: {result.error}",
            filename=filename,
            reason=result.details,
        )

    validation = validate_resume_content(result.text)
    if not validation.is_valid:
        raise ContentValidationError(
            f"Invalid content: {validation.reason}",
            suggestion=validation.suggestion,
            found_keywords=validation.found_keywords,
        )

    logger.info(
        f"Resume text extracted: {result.word_count} words, {result.pages} page(s), "
        f"confidence {validation.confidence:.1f}%"
    )
    return result.text
