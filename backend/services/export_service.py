"""
Entry export: Markdown, PDF, social summary and single-section copy text.

All renderers take any object with the entry attributes (ORM row or schema).
"""

import logging
import re
import time
from typing import Iterable, List, Optional, Sequence, Union

import fitz  # PyMuPDF
from domain.value_objects.enums import ANALYSIS_SECTIONS, GENERATED_SECTIONS, EntrySection
from utils.formatting import BULLET, format_date

logger = logging.getLogger("ExportService")

SUMMARY_MAX_LENGTH = 280

# =============================================================================
# Plain text / Markdown
# =============================================================================


def export_filename(entry, extension: str, timestamp_ms: Optional[int] = None) -> str:
    """
    Build a download filename: lower-cased title, non-alphanumerics as '_', millisecond timestamp.

    Example: "AI & You" -> "ai___you_1718000000000.md"
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    stem = re.sub(r"[^a-z0-9]", "_", (entry.title or "").lower())
    return f"{stem}_{timestamp_ms}.{extension.lstrip('.')}"


def format_section(title: str, content: Union[str, Sequence[str]]) -> str:
    """
    Format one section for copying.

    TITLE upper-cased, a '=' underline as long as the title, a blank line, then
    bullet lines for a list or the raw text.
    """
    text = f"{title.upper()}\n{'=' * len(title)}\n\n"
    if isinstance(content, str):
        return text + content
    return text + "".join(f"{BULLET} {item}\n" for item in content)


def section_content(entry, section: EntrySection) -> Union[str, List[str]]:
    value = getattr(entry, section.value)
    if isinstance(value, str):
        return value
    return list(value or [])


def _markdown_section(lines: List[str], title: str, content: Union[str, List[str]]) -> None:
    if not content:
        return
    lines.append(f"## {title}")
    if isinstance(content, str):
        lines.append(content)
    else:
        lines.extend(f"- {item}" for item in content)
    lines.append("")


def _render_markdown(entry, include: Iterable[EntrySection]) -> str:
    include = set(include)
    lines = [f"# {entry.title}\n"]

    lines.append("## Information")
    lines.append(f"**Speaker:** {entry.speaker or 'Unknown'}")
    lines.append(f"**Date:** {format_date(entry.date)}")
    if entry.youtube_link:
        lines.append(f"**YouTube:** [Watch Video]({entry.youtube_link})")
    lines.append("")

    for section in ANALYSIS_SECTIONS:
        if section in include:
            _markdown_section(lines, section.heading, section_content(entry, section))

    generated = [s for s in GENERATED_SECTIONS if s in include and section_content(entry, s)]
    if generated:
        lines.extend(["---", "", "# Generated Content", ""])
        for section in generated:
            _markdown_section(lines, section.heading, section_content(entry, section))

    if EntrySection.NOTES in include and entry.notes:
        lines.extend(["---", ""])
        _markdown_section(lines, EntrySection.NOTES.heading, entry.notes)

    return "\n".join(lines)


def render_markdown(entry) -> str:
    """Render a full entry as Markdown."""
    return _render_markdown(entry, EntrySection)


def render_sections(entry, sections: Iterable[EntrySection]) -> str:
    """Render an entry as Markdown with only the named sections, in the usual order."""
    return _render_markdown(entry, sections)


def generate_summary(entry, max_length: int = SUMMARY_MAX_LENGTH) -> str:
    """
    Build a short social-sharing summary.

    Title and speaker always; main idea, first hook and video link only when
    they fit. The result never exceeds max_length characters.
    """
    summary = f"📝 {entry.title}"
    if entry.speaker:
        summary += f" by {entry.speaker}"

    if entry.main_idea and len(summary) + len(entry.main_idea) + 10 < max_length:
        summary += f"\n\n💡 {entry.main_idea}"

    hooks = entry.social_media_hooks or []
    if hooks and len(summary) < max_length - 50:
        hook = hooks[0]
        if len(summary) + len(hook) + 10 < max_length:
            summary += f'\n\n🔥 "{hook}"'

    if entry.youtube_link and len(summary) < max_length - 30:
        summary += f"\n\n🎥 {entry.youtube_link}"

    return summary[:max_length]


# =============================================================================
# PDF
# =============================================================================


class PdfWriter:
    """Flowing text writer over A4 pages with automatic page breaks."""

    MARGIN = 56  # ~20mm
    FONT = "helv"
    BOLD_FONT = "hebo"
    LINE_SPACING = 1.45

    def __init__(self):
        self.doc = fitz.open()
        self.width, self.height = fitz.paper_size("a4")
        self.page = None
        self.y = 0.0
        self._new_page()

    def _new_page(self) -> None:
        self.page = self.doc.new_page(width=self.width, height=self.height)
        self.y = self.MARGIN

    def _wrap(self, text: str, fontname: str, fontsize: float) -> List[str]:
        max_width = self.width - 2 * self.MARGIN
        lines: List[str] = []
        for paragraph in text.split("\n"):
            current = ""
            for word in paragraph.split(" "):
                candidate = f"{current} {word}" if current else word
                if fitz.get_text_length(candidate, fontname=fontname, fontsize=fontsize) <= max_width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                # Hard-split words wider than the line
                while fitz.get_text_length(word, fontname=fontname, fontsize=fontsize) > max_width and len(word) > 1:
                    cut = len(word)
                    while cut > 1 and fitz.get_text_length(word[:cut], fontname=fontname, fontsize=fontsize) > max_width:
                        cut -= 1
                    lines.append(word[:cut])
                    word = word[cut:]
                current = word
            lines.append(current)
        return lines

    def space(self, points: float) -> None:
        self.y += points

    def text(self, text: str, fontsize: float = 10, bold: bool = False) -> None:
        fontname = self.BOLD_FONT if bold else self.FONT
        line_height = fontsize * self.LINE_SPACING
        for line in self._wrap(text, fontname, fontsize):
            if self.y + line_height > self.height - self.MARGIN:
                self._new_page()
            self.y += line_height
            self.page.insert_text((self.MARGIN, self.y), line, fontname=fontname, fontsize=fontsize)
        self.y += 4

    def section(self, title: str, content: Union[str, Sequence[str]], leading_space: bool = True) -> None:
        if not content:
            return
        if leading_space:
            self.space(8)
        self.text(title, fontsize=12, bold=True)
        if isinstance(content, str):
            self.text(content)
        else:
            for item in content:
                self.text(f"{BULLET} {item}")

    def to_bytes(self) -> bytes:
        try:
            return self.doc.tobytes()
        finally:
            self.doc.close()


def render_pdf(entry) -> bytes:
    """Render a full entry as an A4 PDF document."""
    writer = PdfWriter()

    writer.text("PODCAST REFINERY", fontsize=18, bold=True)
    writer.space(10)
    writer.text(entry.title or "", fontsize=16, bold=True)
    writer.text(f"Speaker: {entry.speaker or 'Unknown'}")
    writer.text(f"Date: {format_date(entry.date)}")
    if entry.youtube_link:
        writer.text(f"YouTube: {entry.youtube_link}")
    writer.space(20)

    for section in ANALYSIS_SECTIONS:
        writer.section(section.heading.upper(), section_content(entry, section))

    writer.space(20)
    writer.text("GENERATED CONTENT", fontsize=14, bold=True)
    for index, section in enumerate(GENERATED_SECTIONS):
        writer.section(section.heading.upper(), section_content(entry, section), leading_space=index > 0)

    if entry.notes:
        writer.space(20)
        writer.section(EntrySection.NOTES.heading.upper(), entry.notes, leading_space=False)

    pdf_bytes = writer.to_bytes()
    logger.debug(f"Rendered PDF for entry {getattr(entry, 'id', None)} ({len(pdf_bytes)} bytes)")
    return pdf_bytes
