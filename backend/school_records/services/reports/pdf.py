"""
PDF synthesis with reportlab platypus.

Every page carries the same branded header and a "Page N of M" footer.
Report bodies are tables; an empty record set renders a single no-data row.
"""
import logging
from collections.abc import Sequence
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    Image,
    KeepTogether,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from school_records.services.reports.common import (
    NO_DATA,
    NO_PROGRESS,
    PROGRESS_CATEGORIES,
    REPORT_TITLES,
    PlanRow,
    ReportKind,
    ReportOptions,
    StudentRow,
    fmt_date,
    fmt_optional,
    latest_ratings,
    rating_color,
)

logger = logging.getLogger(__name__)

PAGE_SIZE = landscape(A4)
MARGIN = 14 * mm
HEADER_HEIGHT = 38 * mm
FOOTER_HEIGHT = 14 * mm
BRAND_COLOR = colors.HexColor("#7c3aed")
HEADER_FILL = colors.HexColor("#ede9fe")
GRID_COLOR = colors.HexColor("#d1d5db")
MUTED_COLOR = colors.HexColor("#6b7280")
THUMBNAIL_SIZE = 26 * mm

_styles = getSampleStyleSheet()
CELL_STYLE = ParagraphStyle("ReportCell", parent=_styles["Normal"], fontSize=8, leading=10)
HEAD_CELL_STYLE = ParagraphStyle("ReportHeadCell", parent=CELL_STYLE, fontName="Helvetica-Bold")
SECTION_STYLE = ParagraphStyle(
    "ReportSection", parent=_styles["Heading3"], textColor=BRAND_COLOR, spaceBefore=8, spaceAfter=4
)
BODY_STYLE = ParagraphStyle("ReportBody", parent=_styles["Normal"], fontSize=9, leading=12)
MUTED_STYLE = ParagraphStyle("ReportMuted", parent=BODY_STYLE, textColor=MUTED_COLOR)


def _cell(value: object, style: ParagraphStyle = CELL_STYLE) -> Paragraph:
    return Paragraph(escape(str(value)), style)


def _rating_cell(value: str) -> Paragraph:
    return Paragraph(f'<font color="{rating_color(value)}">{escape(value)}</font>', CELL_STYLE)


def _table(header: Sequence[str], rows: list[list], col_widths: Sequence[float]) -> Table:
    """Grid table with a repeated header row and a no-data row when empty."""
    data = [[_cell(h, HEAD_CELL_STYLE) for h in header]]
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
        ("GRID", (0, 0), (-1, -1), 0.25, GRID_COLOR),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    if rows:
        data.extend(rows)
    else:
        data.append([_cell(NO_DATA, MUTED_STYLE)] + [""] * (len(header) - 1))
        style.append(("SPAN", (0, 1), (-1, 1)))
    table = Table(data, colWidths=col_widths, repeatRows=1, hAlign="LEFT")
    table.setStyle(TableStyle(style))
    return table


def _widths(*fractions: float) -> list[float]:
    usable = PAGE_SIZE[0] - 2 * MARGIN
    return [usable * f for f in fractions]


def _numbered_canvas(footer_text: str) -> type[canvas.Canvas]:
    """Canvas class that defers footers until the total page count is known."""

    class NumberedCanvas(canvas.Canvas):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._saved_page_states: list[dict] = []

        def showPage(self):
            self._saved_page_states.append(dict(self.__dict__))
            self._startPage()

        def save(self):
            total = len(self._saved_page_states)
            for state in self._saved_page_states:
                self.__dict__.update(state)
                self._draw_footer(total)
                super().showPage()
            super().save()

        def _draw_footer(self, total: int) -> None:
            width, _ = self._pagesize
            y = FOOTER_HEIGHT - 6 * mm
            self.saveState()
            self.setStrokeColor(GRID_COLOR)
            self.setLineWidth(0.3)
            self.line(MARGIN, FOOTER_HEIGHT - 2 * mm, width - MARGIN, FOOTER_HEIGHT - 2 * mm)
            self.setFont("Helvetica", 8)
            self.setFillColor(MUTED_COLOR)
            self.drawString(MARGIN, y, footer_text)
            self.drawRightString(width - MARGIN, y, f"Page {self._pageNumber} of {total}")
            self.restoreState()

    return NumberedCanvas


class _HeaderPainter:
    """Draws the branded header; identical layout on every page of every report."""

    def __init__(self, title: str, options: ReportOptions):
        self.title = title
        self.options = options

    def __call__(self, pdf: canvas.Canvas, doc: SimpleDocTemplate) -> None:
        width, height = PAGE_SIZE
        branding = self.options.branding
        center = width / 2
        top = height - MARGIN

        pdf.saveState()
        pdf.setFillColor(BRAND_COLOR)
        pdf.setFont("Helvetica-Bold", 16)
        pdf.drawCentredString(center, top - 4 * mm, branding.school_name)
        pdf.setFillColor(colors.black)
        pdf.setFont("Helvetica", 11)
        pdf.drawCentredString(center, top - 10 * mm, branding.subtitle)
        pdf.setFillColor(MUTED_COLOR)
        pdf.setFont("Helvetica", 9)
        pdf.drawCentredString(center, top - 15 * mm, branding.address)
        pdf.setFillColor(colors.black)
        pdf.setFont("Helvetica-Bold", 12)
        pdf.drawCentredString(center, top - 21 * mm, self.title)
        pdf.setFont("Helvetica", 8)
        pdf.setFillColor(MUTED_COLOR)
        generated = self.options.generated_at.strftime("%Y-%m-%d %H:%M")
        pdf.drawCentredString(center, top - 25.5 * mm, f"Generated on: {generated}")
        pdf.setStrokeColor(BRAND_COLOR)
        pdf.setLineWidth(0.6)
        pdf.line(MARGIN, top - 28 * mm, width - MARGIN, top - 28 * mm)
        pdf.restoreState()


def _render(kind: ReportKind, story: list, options: ReportOptions) -> bytes:
    buffer = BytesIO()
    title = REPORT_TITLES[kind]
    doc = SimpleDocTemplate(
        buffer,
        pagesize=PAGE_SIZE,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN + HEADER_HEIGHT - 6 * mm,
        bottomMargin=FOOTER_HEIGHT + 4 * mm,
        title=title,
        author=options.branding.school_name,
    )
    header = _HeaderPainter(title, options)
    footer_text = f"Generated on: {fmt_date(options.generated_at)}"
    doc.build(
        story,
        onFirstPage=header,
        onLaterPages=header,
        canvasmaker=_numbered_canvas(footer_text),
    )
    return buffer.getvalue()


def _period(options: ReportOptions) -> list:
    label = options.period_label
    if not label:
        return []
    return [Paragraph(f"Period: {escape(label)}", BODY_STYLE), Spacer(1, 4)]


def _thumbnail(data: bytes | None, student_name: str) -> Image | None:
    """A fitted thumbnail, or None when the bytes are not a readable image."""
    if not data:
        return None
    try:
        ImageReader(BytesIO(data)).getSize()
    except Exception as e:
        logger.warning("Unreadable photo for %s: %s", student_name, e)
        return None
    return Image(BytesIO(data), width=THUMBNAIL_SIZE, height=THUMBNAIL_SIZE, kind="proportional")


# ============================================================================
# Student progress report
# ============================================================================

STUDENT_SUMMARY_HEADER = [
    "Name", "Class", "Age", "Learning Ability", "Writing Speed",
    *(label for _, label in PROGRESS_CATEGORIES),
]
HISTORY_HEADER = ["Date", *(label for _, label in PROGRESS_CATEGORIES), "Comments"]


def _student_summary(rows: Sequence[StudentRow]) -> Table:
    body = []
    for row in rows:
        student = row.student
        body.append([
            _cell(student.name),
            _cell(fmt_optional(student.class_name)),
            _cell(student.age),
            _cell(fmt_optional(student.learning_ability)),
            _cell(row.writing_speed),
            *(_rating_cell(value) for value in latest_ratings(row)),
        ])
    return _table(
        STUDENT_SUMMARY_HEADER,
        body,
        _widths(0.16, 0.07, 0.05, 0.1, 0.1, 0.104, 0.104, 0.104, 0.104, 0.104),
    )


def _student_section(row: StudentRow, photo: bytes | None) -> KeepTogether:
    student = row.student
    details = [
        f"<b>Class:</b> {escape(fmt_optional(student.class_name))}",
        f"<b>Age:</b> {student.age} years",
        f"<b>Learning Ability:</b> {escape(fmt_optional(student.learning_ability))}",
        f"<b>Writing Speed:</b> {escape(row.writing_speed)}",
        f"<b>Teacher:</b> {escape(fmt_optional(row.teacher_name))}",
        f"<b>Parent Contact:</b> {escape(fmt_optional(student.parent_contact))}",
    ]
    info = [Paragraph(line, BODY_STYLE) for line in details]

    usable = PAGE_SIZE[0] - 2 * MARGIN
    image = _thumbnail(photo, student.name)
    if image is not None:
        image_width = THUMBNAIL_SIZE + 4 * mm
        info_block = Table(
            [[image, info]],
            colWidths=[image_width, usable - image_width],
            hAlign="LEFT",
        )
    else:
        info_block = Table([[info]], colWidths=[usable], hAlign="LEFT")
    info_block.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))

    parts = [Paragraph(escape(student.name), SECTION_STYLE), info_block, Spacer(1, 4)]
    if row.progress:
        history = [
            [
                _cell(fmt_date(entry.date)),
                *(_rating_cell(fmt_optional(getattr(entry, attr))) for attr, _ in PROGRESS_CATEGORIES),
                _cell(fmt_optional(entry.comments)),
            ]
            for entry in row.progress
        ]
        parts.append(_table(HISTORY_HEADER, history, _widths(0.1, 0.12, 0.12, 0.12, 0.12, 0.12, 0.3)))
    else:
        parts.append(Paragraph(NO_PROGRESS, MUTED_STYLE))
    parts.append(Spacer(1, 6))
    return KeepTogether(parts)


def build_student_pdf(
    rows: Sequence[StudentRow],
    options: ReportOptions,
    photos: Sequence[bytes | None] | None = None,
) -> bytes:
    """
    Render the student progress report.

    ``photos`` is positionally aligned with ``rows``; missing or unreadable
    images leave the student's section without a thumbnail.
    """
    if photos is None or not options.include_photos:
        photos = [None] * len(rows)

    story: list = [*_period(options), _student_summary(rows)]
    if rows:
        story.append(Paragraph("Student Details", SECTION_STYLE))
        for row, photo in zip(rows, photos):
            story.append(_student_section(row, photo))
    return _render(ReportKind.STUDENT, story, options)


# ============================================================================
# Teaching plans report
# ============================================================================

PLAN_HEADER = ["Title", "Type", "Class", "Date Range", "Creator"]


def _plan_section(row: PlanRow) -> KeepTogether:
    plan = row.plan
    parts = [Paragraph(escape(plan.title), SECTION_STYLE)]
    for label, text in (("Description", plan.description), ("Activities", plan.activities), ("Goals", plan.goals)):
        body = escape(fmt_optional(text)).replace("\n", "<br/>")
        parts.append(Paragraph(f"<b>{label}:</b> {body}", BODY_STYLE))
        parts.append(Spacer(1, 2))
    return KeepTogether(parts)


def build_plan_pdf(rows: Sequence[PlanRow], options: ReportOptions) -> bytes:
    """Render the teaching plans report."""
    body = [
        [
            _cell(row.plan.title),
            _cell(fmt_optional(row.plan.type)),
            _cell(fmt_optional(row.plan.class_name)),
            _cell(row.date_range),
            _cell(fmt_optional(row.creator_name)),
        ]
        for row in rows
    ]
    story: list = [*_period(options), _table(PLAN_HEADER, body, _widths(0.34, 0.1, 0.1, 0.24, 0.22))]
    if rows:
        story.append(Paragraph("Plan Details", SECTION_STYLE))
        story.extend(_plan_section(row) for row in rows)
    return _render(ReportKind.PLAN, story, options)
