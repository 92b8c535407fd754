"""PDF generation for order reports using ReportLab."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from .analytics import TREND_COLD, TREND_HOT, TREND_NORMAL, OrderSuggestion
from .report import DEFAULT_STORE_NAME

# Section title and header colour per trend; the core fonts have no emoji
_SECTIONS = (
    (TREND_HOT, "Hot Items (Order Above Par)", "#D9534F"),
    (TREND_NORMAL, "Normal Items (Order at Par)", "#4A90D9"),
    (TREND_COLD, "Cold Items (Order Below Par)", "#5BC0DE"),
)

_FONT = "Helvetica"
_FONT_BOLD = "Helvetica-Bold"


def generate_pdf(
    suggestions: list[OrderSuggestion],
    output_path: str | Path,
    generated_at: datetime | None = None,
    store_name: str = DEFAULT_STORE_NAME,
) -> Path:
    """Generate a PDF order report.

    Args:
        suggestions: Order suggestions, typically most urgent first.
        output_path: Where to save the PDF file.
        generated_at: Timestamp printed under the title. Defaults to now.
        store_name: Store name used in the title.

    Returns:
        Path to the generated PDF file.

    Raises:
        ImportError: If reportlab is not installed.
    """
    try:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import LETTER
        from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
        from reportlab.lib.units import mm
        from reportlab.platypus import (
            Paragraph,
            SimpleDocTemplate,
            Spacer,
            Table,
            TableStyle,
        )
    except ImportError:
        raise ImportError("reportlab is required: pip install reportlab")

    generated_at = generated_at or datetime.now()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=LETTER,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"{store_name} Order Report",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ReportTitle",
        parent=styles["Title"],
        fontName=_FONT_BOLD,
        fontSize=18,
        leading=24,
    )
    subtitle_style = ParagraphStyle(
        "ReportSubtitle",
        parent=styles["Normal"],
        fontName=_FONT,
        fontSize=10,
        leading=14,
        textColor=colors.grey,
    )
    heading_style = ParagraphStyle(
        "SectionHeading",
        parent=styles["Heading2"],
        fontName=_FONT_BOLD,
        fontSize=13,
        leading=18,
        spaceAfter=3 * mm,
    )
    body_style = ParagraphStyle(
        "Body",
        parent=styles["Normal"],
        fontName=_FONT,
        fontSize=9,
        leading=13,
    )

    elements: list = [
        Paragraph(f"{store_name} - Smart Order Report", title_style),
        Paragraph(f"Generated {generated_at:%Y-%m-%d %H:%M}", subtitle_style),
        Spacer(1, 6 * mm),
    ]

    for trend, title, header_colour in _SECTIONS:
        group = [s for s in suggestions if s.trend == trend]
        if not group:
            continue

        elements.append(Paragraph(f"{title} ({len(group)})", heading_style))
        table_data = [["Item", "Category", "Par", "Order", "Change", "Reason"]]
        for s in group:
            change = f"+{s.adjustment}" if s.adjustment > 0 else str(s.adjustment)
            table_data.append([
                s.item_name,
                s.category,
                str(s.current_par),
                str(s.suggested_order),
                change,
                # Paragraph so long reasons wrap inside the cell
                Paragraph(s.reason.replace("⚠️", "!"), body_style),
            ])

        t = Table(
            table_data,
            colWidths=[40 * mm, 22 * mm, 13 * mm, 15 * mm, 16 * mm, 74 * mm],
            repeatRows=1,
        )
        t.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(header_colour)),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), _FONT_BOLD),
            ("FONTNAME", (0, 1), (-1, -1), _FONT),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("ALIGN", (2, 1), (4, -1), "RIGHT"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F5F5F5")]),
            ("TOPPADDING", (0, 0), (-1, -1), 3),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ]))
        elements.append(t)
        elements.append(Spacer(1, 6 * mm))

    counts = {
        trend: sum(1 for s in suggestions if s.trend == trend)
        for trend, _, _ in _SECTIONS
    }
    total_adjustment = sum(abs(s.adjustment) for s in suggestions)
    elements.append(Paragraph("Summary", heading_style))
    summary = Table(
        [
            ["Hot items", str(counts[TREND_HOT])],
            ["Normal items", str(counts[TREND_NORMAL])],
            ["Cold items", str(counts[TREND_COLD])],
            ["Total adjustments", f"{total_adjustment} items"],
        ],
        colWidths=[50 * mm, 30 * mm],
    )
    summary.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, -1), _FONT),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
    ]))
    elements.append(summary)

    doc.build(elements)
    return output_path
