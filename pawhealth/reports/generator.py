"""
Reporting Layer — PDF Health Certificate and Excel Export

Renders a HealthStatusReport for owners and vets.
Reports render the evaluated report as given; nothing is rescored here.

Constraints:
- Status color on the certificate matches report.status_color
- Factors listed in evaluation order
- Smart filenames: HealthStatus_{DogName}_{YYYYMMDD}.ext
"""

import logging
import re
from io import BytesIO
from datetime import date, datetime
from typing import Sequence, Union

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm, inch
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle,
    HRFlowable, ListFlowable, ListItem
)
from reportlab.lib.enums import TA_CENTER

from pawhealth.records import AppointmentRecord, Dog, HealthRecord, VaccinationRecord
from pawhealth.rules import HealthStatusReport, StatusColor


logger = logging.getLogger(__name__)


# Band colors for visual formatting
STATUS_COLORS = {
    StatusColor.GREEN: colors.HexColor('#10b981'),
    StatusColor.BLUE: colors.HexColor('#3b82f6'),
    StatusColor.YELLOW: colors.HexColor('#eab308'),
    StatusColor.ORANGE: colors.HexColor('#f97316'),
    StatusColor.RED: colors.HexColor('#ef4444'),
    StatusColor.GRAY: colors.HexColor('#9ca3af'),
}


def generate_filename(dog_name: str, reference: Union[date, datetime], extension: str) -> str:
    """
    Generate smart filename following pattern: HealthStatus_{DogName}_{YYYYMMDD}.ext

    The name is reduced to ASCII letters, digits, '_' and '-' so the
    result is safe inside a Content-Disposition header.
    """
    ts_str = reference.strftime('%Y%m%d')
    safe_name = dog_name.strip().replace(' ', '_').replace('/', '-')
    safe_name = re.sub(r'[^A-Za-z0-9_-]', '_', safe_name) or 'Dog'
    return f"HealthStatus_{safe_name}_{ts_str}.{extension}"


def certificate_footer(reference: Union[date, datetime]) -> str:
    """Footer line for the PDF certificate, stamped with the report date."""
    return (
        f"Generated {reference.strftime('%Y-%m-%d')}. "
        "This certificate summarises the records on file and is not a veterinary diagnosis."
    )


def generate_pdf_report(
    report: HealthStatusReport,
    dog: Dog,
    reference: Union[date, datetime]
) -> bytes:
    """
    Generate a one-page Health Certificate PDF.

    Layout:
    - Header: dog name, breed, report date
    - Score box: score /100 and status in the band color
    - Next action and contributing factors
    - Record summary table
    - Footer: report date and disclaimer

    Args:
        report: Evaluated HealthStatusReport
        dog: Dog the report belongs to
        reference: Date the report was evaluated for

    Returns:
        PDF file as bytes
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=1.5*cm,
        leftMargin=1.5*cm,
        topMargin=1.5*cm,
        bottomMargin=1.5*cm,
        title=f"Health Status - {dog.name}",
    )

    styles = getSampleStyleSheet()
    band_color = STATUS_COLORS.get(report.status_color, colors.HexColor('#9ca3af'))

    title_style = ParagraphStyle(
        'Title',
        parent=styles['Heading1'],
        fontSize=24,
        alignment=TA_CENTER,
        spaceAfter=6,
        textColor=colors.HexColor('#1f2937')
    )

    score_style = ParagraphStyle(
        'Score',
        parent=styles['Normal'],
        fontSize=60,
        leading=66,
        alignment=TA_CENTER,
        textColor=band_color,
        fontName='Helvetica-Bold'
    )

    status_style = ParagraphStyle(
        'Status',
        parent=styles['Normal'],
        fontSize=20,
        leading=24,
        alignment=TA_CENTER,
        textColor=band_color,
        fontName='Helvetica-Bold'
    )

    section_style = ParagraphStyle(
        'Section',
        parent=styles['Heading2'],
        fontSize=14,
        spaceBefore=12,
        spaceAfter=6,
        textColor=colors.HexColor('#374151')
    )

    footer_style = ParagraphStyle(
        'Footer',
        parent=styles['Normal'],
        fontSize=8,
        textColor=colors.HexColor('#9ca3af'),
        alignment=TA_CENTER
    )

    story = []

    # === HEADER ===
    story.append(Paragraph("PET HEALTH CERTIFICATE", title_style))
    story.append(Spacer(1, 8))

    header_table = Table(
        [[f"Dog: {dog.name} ({dog.breed})", f"Report Date: {reference.strftime('%Y-%m-%d')}"]],
        colWidths=[3.5*inch, 3.5*inch]
    )
    header_table.setStyle(TableStyle([
        ('FONTSIZE', (0, 0), (-1, -1), 11),
        ('ALIGN', (0, 0), (0, 0), 'LEFT'),
        ('ALIGN', (1, 0), (1, 0), 'RIGHT'),
        ('TEXTCOLOR', (0, 0), (-1, -1), colors.HexColor('#4b5563')),
    ]))
    story.append(header_table)
    story.append(HRFlowable(width="100%", thickness=1, color=colors.HexColor('#e5e7eb')))
    story.append(Spacer(1, 16))

    # === SCORE ===
    story.append(Paragraph(f"{report.score}/100", score_style))
    story.append(Paragraph(report.status.value, status_style))
    story.append(Spacer(1, 16))

    # === NEXT ACTION ===
    story.append(Paragraph("Recommended Next Step", section_style))
    story.append(Paragraph(report.next_action, styles['Normal']))

    # === FACTORS ===
    story.append(Paragraph("Contributing Factors", section_style))
    if report.factors:
        story.append(ListFlowable(
            [ListItem(Paragraph(f, styles['Normal'])) for f in report.factors],
            bulletType='bullet',
        ))
    else:
        story.append(Paragraph("No positive factors recorded yet.", styles['Normal']))

    if not report.has_enough_data:
        story.append(Spacer(1, 6))
        story.append(Paragraph(
            "<i>No vaccinations, health records or appointments on file.</i>",
            styles['Normal']
        ))

    # === SUMMARY ===
    story.append(Paragraph("Record Summary", section_style))
    summary = report.summary
    summary_table = Table(
        [
            ["Record", "Total", "Recent / Upcoming"],
            ["Vaccinations", summary.total_vaccinations, summary.recent_vaccinations],
            ["Health records", summary.total_health_records, summary.recent_health_records],
            ["Appointments", summary.total_appointments, summary.upcoming_appointments],
        ],
        colWidths=[3*inch, 1.5*inch, 2*inch]
    )
    summary_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#f3f4f6')),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('ALIGN', (1, 0), (-1, -1), 'CENTER'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#d1d5db')),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    story.append(summary_table)

    # === FOOTER ===
    story.append(Spacer(1, 30))
    story.append(Paragraph(certificate_footer(reference), footer_style))

    doc.build(story)
    logger.debug(f"Rendered PDF health certificate for dog {dog.id}")
    return buffer.getvalue()


def generate_excel_report(
    report: HealthStatusReport,
    dog: Dog,
    reference: Union[date, datetime],
    vaccinations: Sequence[VaccinationRecord],
    health_records: Sequence[HealthRecord],
    appointments: Sequence[AppointmentRecord]
) -> bytes:
    """
    Generate a multi-sheet Excel workbook.

    Sheets:
    1. Summary: Score, status, next action, factors and counts
    2. Vaccinations
    3. Health_Records
    4. Appointments

    Returns:
        Excel file as bytes
    """
    buffer = BytesIO()

    # === SHEET 1: SUMMARY ===
    summary = report.summary
    summary_df = pd.DataFrame({
        'Metric': [
            'Dog',
            'Breed',
            'Report Date',
            'Score',
            'Status',
            'Next Action',
            'Factors',
            'Enough Data',
            'Total Vaccinations',
            'Recent Vaccinations',
            'Total Health Records',
            'Recent Health Records',
            'Total Appointments',
            'Upcoming Appointments',
        ],
        'Value': [
            dog.name,
            dog.breed,
            reference.strftime('%Y-%m-%d'),
            f"{report.score}/100",
            report.status.value,
            report.next_action,
            "; ".join(report.factors),
            "Yes" if report.has_enough_data else "No",
            summary.total_vaccinations,
            summary.recent_vaccinations,
            summary.total_health_records,
            summary.recent_health_records,
            summary.total_appointments,
            summary.upcoming_appointments,
        ]
    })

    # === SHEETS 2-4: RECORDS ===
    vaccinations_df = pd.DataFrame(
        [
            {
                'Date Given': v.date_given.isoformat(),
                'Vaccine': v.vaccine_name,
                'Type': v.vaccine_type,
                'Next Due': v.next_due_date.isoformat() if v.next_due_date else '',
                'Veterinarian': v.veterinarian,
            }
            for v in vaccinations
        ],
        columns=['Date Given', 'Vaccine', 'Type', 'Next Due', 'Veterinarian'],
    )
    health_df = pd.DataFrame(
        [
            {
                'Date': r.date.isoformat(),
                'Type': r.type.value,
                'Title': r.title,
                'Description': r.description,
            }
            for r in health_records
        ],
        columns=['Date', 'Type', 'Title', 'Description'],
    )
    appointments_df = pd.DataFrame(
        [
            {
                'Date': a.date.isoformat(),
                'Type': a.type.value,
                'Title': a.title,
                'Location': a.location or '',
            }
            for a in appointments
        ],
        columns=['Date', 'Type', 'Title', 'Location'],
    )

    # === Write all sheets ===
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        summary_df.to_excel(writer, sheet_name='Summary', index=False)
        ws_summary = writer.sheets['Summary']
        ws_summary.column_dimensions['A'].width = 25
        ws_summary.column_dimensions['B'].width = 60

        vaccinations_df.to_excel(writer, sheet_name='Vaccinations', index=False)
        health_df.to_excel(writer, sheet_name='Health_Records', index=False)
        appointments_df.to_excel(writer, sheet_name='Appointments', index=False)

        for sheet in ('Vaccinations', 'Health_Records', 'Appointments'):
            ws = writer.sheets[sheet]
            for col in ['A', 'B', 'C', 'D', 'E']:
                ws.column_dimensions[col].width = 20

    return buffer.getvalue()
