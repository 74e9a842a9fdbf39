"""
Reports Module — Health Status Exports

Public API:
- generate_pdf_report: One-page PDF Health Certificate
- generate_excel_report: Multi-sheet Excel workbook
- generate_filename: Smart filename pattern
- certificate_footer: Dated PDF footer line
"""

from .generator import (
    generate_pdf_report,
    generate_excel_report,
    generate_filename,
    certificate_footer,
)

__all__ = [
    "generate_pdf_report",
    "generate_excel_report",
    "generate_filename",
    "certificate_footer",
]
