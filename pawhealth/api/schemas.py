"""
Pydantic Schemas — API Response Models

The health-status body itself is pawhealth.rules.HealthStatusReport.
"""

from enum import Enum

from pydantic import BaseModel


class ReportFormat(str, Enum):
    """Downloadable export formats."""
    PDF = "pdf"
    XLSX = "xlsx"


class HealthResponse(BaseModel):
    """Service health check response."""
    status: str
    store: str
    message: str


class ErrorResponse(BaseModel):
    """Error body for 401/404/500 responses."""
    detail: str
