"""
API Routes — Endpoint Definitions

All handlers are async.

Authentication happens upstream; the caller's identity arrives in the
X-User-Id header. The record store is injected so tests can swap it.
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import Optional

from dateutil import tz
from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from pawhealth.config import settings
from pawhealth.database import RecordStore, store
from pawhealth.reports import generate_excel_report, generate_filename, generate_pdf_report
from pawhealth.rules import HealthStatusReport

from .schemas import ErrorResponse, HealthResponse, ReportFormat
from .services import DogNotFoundError, HealthStatusResult, evaluate_dog_health


logger = logging.getLogger(__name__)

router = APIRouter()
dogs_router = APIRouter(prefix=f"{settings.API_PREFIX}/dogs", tags=["Health Status"])


# ============================================================================
# Dependencies
# ============================================================================

def get_record_store() -> RecordStore:
    """Dependency that provides the record store."""
    return store


def get_reference_time() -> datetime:
    """Reference instant for evaluations, in the configured TIMEZONE. Overridden in tests."""
    return datetime.now(tz.gettz(settings.TIMEZONE))


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """
    Caller identity as established by the upstream auth layer.

    Raises:
        HTTPException 401: If no identity was forwarded
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return x_user_id.strip()


def _evaluate_or_raise(
    dog_id: str,
    user_id: str,
    now: datetime,
    record_store: RecordStore
) -> HealthStatusResult:
    """Run the evaluation, mapping failures to HTTP errors."""
    try:
        return evaluate_dog_health(dog_id, user_id, now, record_store=record_store)
    except DogNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Dog not found"
        )
    except Exception as e:
        logger.exception(f"Get dog health status error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


# ============================================================================
# Health Status
# ============================================================================

@dogs_router.get(
    "/{dog_id}/health-status",
    response_model=HealthStatusReport,
    responses={
        401: {"model": ErrorResponse, "description": "Missing caller identity"},
        404: {"model": ErrorResponse, "description": "Dog not found or not owned by caller"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"},
    },
    summary="Get a dog's health status",
    description="Scores vaccinations, health records and appointments into a status band."
)
async def get_dog_health_status(
    dog_id: str,
    user_id: str = Depends(get_current_user_id),
    now: datetime = Depends(get_reference_time),
    record_store: RecordStore = Depends(get_record_store)
) -> HealthStatusReport:
    """
    Health status for one dog.

    - Verifies the dog belongs to the caller (404 otherwise)
    - Appointments limited to the trailing lookback window
    - Returns the report as camelCase JSON
    """
    result = _evaluate_or_raise(dog_id, user_id, now, record_store)
    return result.report


@dogs_router.get(
    "/{dog_id}/health-status/report",
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported format"},
        401: {"model": ErrorResponse, "description": "Missing caller identity"},
        404: {"model": ErrorResponse, "description": "Dog not found or not owned by caller"},
    },
    summary="Download health status report"
)
async def download_health_status_report(
    dog_id: str,
    format: str = Query(default="pdf", description="Report format: pdf or xlsx"),
    user_id: str = Depends(get_current_user_id),
    now: datetime = Depends(get_reference_time),
    record_store: RecordStore = Depends(get_record_store)
):
    """
    Generate and download a health status report.

    Formats:
    - pdf: One-page Health Certificate
    - xlsx: Excel workbook with summary and record sheets
    """
    try:
        report_format = ReportFormat(format.lower())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported format '{format}'. Use 'pdf' or 'xlsx'."
        )

    result = _evaluate_or_raise(dog_id, user_id, now, record_store)

    try:
        if report_format == ReportFormat.XLSX:
            content = generate_excel_report(
                result.report,
                result.dog,
                now,
                result.vaccinations,
                result.health_records,
                result.appointments,
            )
            media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        else:
            content = generate_pdf_report(result.report, result.dog, now)
            media_type = "application/pdf"
    except Exception as e:
        logger.exception(f"Report generation failed for dog {dog_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )

    filename = generate_filename(result.dog.name, now, report_format.value)
    logger.info(f"📄 Generated {report_format.value} report {filename}")

    return StreamingResponse(
        BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


# ============================================================================
# Service Health
# ============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Checks API and record store health."
)
async def health_check(
    record_store: RecordStore = Depends(get_record_store)
) -> HealthResponse:
    """Report record store counts."""
    counts = record_store.counts()
    return HealthResponse(
        status="healthy",
        store="memory",
        message=(
            f"{counts['dogs']} dogs, {counts['vaccinations']} vaccinations, "
            f"{counts['health_records']} health records, "
            f"{counts['appointments']} appointments"
        )
    )
