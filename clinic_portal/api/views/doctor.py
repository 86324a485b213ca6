from datetime import date
from typing import List, Optional, Tuple
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
import logging

from ..deps import get_appointment_service, get_doctor_session
from ...components.patient_row import PATIENT_TABLE_COLUMNS, PatientRow, build_patient_row
from ...core.session import PortalSession
from ...core.templates import render, render_fragment
from ...services.api_client import ApiError
from ...services.appointment_service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doctor", tags=["Doctor dashboard"])

LOAD_ERROR_MESSAGE = "Error loading appointments. Please try again later."

def parse_day(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(value) if value else date.today()
    except ValueError:
        return None

def empty_message(day: date, patient_name: Optional[str]) -> str:
    when = "today" if day == date.today() else day.isoformat()
    who = f'patients matching "{patient_name}" on ' if patient_name else ""
    return f"No appointments found for {who}{when}."

async def load_rows(
    appointment_service: AppointmentService,
    day: date,
    patient_name: Optional[str],
    token: str
) -> Tuple[List[PatientRow], Optional[str]]:
    """Rows for the appointment table, or the inline message to show instead."""
    try:
        appointments = await appointment_service.get_all_appointments(day, patient_name, token)
    except ApiError as e:
        logger.error(f"Error loading appointments: {e.message}")
        return [], LOAD_ERROR_MESSAGE

    if not appointments:
        return [], empty_message(day, patient_name)

    return [build_patient_row(appointment) for appointment in appointments], None

async def _table_context(
    request_date: str,
    patient_name: str,
    session: PortalSession,
    appointment_service: AppointmentService
) -> dict:
    day = parse_day(request_date)
    if day is None:
        session.notify("Invalid date, showing today's appointments", "warning")
        day = date.today()

    name = patient_name.strip() or None
    rows, message = await load_rows(appointment_service, day, name, session.token)

    return {
        "columns": PATIENT_TABLE_COLUMNS,
        "rows": rows,
        "message": message,
        "selected_date": day.isoformat(),
        "today": date.today().isoformat(),
        "patient_name": name or "",
    }

@router.get("/dashboard", response_class=HTMLResponse)
async def doctor_dashboard(
    request: Request,
    selected_date: str = Query("", alias="date"),
    patient_name: str = "",
    session: PortalSession = Depends(get_doctor_session),
    appointment_service: AppointmentService = Depends(get_appointment_service)
):
    """Appointments for the selected day (today by default)."""
    context = await _table_context(selected_date, patient_name, session, appointment_service)
    return render(request, "doctor_dashboard.html", context)

@router.get("/appointments", response_class=HTMLResponse)
async def doctor_appointment_rows(
    request: Request,
    selected_date: str = Query("", alias="date"),
    patient_name: str = "",
    session: PortalSession = Depends(get_doctor_session),
    appointment_service: AppointmentService = Depends(get_appointment_service)
):
    """Table body fragment for live search."""
    context = await _table_context(selected_date, patient_name, session, appointment_service)
    return render_fragment(request, "partials/patient_rows.html", context)
