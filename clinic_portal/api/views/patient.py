from datetime import date
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
import logging

from .doctor_list import DoctorFilters, load_doctors
from ..deps import (
    get_appointment_service, get_doctor_service, get_logged_patient_session,
    get_patient_service, require_role
)
from ...components.doctor_card import build_doctor_cards
from ...core.config import settings
from ...core.security import UserRole
from ...core.session import PortalSession
from ...core.templates import render, render_fragment
from ...schemas.appointment import AppointmentBooking
from ...schemas.common import describe_validation_error
from ...services.api_client import ApiError
from ...services.appointment_service import AppointmentService
from ...services.doctor_service import DoctorService
from ...services.patient_service import PatientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patient", tags=["Patient dashboard"])

EMPTY_MESSAGE = "No doctors found with the current filters."

# Visitors who have not picked a role may browse the public list too
browsing_session = require_role(None, UserRole.PATIENT, UserRole.LOGGED_PATIENT)

async def _doctor_page(
    request: Request,
    filters: DoctorFilters,
    session: PortalSession,
    doctor_service: DoctorService,
    clear_url: str
):
    doctors, error = await load_doctors(doctor_service, filters)
    if error:
        session.notify(error, "error")

    return render(request, "patient_dashboard.html", {
        "cards": build_doctor_cards(doctors, session.role),
        "filters": filters,
        "error": error,
        "empty_message": EMPTY_MESSAGE,
        "clear_url": clear_url,
        "list_url": "/patient/doctors",
        "specialties": settings.DOCTOR_SPECIALTIES,
    })

@router.get("/dashboard", response_class=HTMLResponse)
async def patient_dashboard(
    request: Request,
    name: str = "",
    time: str = "",
    specialty: str = "",
    session: PortalSession = Depends(require_role(None, UserRole.PATIENT)),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """Public doctor list with login and signup."""
    filters = DoctorFilters(name=name, time=time, specialty=specialty)
    return await _doctor_page(request, filters, session, doctor_service, "/patient/dashboard")

@router.get("/home", response_class=HTMLResponse)
async def logged_patient_dashboard(
    request: Request,
    name: str = "",
    time: str = "",
    specialty: str = "",
    session: PortalSession = Depends(get_logged_patient_session),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """Doctor list with booking for a logged-in patient."""
    filters = DoctorFilters(name=name, time=time, specialty=specialty)
    return await _doctor_page(request, filters, session, doctor_service, "/patient/home")

@router.get("/doctors", response_class=HTMLResponse)
async def patient_doctor_cards(
    request: Request,
    name: str = "",
    time: str = "",
    specialty: str = "",
    session: PortalSession = Depends(browsing_session),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """Card list fragment for live search."""
    filters = DoctorFilters(name=name, time=time, specialty=specialty)
    doctors, error = await load_doctors(doctor_service, filters)
    clear_url = "/patient/home" if session.role == UserRole.LOGGED_PATIENT else "/patient/dashboard"

    return render_fragment(request, "partials/doctor_cards.html", {
        "cards": build_doctor_cards(doctors, session.role),
        "error": error,
        "empty_message": EMPTY_MESSAGE,
        "clear_url": clear_url,
    })

@router.get("/doctors/{doctor_id}/book", response_class=HTMLResponse)
async def booking_page(
    request: Request,
    doctor_id: str,
    session: PortalSession = Depends(get_logged_patient_session),
    doctor_service: DoctorService = Depends(get_doctor_service),
    patient_service: PatientService = Depends(get_patient_service)
):
    """Booking form for one doctor, prefilled with the patient's details."""
    try:
        doctor = await doctor_service.find_doctor(doctor_id)
        patient = await patient_service.get_patient_data(session.token)
    except ApiError as e:
        logger.error(f"Error booking appointment: {e.message}")
        session.notify("Failed to book appointment", "error")
        return RedirectResponse("/patient/home", status_code=303)

    if doctor is None:
        session.notify("Doctor not found", "error")
        return RedirectResponse("/patient/home", status_code=303)
    if patient is None:
        session.notify("Unable to load your details. Please log in again.", "error")
        return RedirectResponse("/patient/home", status_code=303)

    return render(request, "booking.html", {
        "doctor": doctor,
        "patient": patient,
        "min_date": date.today().isoformat(),
    })

@router.post("/appointments")
async def book_appointment(
    doctor_id: str = Form(""),
    appointment_date: str = Form(""),
    time_slot: str = Form(""),
    session: PortalSession = Depends(get_logged_patient_session),
    doctor_service: DoctorService = Depends(get_doctor_service),
    patient_service: PatientService = Depends(get_patient_service),
    appointment_service: AppointmentService = Depends(get_appointment_service)
):
    """Book the selected slot with the selected doctor."""
    booking_url = f"/patient/doctors/{doctor_id}/book" if doctor_id else "/patient/home"

    try:
        patient = await patient_service.get_patient_data(session.token)
    except ApiError as e:
        logger.error(f"Error loading patient details: {e.message}")
        patient = None

    if patient is None or patient.id is None:
        session.notify("Unable to load your details. Please log in again.", "error")
        return RedirectResponse("/patient/home", status_code=303)

    try:
        booking = AppointmentBooking(
            doctor_id=doctor_id,
            patient_id=patient.id,
            appointment_date=appointment_date,
            time_slot=time_slot
        )
    except ValidationError as e:
        session.notify(describe_validation_error(e), "error")
        return RedirectResponse(booking_url, status_code=303)

    try:
        doctor = await doctor_service.find_doctor(booking.doctor_id)
    except ApiError as e:
        logger.error(f"Error booking appointment: {e.message}")
        session.notify("Failed to book appointment", "error")
        return RedirectResponse(booking_url, status_code=303)

    if doctor is None:
        session.notify("Doctor not found", "error")
        return RedirectResponse("/patient/home", status_code=303)
    if booking.time_slot not in doctor.available_times:
        session.notify("Please choose one of the doctor's available time slots", "error")
        return RedirectResponse(booking_url, status_code=303)

    try:
        result = await appointment_service.book_appointment(booking, session.token)
    except ApiError as e:
        logger.error(f"Error booking appointment: {e.message}")
        session.notify(e.detail or "Failed to book appointment", "error")
        return RedirectResponse(booking_url, status_code=303)

    session.notify(result.message, "success")
    return RedirectResponse("/patient/appointments", status_code=303)

@router.get("/appointments", response_class=HTMLResponse)
async def patient_appointments(
    request: Request,
    condition: str = "",
    name: str = "",
    session: PortalSession = Depends(get_logged_patient_session),
    patient_service: PatientService = Depends(get_patient_service)
):
    """The patient's appointments, optionally filtered by condition and doctor name."""
    condition = condition.strip()
    name = name.strip()
    appointments = []
    message = None

    try:
        if condition or name:
            appointments = await patient_service.filter_appointments(condition, name, session.token)
        else:
            patient = await patient_service.get_patient_data(session.token)
            if patient is not None and patient.id is not None:
                appointments = await patient_service.get_patient_appointments(
                    patient.id, session.token, UserRole.PATIENT.value
                )
    except ApiError as e:
        logger.error(f"Error loading appointments: {e.message}")
        message = "Failed to load appointments. Please try again later."

    if message is None and not appointments:
        message = "No appointments found."

    return render(request, "patient_appointments.html", {
        "appointments": appointments,
        "message": message,
        "condition": condition,
        "name": name,
    })

@router.post("/appointments/{appointment_id}/cancel")
async def cancel_appointment(
    appointment_id: str,
    session: PortalSession = Depends(get_logged_patient_session),
    appointment_service: AppointmentService = Depends(get_appointment_service)
):
    try:
        result = await appointment_service.cancel_appointment(appointment_id, session.token)
    except ApiError as e:
        logger.error(f"Error cancelling appointment {appointment_id}: {e.message}")
        session.notify(e.detail or "Failed to cancel appointment", "error")
        return RedirectResponse("/patient/appointments", status_code=303)

    session.notify(result.message, "success")
    return RedirectResponse("/patient/appointments", status_code=303)
