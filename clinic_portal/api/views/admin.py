from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from typing import List
import logging

from .doctor_list import DoctorFilters, load_doctors
from ..deps import get_admin_session, get_doctor_service
from ...components.doctor_card import build_doctor_cards
from ...core.config import settings
from ...core.session import PortalSession
from ...core.templates import render, render_fragment
from ...schemas.common import describe_validation_error
from ...schemas.doctor import DoctorCreate
from ...services.api_client import ApiError
from ...services.doctor_service import DoctorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin dashboard"])

EMPTY_MESSAGE = "No doctors found with the given filters."

@router.get("/dashboard", response_class=HTMLResponse)
async def admin_dashboard(
    request: Request,
    name: str = "",
    time: str = "",
    specialty: str = "",
    session: PortalSession = Depends(get_admin_session),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """Doctor cards with delete controls and the add-doctor form."""
    filters = DoctorFilters(name=name, time=time, specialty=specialty)
    doctors, error = await load_doctors(doctor_service, filters)
    if error:
        session.notify(error, "error")

    return render(request, "admin_dashboard.html", {
        "cards": build_doctor_cards(doctors, session.role),
        "filters": filters,
        "error": error,
        "empty_message": EMPTY_MESSAGE,
        "list_url": "/admin/doctors",
        "specialties": settings.DOCTOR_SPECIALTIES,
        "max_time_slots": settings.MAX_TIME_SLOTS,
    })

@router.get("/doctors", response_class=HTMLResponse)
async def admin_doctor_cards(
    request: Request,
    name: str = "",
    time: str = "",
    specialty: str = "",
    session: PortalSession = Depends(get_admin_session),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """Card list fragment for live search."""
    filters = DoctorFilters(name=name, time=time, specialty=specialty)
    doctors, error = await load_doctors(doctor_service, filters)

    return render_fragment(request, "partials/doctor_cards.html", {
        "cards": build_doctor_cards(doctors, session.role),
        "error": error,
        "empty_message": EMPTY_MESSAGE,
    })

@router.post("/doctors")
async def add_doctor(
    name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    password: str = Form(""),
    specialty: str = Form(""),
    available_times: List[str] = Form([]),
    years_of_experience: str = Form(""),
    clinic_address: str = Form(""),
    rating: str = Form(""),
    session: PortalSession = Depends(get_admin_session),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """Validate the add-doctor form and create the doctor."""
    try:
        doctor = DoctorCreate(
            name=name,
            email=email,
            phone=phone,
            password=password,
            specialty=specialty,
            available_times=available_times,
            years_of_experience=years_of_experience,
            clinic_address=clinic_address,
            rating=rating
        )
    except ValidationError as e:
        session.notify(describe_validation_error(e), "error")
        return RedirectResponse("/admin/dashboard", status_code=303)

    try:
        await doctor_service.save_doctor(doctor, session.token)
    except ApiError as e:
        logger.error(f"Failed to add doctor: {e.message}")
        session.notify(f"Failed to add doctor: {e.detail or 'Please try again'}", "error")
        return RedirectResponse("/admin/dashboard", status_code=303)

    session.notify(f"Dr. {doctor.name} added successfully!", "success")
    return RedirectResponse("/admin/dashboard", status_code=303)

@router.post("/doctors/{doctor_id}/delete")
async def delete_doctor(
    doctor_id: str,
    session: PortalSession = Depends(get_admin_session),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """Delete a doctor; the card only disappears once the backend confirms."""
    try:
        result = await doctor_service.delete_doctor(doctor_id, session.token)
    except ApiError as e:
        logger.error(f"Error deleting doctor {doctor_id}: {e.message}")
        session.notify("Failed to delete doctor", "error")
        return RedirectResponse("/admin/dashboard", status_code=303)

    session.notify(result.message, "success")
    return RedirectResponse("/admin/dashboard", status_code=303)
