from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
import time

from ..deps import get_session
from ...core.config import settings
from ...core.security import UserRole
from ...core.session import PortalSession
from ...core.templates import render

router = APIRouter(tags=["Home"])

@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    login: str = "",
    session: PortalSession = Depends(get_session)
):
    """Role selection page; landing here always drops the current role and token."""
    session.clear()
    return render(request, "index.html", {
        "login_form": login if login in (UserRole.ADMIN.value, UserRole.DOCTOR.value) else None
    })

@router.post("/select-role")
async def select_role(
    role: str = Form(""),
    session: PortalSession = Depends(get_session)
):
    """Patients go straight to the public dashboard; staff must log in first."""
    if role == UserRole.PATIENT.value:
        session.role = UserRole.PATIENT
        return RedirectResponse("/patient/dashboard", status_code=303)

    if role in (UserRole.ADMIN.value, UserRole.DOCTOR.value):
        return RedirectResponse(f"/?login={role}", status_code=303)

    session.notify("Please select a role", "warning")
    return RedirectResponse("/", status_code=303)

# Health check endpoint
@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": settings.VERSION
    }
