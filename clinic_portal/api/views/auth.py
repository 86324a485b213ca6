from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
import logging

from ..deps import (
    get_auth_service, get_patient_service, get_session, rate_limit_check
)
from ...core.security import UserRole
from ...core.session import PortalSession
from ...schemas.auth import AdminLogin, UserLogin
from ...schemas.common import describe_validation_error
from ...schemas.patient import PatientSignup
from ...services.api_client import ApiError
from ...services.auth_service import AuthService
from ...services.patient_service import PatientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

# Status codes the backend answers with for bad credentials
CREDENTIAL_ERRORS = (400, 401, 403, 404)

DASHBOARDS = {
    UserRole.ADMIN: "/admin/dashboard",
    UserRole.DOCTOR: "/doctor/dashboard",
    UserRole.LOGGED_PATIENT: "/patient/home",
}

def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)

@router.post("/admin/login", dependencies=[Depends(rate_limit_check)])
async def admin_login(
    username: str = Form(""),
    password: str = Form(""),
    session: PortalSession = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Authenticate an admin against the backend."""
    try:
        login_data = AdminLogin(username=username, password=password)
    except ValidationError:
        session.notify("Please enter both username and password", "error")
        return _redirect("/?login=admin")

    try:
        token = await auth_service.admin_login(login_data)
    except ApiError as e:
        logger.error(f"Admin login error: {e.message}")
        if e.status_code in CREDENTIAL_ERRORS:
            session.notify("Invalid admin credentials!", "error")
        else:
            session.notify("An error occurred during admin login", "error")
        return _redirect("/?login=admin")

    session.login(UserRole.ADMIN, token)
    return _redirect(DASHBOARDS[UserRole.ADMIN])

@router.post("/doctor/login", dependencies=[Depends(rate_limit_check)])
async def doctor_login(
    email: str = Form(""),
    password: str = Form(""),
    session: PortalSession = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Authenticate a doctor against the backend."""
    try:
        login_data = UserLogin(email=email, password=password)
    except ValidationError:
        session.notify("Please enter both email and password", "error")
        return _redirect("/?login=doctor")

    try:
        token = await auth_service.doctor_login(login_data)
    except ApiError as e:
        logger.error(f"Doctor login error: {e.message}")
        if e.status_code in CREDENTIAL_ERRORS:
            session.notify("Invalid doctor credentials!", "error")
        else:
            session.notify("An error occurred during doctor login", "error")
        return _redirect("/?login=doctor")

    session.login(UserRole.DOCTOR, token)
    return _redirect(DASHBOARDS[UserRole.DOCTOR])

@router.post("/patient/login", dependencies=[Depends(rate_limit_check)])
async def patient_login(
    email: str = Form(""),
    password: str = Form(""),
    session: PortalSession = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Authenticate a patient; on success the session becomes ``loggedPatient``."""
    try:
        login_data = UserLogin(email=email, password=password)
    except ValidationError:
        session.notify("Please enter both email and password", "error")
        return _redirect("/patient/dashboard")

    try:
        token = await auth_service.patient_login(login_data)
    except ApiError as e:
        logger.error(f"Login failed: {e.message}")
        if e.status_code in CREDENTIAL_ERRORS:
            session.notify(e.detail or "Invalid credentials", "error")
        else:
            session.notify("An error occurred during login. Please try again.", "error")
        return _redirect("/patient/dashboard")

    session.login(UserRole.LOGGED_PATIENT, token)
    session.notify("Login successful!", "success")
    return _redirect(DASHBOARDS[UserRole.LOGGED_PATIENT])

@router.post("/patient/signup", dependencies=[Depends(rate_limit_check)])
async def patient_signup(
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    phone: str = Form(""),
    address: str = Form(""),
    session: PortalSession = Depends(get_session),
    patient_service: PatientService = Depends(get_patient_service)
):
    """Register a new patient."""
    try:
        signup_data = PatientSignup(
            name=name,
            email=email,
            password=password,
            phone=phone or None,
            address=address or None
        )
    except ValidationError as e:
        session.notify(describe_validation_error(e), "error")
        return _redirect("/patient/dashboard")

    try:
        result = await patient_service.signup(signup_data)
    except ApiError as e:
        logger.error(f"Signup failed: {e.message}")
        session.notify(e.detail or "An error occurred during registration", "error")
        return _redirect("/patient/dashboard")

    session.notify(result.message, "success")
    return _redirect("/patient/dashboard")

@router.post("/logout")
async def logout(session: PortalSession = Depends(get_session)):
    """Log out admins and doctors."""
    session.clear()
    return _redirect("/")

@router.post("/patient/logout")
async def logout_patient(session: PortalSession = Depends(get_session)):
    """Log out a patient but keep them on the public patient dashboard."""
    session.logout_patient()
    return _redirect("/patient/dashboard")
