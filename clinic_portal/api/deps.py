from fastapi import Depends, HTTPException, status, Request

from ..core.security import (
    AUTHENTICATED_ROLES, AuthorizationError, SessionExpiredError, UserRole
)
from ..core.session import PortalSession, get_redis
from ..core.config import settings
from ..services.api_client import ApiClient
from ..services.appointment_service import AppointmentService
from ..services.auth_service import AuthService
from ..services.doctor_service import DoctorService
from ..services.patient_service import PatientService

async def get_session(request: Request) -> PortalSession:
    """Session loaded for this request by the session middleware."""
    return request.state.session

async def get_api_client(request: Request) -> ApiClient:
    """Shared backend client created at startup."""
    return request.app.state.api_client

# Service dependencies
async def get_auth_service(client: ApiClient = Depends(get_api_client)) -> AuthService:
    return AuthService(client)

async def get_doctor_service(client: ApiClient = Depends(get_api_client)) -> DoctorService:
    return DoctorService(client)

async def get_patient_service(client: ApiClient = Depends(get_api_client)) -> PatientService:
    return PatientService(client)

async def get_appointment_service(client: ApiClient = Depends(get_api_client)) -> AppointmentService:
    return AppointmentService(client)

# Role-based access control dependencies
def require_role(*allowed_roles):
    """Create a dependency that requires one of the given session roles.

    ``None`` in ``allowed_roles`` admits visitors who have not picked a role.
    """
    async def role_checker(
        session: PortalSession = Depends(get_session)
    ) -> PortalSession:
        if session.role in AUTHENTICATED_ROLES and not session.token:
            raise SessionExpiredError()

        if session.role not in allowed_roles:
            raise AuthorizationError()

        return session

    return role_checker

# Specific role dependencies
async def get_admin_session(
    session: PortalSession = Depends(require_role(UserRole.ADMIN))
) -> PortalSession:
    """Require admin role."""
    return session

async def get_doctor_session(
    session: PortalSession = Depends(require_role(UserRole.DOCTOR))
) -> PortalSession:
    """Require doctor role."""
    return session

async def get_logged_patient_session(
    session: PortalSession = Depends(require_role(UserRole.LOGGED_PATIENT))
) -> PortalSession:
    """Require a logged-in patient."""
    return session

# Rate limiting dependency
async def rate_limit_check(
    request: Request,
    redis_client = Depends(get_redis)
) -> None:
    """Basic rate limiting for login and signup submissions."""
    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:{client_ip}"

    current_requests = redis_client.get(key)
    if current_requests is None:
        redis_client.setex(key, settings.LOGIN_RATE_WINDOW_SECONDS, 1)
    else:
        if int(current_requests) >= settings.LOGIN_RATE_LIMIT:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many requests. Please try again later."
            )
        redis_client.incr(key)
