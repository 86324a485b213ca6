from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from enum import Enum

from .config import settings

class UserRole(str, Enum):
    ADMIN = "admin"
    DOCTOR = "doctor"
    PATIENT = "patient"
    LOGGED_PATIENT = "loggedPatient"

# Roles that only make sense with a backend token in the session
AUTHENTICATED_ROLES = (UserRole.ADMIN, UserRole.DOCTOR, UserRole.LOGGED_PATIENT)

# Session cookie utilities
def create_session_cookie(
    session_id: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Sign a session id into a JWT for the session cookie."""
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(
            minutes=settings.SESSION_EXPIRE_MINUTES
        )

    to_encode = {"sid": session_id, "exp": expire}

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )

def verify_session_cookie(value: str) -> Optional[str]:
    """Return the session id carried by a cookie, or None if it is invalid."""
    try:
        payload = jwt.decode(
            value,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None

    session_id = payload.get("sid")
    return session_id if isinstance(session_id, str) else None

# Session exceptions
class SessionExpiredError(Exception):
    def __init__(self, detail: str = "Session expired or invalid login. Please log in again."):
        super().__init__(detail)
        self.detail = detail

class AuthorizationError(Exception):
    def __init__(self, detail: str = "Please log in to access this page."):
        super().__init__(detail)
        self.detail = detail
