from typing import Any
import logging

from .api_client import ApiClient, ApiError
from ..schemas.auth import AdminLogin, UserLogin

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def admin_login(self, login_data: AdminLogin) -> str:
        """Authenticate an admin and return the backend token."""
        body = await self.client.post("/admin", json=login_data.model_dump())
        return self._extract_token(body, "admin")

    async def doctor_login(self, login_data: UserLogin) -> str:
        """Authenticate a doctor and return the backend token."""
        body = await self.client.post("/doctor/login", json=login_data.model_dump())
        return self._extract_token(body, "doctor")

    async def patient_login(self, login_data: UserLogin) -> str:
        """Authenticate a patient and return the backend token."""
        body = await self.client.post("/patient/login", json=login_data.model_dump())
        return self._extract_token(body, "patient")

    @staticmethod
    def _extract_token(body: Any, role: str) -> str:
        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            logger.warning(f"{role} login response carried no token")
            raise ApiError("Login response did not include a token")

        logger.info(f"{role} logged in")
        return token
