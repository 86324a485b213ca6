from typing import List, Optional, Union
import logging

from .api_client import ApiClient, parse_record, parse_records, result_message
from ..schemas.appointment import Appointment
from ..schemas.common import ActionResult
from ..schemas.patient import Patient, PatientSignup

logger = logging.getLogger(__name__)


class PatientService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def signup(self, data: PatientSignup) -> ActionResult:
        """Register a new patient."""
        body = await self.client.post("/patient", json=data.model_dump())
        logger.info(f"Patient {data.email} registered")
        return ActionResult(
            success=True,
            message=result_message(body, "Signup successful"),
        )

    async def get_patient_data(self, token: str) -> Optional[Patient]:
        """Fetch the logged-in patient's record."""
        body = await self.client.get("/patient/data", token=token)
        if isinstance(body, dict) and body.get("patient"):
            return parse_record(Patient, body["patient"])
        return None

    async def get_patient_appointments(
        self,
        patient_id: Union[int, str],
        token: str,
        user: str,
    ) -> List[Appointment]:
        """Fetch one patient's appointments as seen by ``user`` (a role name)."""
        body = await self.client.get(
            f"/patient/appointments/{patient_id}",
            token=token,
            headers={"X-User-Role": user},
        )
        return parse_records(Appointment, body, "appointments")

    async def filter_appointments(
        self,
        condition: Optional[str],
        name: Optional[str],
        token: str,
    ) -> List[Appointment]:
        """Filter the patient's appointments by condition (past/future) and doctor name."""
        body = await self.client.get(
            "/patient/filter",
            token=token,
            params={"condition": condition or "", "name": name or ""},
        )
        return parse_records(Appointment, body, "appointments")
