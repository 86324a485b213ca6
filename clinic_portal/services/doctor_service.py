from typing import List, Optional, Union
import logging

from .api_client import ApiClient, parse_records, result_message
from ..schemas.common import ActionResult
from ..schemas.doctor import Doctor, DoctorCreate

logger = logging.getLogger(__name__)


class DoctorService:
    """High-level access to the backend's doctor endpoints"""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_doctors(self) -> List[Doctor]:
        """Fetch every doctor."""
        body = await self.client.get("/doctor")
        return parse_records(Doctor, body, "doctors")

    async def filter_doctors(
        self,
        name: Optional[str] = None,
        time: Optional[str] = None,
        specialty: Optional[str] = None,
    ) -> List[Doctor]:
        """
        Fetch doctors matching the given criteria.

        Blank criteria are dropped; with no criteria left this is the
        unfiltered list.
        """
        criteria = {
            "name": (name or "").strip(),
            "time": (time or "").strip(),
            "specialty": (specialty or "").strip(),
        }
        params = {key: value for key, value in criteria.items() if value}

        if not params:
            return await self.get_doctors()

        body = await self.client.get("/doctor/filter", params=params)
        return parse_records(Doctor, body, "doctors")

    async def find_doctor(self, doctor_id: Union[int, str]) -> Optional[Doctor]:
        """Look a doctor up by id in the full list."""
        for doctor in await self.get_doctors():
            if str(doctor.id) == str(doctor_id):
                return doctor
        return None

    async def save_doctor(self, doctor: DoctorCreate, token: str) -> ActionResult:
        """Create a doctor (admin only)."""
        body = await self.client.post("/doctor", json=doctor.to_payload(), token=token)
        logger.info(f"Doctor {doctor.email} saved")
        return ActionResult(
            success=True,
            message=result_message(body, f"Dr. {doctor.name} added successfully!"),
        )

    async def delete_doctor(self, doctor_id: Union[int, str], token: str) -> ActionResult:
        """Delete a doctor (admin only)."""
        body = await self.client.delete(f"/doctor/{doctor_id}", token=token)
        logger.info(f"Doctor {doctor_id} deleted")
        return ActionResult(
            success=True,
            message=result_message(body, "Doctor deleted successfully"),
        )
