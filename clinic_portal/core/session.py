from typing import List, Optional
from pydantic import BaseModel, Field
import secrets
import redis

from .config import settings
from .security import UserRole

# Redis setup - mock for testing
if settings.TESTING:
    # Use a simple dict-based mock for Redis in tests
    class RedisMock:
        def __init__(self):
            self.data = {}

        def setex(self, key, time, value):
            self.data[key] = str(value)
            return True

        def get(self, key):
            return self.data.get(key)

        def expire(self, key, time):
            return key in self.data

        def incr(self, key):
            if key in self.data:
                try:
                    self.data[key] = str(int(self.data[key]) + 1)
                except ValueError:
                    self.data[key] = "1"
            else:
                self.data[key] = "1"
            return int(self.data[key])

        def flushdb(self):
            self.data.clear()
            return True

    redis_client = RedisMock()
else:
    # Real Redis client for production
    redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)

# Redis dependency
def get_redis():
    """Get Redis client."""
    return redis_client


class Notification(BaseModel):
    message: str
    level: str = "info"


class PortalSession(BaseModel):
    """Per-browser state: the selected role and the backend token."""

    id: str
    role: Optional[UserRole] = None
    token: Optional[str] = None
    notifications: List[Notification] = Field(default_factory=list)

    def notify(self, message: str, level: str = "info") -> None:
        self.notifications.append(Notification(message=message, level=level))

    def pop_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    def login(self, role: UserRole, token: str) -> None:
        self.role = role
        self.token = token

    def clear(self) -> None:
        self.role = None
        self.token = None

    def logout_patient(self) -> None:
        # Patients keep browsing the public dashboard after logging out
        self.token = None
        self.role = UserRole.PATIENT


class SessionStore:
    """Session records kept in Redis as JSON under ``session:<id>``."""

    prefix = "session:"

    def __init__(self, client=None, ttl_seconds: Optional[int] = None):
        self.client = client if client is not None else redis_client
        self.ttl_seconds = ttl_seconds or settings.SESSION_EXPIRE_MINUTES * 60

    def create(self) -> PortalSession:
        return PortalSession(id=secrets.token_urlsafe(32))

    def load(self, session_id: str) -> Optional[PortalSession]:
        raw = self.client.get(f"{self.prefix}{session_id}")
        if raw is None:
            return None
        return PortalSession.model_validate_json(raw)

    def save(self, session: PortalSession) -> None:
        self.client.setex(
            f"{self.prefix}{session.id}",
            self.ttl_seconds,
            session.model_dump_json()
        )

    def touch(self, session: PortalSession) -> None:
        """Restart the TTL of a stored session without rewriting it."""
        self.client.expire(f"{self.prefix}{session.id}", self.ttl_seconds)


# Session store dependency
def get_session_store() -> SessionStore:
    """Get session store."""
    return SessionStore(redis_client)
