from pydantic_settings import BaseSettings
from typing import List
import os

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Clinic Portal"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    TESTING: bool = os.getenv("TESTING", "0").lower() in ("1", "true", "t", "yes", "y")

    # Clinic backend
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8080/api")
    API_TIMEOUT: float = 10.0

    # Session
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "clinic_session"
    SESSION_EXPIRE_MINUTES: int = 480

    # Redis (session records and login throttling)
    REDIS_URL: str = "redis://localhost:6379"
    LOGIN_RATE_LIMIT: int = 10
    LOGIN_RATE_WINDOW_SECONDS: int = 3600

    # Dashboards
    SEARCH_DEBOUNCE_MS: int = 300
    MAX_TIME_SLOTS: int = 8
    DOCTOR_SPECIALTIES: List[str] = [
        "Cardiologist",
        "Dermatologist",
        "Neurologist",
        "Pediatrician",
        "Orthopedic",
        "Gynecologist",
        "Psychiatrist",
        "Dentist",
        "Ophthalmologist",
        "ENT Specialist",
        "Urologist",
        "Oncologist",
        "Gastroenterologist",
        "General Physician",
    ]

    # Hosts
    ALLOWED_HOSTS: List[str] = ["localhost", "127.0.0.1", "*.localhost", "testserver"]

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
