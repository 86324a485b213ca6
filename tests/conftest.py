import os

# Set testing environment variable before the app is imported
os.environ["TESTING"] = "1"

import httpx
import pytest
from fastapi.testclient import TestClient

from clinic_portal.main import app
from clinic_portal.api.deps import get_api_client
from clinic_portal.core.config import settings
from clinic_portal.core.security import verify_session_cookie
from clinic_portal.core.session import SessionStore, redis_client
from clinic_portal.services.api_client import ApiClient

API_BASE_URL = "http://backend.test/api"


class FakeBackend:
    """Stands in for the clinic REST API: canned answers per (method, path)."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, status_code=200, json=None):
        self.routes[(method, path)] = (status_code, json)

    def fail(self, method, path, exc):
        self.routes[(method, path)] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path[len("/api"):]
        route = self.routes.get((request.method, path))

        if route is None:
            return httpx.Response(404, json={"error": "Not found"})
        if isinstance(route, Exception):
            raise route

        status_code, body = route
        return httpx.Response(status_code, json=body)

    def calls(self, method, path):
        return [
            request for request in self.requests
            if request.method == method and request.url.path == f"/api{path}"
        ]


def make_api_client(backend: FakeBackend) -> ApiClient:
    return ApiClient(base_url=API_BASE_URL, transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    api_client = make_api_client(backend)
    app.dependency_overrides[get_api_client] = lambda: api_client
    redis_client.flushdb()

    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client

    app.dependency_overrides.clear()


# Test data
doctor_smith = {
    "id": 1,
    "name": "John Smith",
    "email": "smith@clinic.com",
    "phone": "5551234567",
    "specialty": "Cardiologist",
    "availableTimes": ["09:00-10:00", "10:00-11:00"],
    "rating": 4.5,
}

doctor_jones = {
    "id": 2,
    "name": "Anna Jones",
    "email": "jones@clinic.com",
    "phone": "5559876543",
    "specialty": "Dermatologist",
    "availableTimes": ["14:00-15:00"],
    "rating": 4.0,
}

patient_ann = {
    "id": 7,
    "name": "Ann Patient",
    "email": "ann@example.com",
    "phone": "5550001111",
    "address": "1 Main St",
}


def login_as(client, backend, role):
    """Log the test client in as ``role`` without following the redirect."""
    if role == "admin":
        backend.add("POST", "/admin", json={"token": "admin-token"})
        return client.post(
            "/auth/admin/login",
            data={"username": "admin", "password": "secret"},
            follow_redirects=False,
        )
    if role == "doctor":
        backend.add("POST", "/doctor/login", json={"token": "doctor-token"})
        return client.post(
            "/auth/doctor/login",
            data={"email": "smith@clinic.com", "password": "secret"},
            follow_redirects=False,
        )
    if role == "loggedPatient":
        backend.add("POST", "/patient/login", json={"token": "patient-token"})
        return client.post(
            "/auth/patient/login",
            data={"email": "ann@example.com", "password": "secret"},
            follow_redirects=False,
        )
    if role == "patient":
        return client.post("/select-role", data={"role": "patient"}, follow_redirects=False)
    raise ValueError(role)


def current_session(client):
    """Load the server-side session behind the client's cookie."""
    session_id = verify_session_cookie(client.cookies.get(settings.SESSION_COOKIE_NAME))
    return SessionStore(redis_client).load(session_id)


def save_session(session):
    SessionStore(redis_client).save(session)
