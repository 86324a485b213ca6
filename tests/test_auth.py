import json
import pytest

from clinic_portal.core.config import settings

from .conftest import current_session, doctor_smith, login_as

class TestAuthentication:

    def test_admin_login_success(self, client, backend):
        """Admin login stores the token and opens the admin dashboard."""
        response = login_as(client, backend, "admin")
        assert response.status_code == 303
        assert response.headers["location"] == "/admin/dashboard"

        session = current_session(client)
        assert session.role == "admin"
        assert session.token == "admin-token"

        sent = backend.calls("POST", "/admin")[0]
        assert json.loads(sent.content) == {"username": "admin", "password": "secret"}

    def test_admin_login_missing_fields(self, client, backend):
        """Missing credentials never reach the backend."""
        response = client.post("/auth/admin/login", data={"username": "admin"})
        assert response.status_code == 200
        assert "Please enter both username and password" in response.text
        assert backend.calls("POST", "/admin") == []

    def test_admin_login_invalid_credentials(self, client, backend):
        backend.add("POST", "/admin", status_code=401, json={"error": "Invalid credentials"})

        response = client.post(
            "/auth/admin/login",
            data={"username": "admin", "password": "wrong"}
        )
        assert response.status_code == 200
        assert "Invalid admin credentials!" in response.text
        assert current_session(client).token is None

    def test_admin_login_backend_down(self, client, backend):
        backend.add("POST", "/admin", status_code=500, json={"error": "boom"})

        response = client.post(
            "/auth/admin/login",
            data={"username": "admin", "password": "secret"}
        )
        assert "An error occurred during admin login" in response.text

    def test_doctor_login_success(self, client, backend):
        response = login_as(client, backend, "doctor")
        assert response.status_code == 303
        assert response.headers["location"] == "/doctor/dashboard"
        assert current_session(client).role == "doctor"

    def test_doctor_login_invalid_credentials(self, client, backend):
        backend.add("POST", "/doctor/login", status_code=401, json={"error": "Invalid"})

        response = client.post(
            "/auth/doctor/login",
            data={"email": "smith@clinic.com", "password": "wrong"}
        )
        assert "Invalid doctor credentials!" in response.text

    def test_login_response_without_token(self, client, backend):
        backend.add("POST", "/doctor/login", json={"message": "ok"})

        client.post(
            "/auth/doctor/login",
            data={"email": "smith@clinic.com", "password": "secret"},
            follow_redirects=False
        )
        assert current_session(client).role is None

    def test_patient_login_success(self, client, backend):
        backend.add("GET", "/doctor", json=[doctor_smith])
        login_as(client, backend, "patient")

        response = login_as(client, backend, "loggedPatient")
        assert response.status_code == 303
        assert response.headers["location"] == "/patient/home"

        session = current_session(client)
        assert session.role == "loggedPatient"
        assert session.token == "patient-token"

        page = client.get("/patient/home")
        assert "Login successful!" in page.text
        assert "Book Appointment" in page.text

    def test_patient_login_failure_uses_backend_message(self, client, backend):
        backend.add("GET", "/doctor", json=[])
        backend.add("POST", "/patient/login", status_code=401, json={"error": "Wrong password"})
        login_as(client, backend, "patient")

        response = client.post(
            "/auth/patient/login",
            data={"email": "ann@example.com", "password": "nope"}
        )
        assert "Wrong password" in response.text
        assert current_session(client).role == "patient"

    def test_patient_signup_missing_fields(self, client, backend):
        """A signup without a password is blocked before the backend call."""
        backend.add("GET", "/doctor", json=[])
        login_as(client, backend, "patient")

        response = client.post(
            "/auth/patient/signup",
            data={"name": "Ann", "email": "ann@example.com"}
        )
        assert "Please fill all required fields" in response.text
        assert backend.calls("POST", "/patient") == []

    def test_patient_signup_invalid_email(self, client, backend):
        backend.add("GET", "/doctor", json=[])
        login_as(client, backend, "patient")

        response = client.post(
            "/auth/patient/signup",
            data={"name": "Ann", "email": "not-an-email", "password": "secret"}
        )
        assert "Please enter a valid email address" in response.text
        assert backend.calls("POST", "/patient") == []

    def test_patient_signup_success(self, client, backend):
        backend.add("GET", "/doctor", json=[])
        backend.add("POST", "/patient", json={"message": "Signup successful"})
        login_as(client, backend, "patient")

        response = client.post(
            "/auth/patient/signup",
            data={
                "name": "Ann Patient",
                "email": "ann@example.com",
                "password": "secret",
                "phone": "5550001111",
                "address": "1 Main St"
            }
        )
        assert response.status_code == 200
        assert "Signup successful" in response.text
        assert len(backend.calls("POST", "/patient")) == 1

    def test_patient_signup_backend_error(self, client, backend):
        backend.add("GET", "/doctor", json=[])
        backend.add("POST", "/patient", status_code=409, json={"message": "Patient already exists"})
        login_as(client, backend, "patient")

        response = client.post(
            "/auth/patient/signup",
            data={"name": "Ann", "email": "ann@example.com", "password": "secret"}
        )
        assert "Patient already exists" in response.text

    def test_logout(self, client, backend):
        login_as(client, backend, "admin")

        response = client.post("/auth/logout", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"

        session = current_session(client)
        assert session.role is None
        assert session.token is None

    def test_patient_logout_keeps_patient_role(self, client, backend):
        login_as(client, backend, "loggedPatient")

        response = client.post("/auth/patient/logout", follow_redirects=False)
        assert response.headers["location"] == "/patient/dashboard"

        session = current_session(client)
        assert session.role == "patient"
        assert session.token is None

    def test_login_rate_limit(self, client, backend):
        backend.add("POST", "/admin", status_code=401, json={"error": "Invalid"})

        for _ in range(settings.LOGIN_RATE_LIMIT):
            client.post(
                "/auth/admin/login",
                data={"username": "admin", "password": "wrong"},
                follow_redirects=False
            )

        response = client.post(
            "/auth/admin/login",
            data={"username": "admin", "password": "wrong"},
            follow_redirects=False
        )
        assert response.status_code == 429

class TestRoleSelection:

    def test_home_clears_role_and_token(self, client, backend):
        login_as(client, backend, "admin")

        response = client.get("/")
        assert response.status_code == 200
        assert "Select Your Role" in response.text

        session = current_session(client)
        assert session.role is None
        assert session.token is None

    def test_select_patient_role(self, client, backend):
        response = login_as(client, backend, "patient")
        assert response.status_code == 303
        assert response.headers["location"] == "/patient/dashboard"
        assert current_session(client).role == "patient"

    @pytest.mark.parametrize("role", ["admin", "doctor"])
    def test_select_staff_role_shows_login_form(self, client, role):
        response = client.post("/select-role", data={"role": role})
        assert response.status_code == 200
        assert f"/auth/{role}/login" in response.text

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

if __name__ == "__main__":
    pytest.main([__file__])
