"""
End-to-end tests of the REST API over a SQLite database.

Covers the administrator setting up a specialty and a doctor, the doctor
publishing availability, a patient registering, booking and cancelling, and
the asynchronous CSV report.
"""

import re
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app.core.app_factory import create_app
from app.core.domain import utc_now
from app.services.token_service import TokenService

pytestmark = [pytest.mark.integration, pytest.mark.api]

API = "/api/v1"
TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _iso(value) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def _login(client: TestClient, email: str, password: str) -> str:
    response = client.post(f"{API}/auth/autenticar", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def client(sync_db_schema, container) -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def clinic(client, admin_credentials):
    """Specialty, doctor and a registered patient, with their tokens."""
    admin_token = _login(client, *admin_credentials)

    specialty = client.post(f"{API}/especialidades", json={"name": "Cardiología"}, headers=_auth(admin_token))
    assert specialty.status_code == 201, specialty.text

    doctor = client.post(
        f"{API}/doctores",
        json={
            "firstName": "Ana",
            "lastName": "García",
            "email": "ana@clinica.com.ar",
            "password": "doctor-secret-1",
            "specialtyId": specialty.json()["id"],
        },
        headers=_auth(admin_token),
    )
    assert doctor.status_code == 201, doctor.text

    registration = client.post(
        f"{API}/auth/registro/paciente",
        json={
            "firstName": "Laura",
            "lastName": "Pérez",
            "email": "laura@mail.com.ar",
            "password": "paciente-secret-1",
        },
    )
    assert registration.status_code == 201, registration.text
    patient_token = registration.json()["token"]

    return {
        "admin_token": admin_token,
        "doctor": doctor.json(),
        "doctor_token": _login(client, "ana@clinica.com.ar", "doctor-secret-1"),
        "patient_id": str(TokenService().get_claims(patient_token).account_id),
        "patient_token": patient_token,
    }


def _create_slot(client: TestClient, clinic: dict, starts_in: timedelta) -> dict:
    start = utc_now().replace(microsecond=0) + starts_in
    response = client.post(
        f"{API}/doctores/{clinic['doctor']['id']}/disponibilidades",
        json={"startTime": _iso(start), "endTime": _iso(start + timedelta(minutes=30))},
        headers=_auth(clinic["doctor_token"]),
    )
    assert response.status_code == 201, response.text
    return response.json()


def _book(client: TestClient, clinic: dict, slot: dict, doctor_id: str | None = None):
    return client.post(
        f"{API}/citas",
        json={
            "doctorId": doctor_id or clinic["doctor"]["id"],
            "patientId": clinic["patient_id"],
            "slotId": slot["id"],
            "reason": "Control anual",
        },
        headers=_auth(clinic["patient_token"]),
    )


def _slot_reserved(client: TestClient, clinic: dict, slot: dict) -> bool:
    day = slot["startTime"][:10]
    response = client.get(
        f"{API}/doctores/{clinic['doctor']['id']}/disponibilidades",
        params={"startDate": day, "endDate": day},
        headers=_auth(clinic["doctor_token"]),
    )
    assert response.status_code == 200, response.text
    return next(s["reserved"] for s in response.json() if s["id"] == slot["id"])


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_doctor_exposes_specialty_name(clinic):
    assert clinic["doctor"]["specialtyName"] == "Cardiología"
    assert "password" not in clinic["doctor"]
    assert "passwordHash" not in clinic["doctor"]


def test_book_and_cancel_ahead_of_window(client, clinic, notification_service):
    """Test booking reserves the slot and cancelling 30 hours ahead frees it."""
    # Arrange
    slot = _create_slot(client, clinic, timedelta(hours=30))

    # Act
    booked = _book(client, clinic, slot)

    # Assert
    assert booked.status_code == 201, booked.text
    appointment = booked.json()
    assert appointment["status"] == "CONFIRMED"
    assert appointment["startTime"] == slot["startTime"]
    assert TIMESTAMP.match(appointment["createdAt"])
    assert _slot_reserved(client, clinic, slot) is True

    cancelled = client.patch(
        f"{API}/citas/{appointment['id']}",
        json={"newStatus": "CANCELLED"},
        headers=_auth(clinic["patient_token"]),
    )
    assert cancelled.status_code == 200, cancelled.text
    assert cancelled.json()["status"] == "CANCELLED"
    assert _slot_reserved(client, clinic, slot) is False

    again = client.patch(
        f"{API}/citas/{appointment['id']}",
        json={"newStatus": "CANCELLED"},
        headers=_auth(clinic["patient_token"]),
    )
    assert again.status_code == 400
    assert again.json()["code"] == "INVALID_OPERATION"

    assert [subject for _, subject, _ in notification_service.sent] == ["Cita Confirmada", "Cita Cancelada"]


def test_cancel_inside_window_is_forbidden(client, clinic):
    # Arrange
    slot = _create_slot(client, clinic, timedelta(hours=2))
    appointment = _book(client, clinic, slot).json()

    # Act
    response = client.patch(
        f"{API}/citas/{appointment['id']}",
        json={"newStatus": "CANCELLED"},
        headers=_auth(clinic["patient_token"]),
    )

    # Assert
    assert response.status_code == 403
    body = response.json()
    assert body["code"] == "APPOINTMENT_CANCELLATION_WINDOW_CLOSED"
    assert body["fieldErrors"]["detail"].startswith("Horas restantes: ")
    assert _slot_reserved(client, clinic, slot) is True


def test_only_cancellation_is_accepted(client, clinic):
    slot = _create_slot(client, clinic, timedelta(days=2))
    appointment = _book(client, clinic, slot).json()

    response = client.patch(
        f"{API}/citas/{appointment['id']}",
        json={"newStatus": "COMPLETED"},
        headers=_auth(clinic["patient_token"]),
    )

    assert response.status_code == 400
    assert response.json()["fieldErrors"] == {"newStatus": "Sólo se permite cambiar el estado a CANCELLED."}


def test_double_booking_is_rejected(client, clinic):
    slot = _create_slot(client, clinic, timedelta(days=2))
    assert _book(client, clinic, slot).status_code == 201

    response = _book(client, clinic, slot)

    # The slot is no longer offered once reserved
    assert response.status_code == 404
    assert response.json()["httpStatus"] == response.status_code


def test_booking_with_mismatched_doctor(client, clinic):
    """Test a slot of one doctor booked under another doctor's id is a conflict."""
    # Arrange
    slot = _create_slot(client, clinic, timedelta(days=2))
    other = client.post(
        f"{API}/doctores",
        json={
            "firstName": "Juan",
            "lastName": "López",
            "email": "juan@clinica.com.ar",
            "password": "doctor-secret-2",
            "specialtyId": clinic["doctor"]["specialtyId"],
        },
        headers=_auth(clinic["admin_token"]),
    ).json()

    # Act
    response = _book(client, clinic, slot, doctor_id=other["id"])

    # Assert
    assert response.status_code == 409
    assert response.json()["code"] == "SLOT_UNAVAILABLE"
    assert _slot_reserved(client, clinic, slot) is False


def test_overlapping_slot_rejected(client, clinic):
    slot = _create_slot(client, clinic, timedelta(days=3))
    start = slot["startTime"]

    response = client.post(
        f"{API}/doctores/{clinic['doctor']['id']}/disponibilidades",
        json={"startTime": start, "endTime": slot["endTime"]},
        headers=_auth(clinic["doctor_token"]),
    )

    assert response.status_code == 400
    assert response.json()["code"] == "SLOT_OVERLAP"


def test_delete_reserved_slot_rejected(client, clinic):
    """Test a booked slot cannot be withdrawn while a free one can."""
    # Arrange
    booked = _create_slot(client, clinic, timedelta(days=3))
    free = _create_slot(client, clinic, timedelta(days=4))
    assert _book(client, clinic, booked).status_code == 201

    # Act
    rejected = client.delete(f"{API}/doctores/disponibilidades/{booked['id']}", headers=_auth(clinic["doctor_token"]))
    deleted = client.delete(f"{API}/doctores/disponibilidades/{free['id']}", headers=_auth(clinic["doctor_token"]))

    # Assert
    assert rejected.status_code == 400
    assert rejected.json()["code"] == "SLOT_RESERVED"
    assert rejected.json()["httpStatus"] == 400
    assert _slot_reserved(client, clinic, booked) is True
    assert deleted.status_code == 204


def test_report_job_completes(client, clinic):
    """Test the report is accepted with a Location header and completes in the background."""
    # Arrange
    slot = _create_slot(client, clinic, timedelta(days=2))
    _book(client, clinic, slot)

    # Act
    accepted = client.post(
        f"{API}/reportes/citas-csv",
        params={"patientId": clinic["patient_id"]},
        headers=_auth(clinic["patient_token"]),
    )

    # Assert
    assert accepted.status_code == 202, accepted.text
    location = accepted.headers["Location"]
    assert location == f"{API}/reportes/estado/{accepted.json()['jobId']}"

    status = client.get(location, headers=_auth(clinic["patient_token"]))
    assert status.status_code == 200
    assert status.json()["status"] == "COMPLETED"
    assert status.json()["fileName"].endswith(".csv")


def test_requests_without_token_are_unauthorized(client, clinic):
    response = client.get(f"{API}/pacientes/{clinic['patient_id']}")

    assert response.status_code == 401
    assert response.json()["code"] == "AUTHENTICATION_ERROR"


def test_wrong_role_is_forbidden(client, clinic):
    # Patients cannot publish availability
    start = utc_now() + timedelta(days=1)
    response = client.post(
        f"{API}/doctores/{clinic['doctor']['id']}/disponibilidades",
        json={"startTime": _iso(start), "endTime": _iso(start + timedelta(minutes=30))},
        headers=_auth(clinic["patient_token"]),
    )

    assert response.status_code == 403
    assert response.json()["code"] == "AUTHORIZATION_ERROR"


def test_patient_cannot_read_other_patient(client, clinic):
    other = client.post(
        f"{API}/auth/registro/paciente",
        json={"firstName": "Juan", "lastName": "Gómez", "email": "juan@mail.com.ar", "password": "otra-clave-123"},
    ).json()["token"]

    response = client.get(f"{API}/pacientes/{clinic['patient_id']}", headers=_auth(other))

    assert response.status_code == 403


def test_invalid_credentials(client, clinic):
    response = client.post(f"{API}/auth/autenticar", json={"email": "laura@mail.com.ar", "password": "incorrecta"})

    assert response.status_code == 401
    assert response.json()["message"] == "Credenciales inválidas"


def test_correlation_id_is_echoed(client):
    response = client.get(f"{API}/especialidades", headers={"X-Correlation-ID": "abc-123"})

    assert response.status_code == 200
    assert response.headers["X-Correlation-ID"] == "abc-123"
    assert "X-Response-Time-Ms" in response.headers


def test_openapi_documents_error_body(client):
    schema = client.get("/openapi.json").json()

    responses = schema["paths"][f"{API}/citas"]["post"]["responses"]
    assert responses["409"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    error_schema = schema["components"]["schemas"]["ErrorResponse"]
    assert {"code", "message", "fieldErrors", "timestamp", "httpStatus"} <= set(error_schema["properties"])
