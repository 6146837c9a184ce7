from __future__ import annotations

import pytest

from medtransport import ErrorCode, Forbidden
from medtransport.models import RequestStatus
from medtransport.services import patient as patient_svc


def _register(registries, ctx):
    return registries.patients.register_patient(
        ctx,
        "John Doe",
        "123 Main St, Anytown",
        "555-123-4567",
        "Chronic kidney disease",
        "Wheelchair",
        "Wheelchair, oxygen",
        True,
    )


def _request(registries, ctx, patient_id=1):
    return registries.patients.create_transport_request(
        ctx,
        patient_id,
        "123 Main St, Anytown",
        "Anytown Dialysis Center",
        200,
        True,
        "Patient needs assistance getting into vehicle",
    )


def test_register_patient(registries, ctx):
    res = _register(registries, ctx)
    assert res.value == 1

    p = registries.patients.get_patient(1)
    assert p.owner == ctx.actor
    assert p.name == "John Doe"
    assert p.address == "123 Main St, Anytown"
    assert p.contact == "555-123-4567"
    assert p.medical_condition == "Chronic kidney disease"
    assert p.mobility_status == "Wheelchair"
    assert p.equipment_needs == "Wheelchair, oxygen"
    assert p.recurring_schedule is True
    assert p.registration_date == 100


def test_update_patient(registries, ctx):
    _register(registries, ctx)
    res = registries.patients.update_patient(
        ctx, 1, "456 Oak Ave, Anytown", "555-987-6543", "Chronic kidney disease, diabetes",
        "Walker", "Walker", False,
    )
    assert res.value == 1

    p = registries.patients.get_patient(1)
    assert p.name == "John Doe"
    assert p.address == "456 Oak Ave, Anytown"
    assert p.contact == "555-987-6543"
    assert p.medical_condition == "Chronic kidney disease, diabetes"
    assert p.mobility_status == "Walker"
    assert p.equipment_needs == "Walker"
    assert p.recurring_schedule is False


def test_update_patient_errors(registries, ctx, other):
    assert registries.patients.update_patient(ctx, 1, "a", "b", "c", "d", "e", False).error == 404

    _register(registries, ctx)
    res = registries.patients.update_patient(other, 1, "a", "b", "c", "d", "e", False)
    assert res.error == ErrorCode.FORBIDDEN
    assert registries.patients.get_patient(1).address == "123 Main St, Anytown"


def test_create_transport_request(registries, ctx):
    _register(registries, ctx)
    res = _request(registries, ctx)
    assert res.value == 1

    r = registries.patients.get_transport_request(1)
    assert r.patient_id == 1
    assert r.pickup_location == "123 Main St, Anytown"
    assert r.destination == "Anytown Dialysis Center"
    assert r.appointment_time == 200
    assert r.return_trip is True
    assert r.special_instructions == "Patient needs assistance getting into vehicle"
    assert r.status == "pending"
    assert r.request_date == 100


def test_create_transport_request_errors(registries, ctx, other):
    assert _request(registries, ctx, patient_id=3).error == 404

    _register(registries, ctx)
    assert _request(registries, other).error == 403
    assert registries.patients.get_transport_request(1) is None

    # неудачные вызовы id не расходуют
    assert _request(registries, ctx).value == 1


def test_update_request_status(registries, ctx):
    assert _register(registries, ctx).value == 1
    assert _request(registries, ctx).value == 1

    res = registries.patients.update_request_status(ctx, 1, "confirmed")
    assert res.value == 1
    assert registries.patients.get_transport_request(1).status == "confirmed"


def test_update_request_status_accepts_any_value(registries, ctx):
    _register(registries, ctx)
    _request(registries, ctx)

    registries.patients.update_request_status(ctx, 1, RequestStatus.CONFIRMED)
    assert registries.patients.get_transport_request(1).status == "confirmed"

    # переходы не ограничены
    registries.patients.update_request_status(ctx, 1, "pending")
    assert registries.patients.get_transport_request(1).status == "pending"

    registries.patients.update_request_status(ctx, 1, "rescheduled-by-clinic")
    assert registries.patients.get_transport_request(1).status == "rescheduled-by-clinic"


def test_update_request_status_errors(registries, ctx, other):
    assert registries.patients.update_request_status(ctx, 1, "confirmed").error == 404

    _register(registries, ctx)
    _request(registries, ctx)
    assert registries.patients.update_request_status(other, 1, "cancelled").error == 403
    assert registries.patients.get_transport_request(1).status == "pending"


def test_list_transport_requests(registries, ctx):
    _register(registries, ctx)
    _register(registries, ctx)
    _request(registries, ctx, 1)
    _request(registries, ctx, 2)
    _request(registries, ctx, 1)

    assert [r.id for r in registries.patients.list_transport_requests(1)] == [1, 3]
    assert [r.id for r in registries.patients.list_transport_requests(2)] == [2]


def test_service_raises_forbidden(db, ctx, other):
    p = patient_svc.register_patient(
        db, ctx,
        name="John Doe",
        address="a",
        contact="b",
        medical_condition="c",
        mobility_status="d",
        equipment_needs="e",
        recurring_schedule=False,
    )
    with pytest.raises(Forbidden):
        patient_svc.create_transport_request(
            db, other, p.id,
            pickup_location="x",
            destination="y",
            appointment_time=1,
            return_trip=False,
            special_instructions="",
        )
    with pytest.raises(PermissionError):
        patient_svc.update_patient(
            db, other, p.id,
            address="a",
            contact="b",
            medical_condition="c",
            mobility_status="d",
            equipment_needs="e",
            recurring_schedule=False,
        )
