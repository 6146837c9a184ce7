from __future__ import annotations

import pytest

from medtransport import CallContext, ErrorCode, NotFound
from medtransport.services import driver as driver_svc


def _register(registries, ctx, *, cpr=True, first_aid=True, expiry=10100):
    return registries.drivers.register_driver(
        ctx,
        "Jane Smith",
        "DL12345678",
        expiry,
        "EMT Basic",
        cpr,
        first_aid,
        "Elderly care, wheelchair handling",
    )


def test_register_driver(registries, ctx):
    res = _register(registries, ctx)
    assert res.ok
    assert res.value == 1

    d = registries.drivers.get_driver(1)
    assert d is not None
    assert d.owner == ctx.actor
    assert d.name == "Jane Smith"
    assert d.license_number == "DL12345678"
    assert d.license_expiry == 10100
    assert d.medical_training == "EMT Basic"
    assert d.cpr_certified is True
    assert d.first_aid_certified is True
    assert d.special_training == "Elderly care, wheelchair handling"
    assert d.certification_status == "pending"
    assert d.registration_date == 100


def test_driver_ids_are_sequential(registries, ctx):
    assert _register(registries, ctx).value == 1
    assert _register(registries, ctx).value == 2
    assert registries.drivers.get_driver(3) is None


def test_update_driver_replaces_fields_and_resets_status(registries, ctx, certifier):
    _register(registries, ctx)
    registries.drivers.add_certification(certifier, 1, "Medical Transport", 5100, "NEMT")
    assert registries.drivers.get_driver(1).certification_status == "certified"

    res = registries.drivers.update_driver(
        ctx, 1, "DL12345678", 20100, "EMT Intermediate", True, False,
        "Elderly care, wheelchair handling, oxygen therapy",
    )
    assert res.value == 1

    d = registries.drivers.get_driver(1)
    assert d.license_expiry == 20100
    assert d.medical_training == "EMT Intermediate"
    assert d.first_aid_certified is False
    assert d.special_training == "Elderly care, wheelchair handling, oxygen therapy"
    assert d.certification_status == "pending"
    # имя и владелец не трогаются
    assert d.name == "Jane Smith"
    assert d.owner == ctx.actor


def test_update_driver_unknown_id(registries, ctx):
    res = registries.drivers.update_driver(ctx, 7, "DL1", 1, "x", True, True, "y")
    assert not res.ok
    assert res.error == ErrorCode.NOT_FOUND
    assert res.error == 404


def test_update_driver_by_stranger_is_forbidden(registries, ctx, other):
    _register(registries, ctx)
    res = registries.drivers.update_driver(other, 1, "HACKED", 1, "x", False, False, "y")
    assert res.error == 403

    d = registries.drivers.get_driver(1)
    assert d.license_number == "DL12345678"
    assert d.cpr_certified is True


def test_add_certification(registries, ctx, certifier):
    _register(registries, ctx)
    res = registries.drivers.add_certification(
        certifier, 1, "Medical Transport", 5100, "Certified for non-emergency medical transport",
    )
    assert res.value == 1

    c = registries.drivers.get_certification(1)
    assert c is not None
    assert c.driver_id == 1
    assert c.certifier == certifier.actor
    assert c.certification_type == "Medical Transport"
    assert c.issue_date == 100
    assert c.expiry_date == 5100
    assert c.certification_details == "Certified for non-emergency medical transport"

    assert registries.drivers.get_driver(1).certification_status == "certified"


def test_add_certification_explicit_certifier(registries, ctx):
    _register(registries, ctx)
    registries.drivers.add_certification(ctx, 1, "CPR", 900, "Red Cross", certifier="board-of-health")
    assert registries.drivers.get_certification(1).certifier == "board-of-health"


def test_add_certification_unknown_driver_does_not_consume_id(registries, ctx, certifier):
    res = registries.drivers.add_certification(certifier, 42, "Medical Transport", 5100, "n/a")
    assert res.error == ErrorCode.NOT_FOUND
    assert registries.drivers.get_certification(1) is None

    _register(registries, ctx)
    assert registries.drivers.add_certification(certifier, 1, "Medical Transport", 5100, "n/a").value == 1


def test_list_certifications(registries, ctx, certifier):
    _register(registries, ctx)
    _register(registries, ctx)
    registries.drivers.add_certification(certifier, 1, "CPR", 500, "a")
    registries.drivers.add_certification(certifier, 2, "CPR", 500, "b")
    registries.drivers.add_certification(certifier, 1, "First Aid", 600, "c")

    assert [c.id for c in registries.drivers.list_certifications(1)] == [1, 3]
    assert registries.drivers.list_certifications(99) == []


def test_check_driver_eligibility(registries, ctx, certifier):
    _register(registries, ctx, cpr=True, first_aid=False)
    registries.drivers.add_certification(certifier, 1, "Medical Transport", 5100, "NEMT")

    res = registries.drivers.check_driver_eligibility(ctx, 1, True, False)
    assert res.value.eligible is True
    assert res.value.certification_status == "certified"

    res = registries.drivers.check_driver_eligibility(ctx, 1, False, True)
    assert res.value.eligible is False


def test_uncertified_driver_is_not_eligible(registries, ctx):
    _register(registries, ctx)
    res = registries.drivers.check_driver_eligibility(ctx, 1, False, False)
    assert res.value.eligible is False
    assert res.value.certification_status == "pending"


@pytest.mark.parametrize("clock, eligible", [(99, True), (10099, True), (10100, False), (20000, False)])
def test_expired_license_is_not_eligible(registries, ctx, certifier, clock, eligible):
    _register(registries, ctx, expiry=10100)
    registries.drivers.add_certification(certifier, 1, "Medical Transport", 5100, "NEMT")

    later = CallContext(actor=ctx.actor, clock=clock)
    assert registries.drivers.check_driver_eligibility(later, 1, False, False).value.eligible is eligible


def test_eligibility_check_does_not_mutate(registries, ctx):
    _register(registries, ctx)
    before = registries.drivers.get_driver(1).to_dict()
    registries.drivers.check_driver_eligibility(ctx, 1, True, True)
    assert registries.drivers.get_driver(1).to_dict() == before


def test_eligibility_unknown_driver(registries, ctx):
    assert registries.drivers.check_driver_eligibility(ctx, 5, False, False).error == 404


def test_service_raises_not_found(db, ctx):
    with pytest.raises(NotFound):
        driver_svc.update_driver(
            db, ctx, 1,
            license_number="DL1",
            license_expiry=1,
            medical_training="x",
            cpr_certified=True,
            first_aid_certified=True,
            special_training="y",
        )
    with pytest.raises(LookupError):
        driver_svc.check_driver_eligibility(db, ctx, 1, False, False)


def test_empty_certifier_is_kept(registries, ctx):
    _register(registries, ctx)
    registries.drivers.add_certification(ctx, 1, "CPR", 900, "Red Cross", certifier="")
    assert registries.drivers.get_certification(1).certifier == ""
