from datetime import datetime, timedelta

import pytest

from sensorhub.core.errors import AccessDenied, ConstraintViolation, MalformedInput, NotFound
from sensorhub.models import SensorReading, SubscriptionTier
from sensorhub.services import device_service, reading_service

from .conftest import FULL_READING

T0 = datetime(2025, 8, 20, 12, 0)


@pytest.fixture()
def owned(db, make_caller):
    owner = make_caller()
    device = device_service.register_device(db, owner, "AIR-100", "Estufa", "AIR")
    return owner, device


def test_owner_reads_masked_by_own_tier(db, owned):
    owner, device = owned
    reading_service.append_reading(db, owner, device.id, FULL_READING, timestamp=T0)

    rows = reading_service.list_masked_readings(db, owner, device.id)

    assert len(rows) == 1
    assert rows[0]["temperature"] == 21.5
    assert rows[0]["co2"] is None
    assert rows[0]["battery_voltage"] is None


def test_admin_reads_any_device_unmasked(db, owned, make_caller):
    owner, device = owned
    admin = make_caller(admin=True)
    reading_service.append_reading(db, owner, device.id, FULL_READING, timestamp=T0)

    row = reading_service.latest_masked_reading(db, admin, device.id)

    assert row["co2"] == 410.0
    assert row["battery_voltage"] == 3.7
    assert row["battery_health"] == "good"


def test_premium_stranger_is_denied(db, owned, make_caller):
    owner, device = owned
    stranger = make_caller(tier=SubscriptionTier.PREMIUM)

    with pytest.raises(AccessDenied):
        reading_service.list_masked_readings(db, stranger, device.id)
    with pytest.raises(AccessDenied):
        reading_service.append_reading(db, stranger, device.id, {"temperature": 1.0})


def test_time_range_and_order(db, owned):
    owner, device = owned
    for i in range(5):
        reading_service.append_reading(db, owner, device.id, {"temperature": float(i)}, timestamp=T0 + timedelta(hours=i))

    rows = reading_service.list_masked_readings(
        db, owner, device.id, inicio=T0 + timedelta(hours=1), fim=T0 + timedelta(hours=3)
    )
    assert [r["temperature"] for r in rows] == [3.0, 2.0, 1.0]

    limited = reading_service.list_masked_readings(db, owner, device.id, limite=2)
    assert [r["temperature"] for r in limited] == [4.0, 3.0]


def test_latest_without_readings(db, owned):
    owner, device = owned
    with pytest.raises(NotFound):
        reading_service.latest_masked_reading(db, owner, device.id)


def test_unknown_measurement_is_malformed(db, owned):
    owner, device = owned
    with pytest.raises(MalformedInput):
        reading_service.append_reading(db, owner, device.id, {"radiation": 1.0})
    with pytest.raises(MalformedInput):
        reading_service.append_legacy_reading(db, owner, device.id, {"co2": 400.0})


def test_readings_are_append_only(db, owned):
    owner, device = owned
    reading = reading_service.append_reading(db, owner, device.id, {"temperature": 20.0}, timestamp=T0)

    reading.temperature = 99.0
    with pytest.raises(ConstraintViolation):
        db.commit()
    db.rollback()

    db.delete(db.get(SensorReading, reading.id))
    with pytest.raises(ConstraintViolation):
        db.commit()
    db.rollback()

    assert db.get(SensorReading, reading.id).temperature == 20.0


def test_legacy_readings_keep_dew_point_gate(db, owned, make_caller):
    owner, device = owned
    admin = make_caller(admin=True)
    reading_service.append_legacy_reading(
        db, owner, device.id, {"temperature": 18.0, "dew_point": 7.5}, timestamp=T0
    )

    free_rows = reading_service.list_masked_legacy_readings(db, owner, device.id)
    admin_rows = reading_service.list_masked_legacy_readings(db, admin, device.id)

    assert free_rows[0]["temperature"] == 18.0
    assert free_rows[0]["dew_point"] is None
    assert admin_rows[0]["dew_point"] == 7.5
