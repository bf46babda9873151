import uuid

from sensorhub.models import Profile, SubscriptionTier

from .conftest import FULL_READING, auth_header, make_token


def _setup_device(client, owner):
    res = client.post(
        "/devices/",
        json={"device_id": "AIR-200", "name": "Estufa", "device_type": "AIR"},
        headers=auth_header(owner),
    )
    assert res.status_code == 201, res.text
    return res.json()["id"]


def _promote(db, identity, tier=SubscriptionTier.FREE, admin=False):
    perfil = db.get(Profile, identity)
    perfil.subscription_tier = tier
    perfil.is_admin = admin
    db.commit()


def test_missing_or_invalid_token_is_401(client):
    assert client.get("/api/auth/me").status_code == 401
    res = client.get("/api/auth/me", headers={"Authorization": "Bearer nao-e-um-jwt"})
    assert res.status_code == 401


def test_token_for_other_audience_is_rejected(client):
    token = make_token(uuid.uuid4(), aud="service_role")
    res = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


def test_first_request_provisions_free_profile(client, db):
    identity = uuid.uuid4()
    token = make_token(identity, email="bia@example.com")

    for _ in range(2):
        res = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 200

    body = res.json()
    assert body["profile"]["id"] == str(identity)
    assert body["profile"]["subscription_tier"] == "free"
    assert body["profile"]["is_admin"] is False
    assert body["entitlement"] == {"is_premium": False, "is_admin": False, "roles": []}
    assert db.query(Profile).filter(Profile.id == identity).count() == 1


def test_reading_visibility_per_tier(client, db):
    owner = uuid.uuid4()
    device_pk = _setup_device(client, owner)
    res = client.post(
        "/readings/",
        json={"device_id": device_pk, "timestamp": "2025-08-20T12:00:00", **FULL_READING},
        headers=auth_header(owner),
    )
    assert res.status_code == 201, res.text

    def latest():
        r = client.get(f"/readings/latest/{device_pk}", headers=auth_header(owner))
        assert r.status_code == 200, r.text
        return r.json()

    free = latest()
    assert (free["temperature"], free["co2"], free["battery_voltage"]) == (21.5, None, None)

    _promote(db, owner, tier=SubscriptionTier.PREMIUM)
    premium = latest()
    assert (premium["temperature"], premium["co2"], premium["battery_voltage"]) == (21.5, 410.0, None)

    _promote(db, owner, tier=SubscriptionTier.FREE, admin=True)
    admin = latest()
    assert (admin["temperature"], admin["co2"], admin["battery_voltage"]) == (21.5, 410.0, 3.7)


def test_list_readings_range_query(client):
    owner = uuid.uuid4()
    device_pk = _setup_device(client, owner)
    for hour in (10, 11, 12):
        client.post(
            "/readings/",
            json={"device_id": device_pk, "timestamp": f"2025-08-20T{hour}:00:00", "temperature": float(hour)},
            headers=auth_header(owner),
        )

    res = client.get(
        "/readings/",
        params={"device_id": device_pk, "inicio": "2025-08-20T11:00:00", "fim": "2025-08-20T12:00:00"},
        headers=auth_header(owner),
    )

    assert res.status_code == 200
    assert [r["temperature"] for r in res.json()] == [12.0, 11.0]


def test_duplicate_device_is_409(client):
    owner = uuid.uuid4()
    _setup_device(client, owner)

    res = client.post(
        "/devices/",
        json={"device_id": "AIR-200", "name": "Outro", "device_type": "SOIL"},
        headers=auth_header(uuid.uuid4()),
    )

    assert res.status_code == 409
    devices = client.get("/devices/", headers=auth_header(owner)).json()
    assert [(d["device_id"], d["name"], d["device_type"]) for d in devices] == [("AIR-200", "Estufa", "AIR")]


def test_invalid_device_type_is_422(client):
    res = client.post(
        "/devices/",
        json={"device_id": "W-1", "name": "Caixa d'água", "device_type": "WATER"},
        headers=auth_header(uuid.uuid4()),
    )
    assert res.status_code == 422


def test_other_users_device_is_403(client):
    device_pk = _setup_device(client, uuid.uuid4())
    intruder = uuid.uuid4()

    assert client.get(f"/devices/{device_pk}", headers=auth_header(intruder)).status_code == 403
    assert client.get("/readings/", params={"device_id": device_pk}, headers=auth_header(intruder)).status_code == 403
    res = client.post("/readings/", json={"device_id": device_pk, "temperature": 1.0}, headers=auth_header(intruder))
    assert res.status_code == 403


def test_privileged_profile_operations(client, db):
    admin = uuid.uuid4()
    user = uuid.uuid4()
    client.get("/api/auth/me", headers=auth_header(admin))
    client.get("/api/auth/me", headers=auth_header(user))

    res = client.patch(f"/profiles/{user}/tier", json={"subscription_tier": "premium"}, headers=auth_header(user))
    assert res.status_code == 403

    _promote(db, admin, admin=True)

    res = client.patch(f"/profiles/{user}/tier", json={"subscription_tier": "gold"}, headers=auth_header(admin))
    assert res.status_code == 422

    res = client.patch(f"/profiles/{user}/tier", json={"subscription_tier": "premium"}, headers=auth_header(admin))
    assert res.status_code == 200
    assert res.json()["subscription_tier"] == "premium"

    res = client.post(f"/profiles/{user}/roles", json={"role": "user"}, headers=auth_header(admin))
    assert res.status_code == 201
    me = client.get("/api/auth/me", headers=auth_header(user)).json()
    assert me["entitlement"] == {"is_premium": True, "is_admin": False, "roles": ["user"]}

    assert client.delete(f"/profiles/{user}/roles/user", headers=auth_header(admin)).status_code == 204
    assert client.get(f"/profiles/{user}/roles", headers=auth_header(user)).json() == []

    res = client.get("/profiles/", headers=auth_header(admin))
    assert res.status_code == 200
    assert res.json()["total"] == 2


def test_legacy_endpoints(client):
    owner = uuid.uuid4()
    device_pk = _setup_device(client, owner)

    res = client.post(
        "/readings/legacy",
        json={"device_id": device_pk, "temperature": 17.0, "dew_point": 6.1},
        headers=auth_header(owner),
    )
    assert res.status_code == 201, res.text
    assert res.json()["dew_point"] is None

    rows = client.get("/readings/legacy", params={"device_id": device_pk}, headers=auth_header(owner)).json()
    assert rows[0]["temperature"] == 17.0
    assert rows[0]["dew_point"] is None
