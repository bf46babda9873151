import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import Iterator, Optional

# Variáveis lidas em import time por sensorhub.core.config
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_FORMAT", "console")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sensorhub.access.predicates import Entitlement, resolve_entitlement
from sensorhub.core.config import settings
from sensorhub.core.deps import get_db
from sensorhub.main import app
from sensorhub.models import Base, Profile, SubscriptionTier

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _sqlite_fk_on(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db() -> Iterator[Session]:
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db: Session) -> Iterator[TestClient]:
    def _get_test_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_token(identity: uuid.UUID, email: Optional[str] = None, **extra) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(identity),
        "aud": settings.JWT_AUDIENCE,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=30)).timestamp()),
    }
    if email:
        claims["email"] = email
    claims.update(extra)
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def auth_header(identity: uuid.UUID) -> dict:
    return {"Authorization": f"Bearer {make_token(identity)}"}


@pytest.fixture()
def make_caller(db: Session):
    """Cria um perfil com tier/admin escolhidos e devolve o Entitlement resolvido."""

    def _make(tier: SubscriptionTier = SubscriptionTier.FREE, admin: bool = False) -> Entitlement:
        identity = uuid.uuid4()
        db.add(Profile(id=identity, email=f"{identity.hex[:8]}@example.com", subscription_tier=tier, is_admin=admin))
        db.commit()
        return resolve_entitlement(db, identity)

    return _make


FULL_READING = {
    "temperature": 21.5,
    "humidity": 48.0,
    "pressure": 1012.3,
    "co2": 410.0,
    "vpd": 1.2,
    "heat_index": 21.9,
    "wet_bulb_temp": 14.8,
    "absolute_humidity": 9.1,
    "dew_point": 10.2,
    "altitude": 760.0,
    "weather_trend": "rising",
    "uv_index": 3.0,
    "light_veml7700": 540.0,
    "light_tsl2591": 530.5,
    "par": 220.0,
    "acceleration_x": 0.01,
    "acceleration_y": -0.02,
    "acceleration_z": 9.81,
    "shock_detected": False,
    "soil_capacitance": 612.0,
    "soil_moisture_percentage": 37.5,
    "battery_voltage": 3.7,
    "battery_percentage": 82.0,
    "battery_health": "good",
}
