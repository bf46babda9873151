"""Modelos SQLAlchemy para o banco de dados"""

from sensorhub.db.base import Base

# Importar todos os modelos para garantir registro
from sensorhub.models.enums import SubscriptionTier, DeviceType, AppRole
from sensorhub.models.profile import Profile
from sensorhub.models.user_role import UserRole
from sensorhub.models.device import Device
from sensorhub.models.sensor_reading import SensorReading
from sensorhub.models.legacy_reading import LegacyReading

__all__ = [
    "Base",
    "SubscriptionTier",
    "DeviceType",
    "AppRole",
    "Profile",
    "UserRole",
    "Device",
    "SensorReading",
    "LegacyReading",
]
