import uuid
from sqlalchemy import Column, Float, String, Boolean, DateTime, ForeignKey, Index, Uuid, event
from sqlalchemy.orm import relationship
from datetime import datetime
from sensorhub.db.base import Base
from sensorhub.core.errors import ConstraintViolation

class SensorReading(Base):
    """Leitura bruta (schema atual). Append-only: nunca é alterada depois de gravada."""

    __tablename__ = "sensor_readings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    device_id = Column(Uuid, ForeignKey("devices.id"), nullable=False)
    device = relationship("Device")

    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)

    # básicos
    temperature = Column(Float, nullable=True)
    humidity = Column(Float, nullable=True)
    pressure = Column(Float, nullable=True)

    # ar / clima
    co2 = Column(Float, nullable=True)
    vpd = Column(Float, nullable=True)
    heat_index = Column(Float, nullable=True)
    wet_bulb_temp = Column(Float, nullable=True)
    absolute_humidity = Column(Float, nullable=True)
    dew_point = Column(Float, nullable=True)
    altitude = Column(Float, nullable=True)
    weather_trend = Column(String, nullable=True)         # ex: "rising", "falling", "stable"
    uv_index = Column(Float, nullable=True)

    # luz
    light_veml7700 = Column(Float, nullable=True)
    light_tsl2591 = Column(Float, nullable=True)
    par = Column(Float, nullable=True)

    # movimento
    acceleration_x = Column(Float, nullable=True)
    acceleration_y = Column(Float, nullable=True)
    acceleration_z = Column(Float, nullable=True)
    shock_detected = Column(Boolean, nullable=True)

    # solo
    soil_capacitance = Column(Float, nullable=True)
    soil_moisture_percentage = Column(Float, nullable=True)

    # bateria
    battery_voltage = Column(Float, nullable=True)
    battery_percentage = Column(Float, nullable=True)
    battery_health = Column(String, nullable=True)        # ex: "good", "degraded"

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_sensor_readings_device_timestamp", "device_id", "timestamp"),
    )


def _bloquear_mutacao(mapper, connection, target):
    raise ConstraintViolation(f"{target.__tablename__} é append-only; leituras não podem ser alteradas ou removidas.")


event.listen(SensorReading, "before_update", _bloquear_mutacao)
event.listen(SensorReading, "before_delete", _bloquear_mutacao)
