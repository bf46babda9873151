import uuid
from sqlalchemy import Column, Float, DateTime, ForeignKey, Index, Uuid, event
from sqlalchemy.orm import relationship
from datetime import datetime
from sensorhub.db.base import Base
from sensorhub.models.sensor_reading import _bloquear_mutacao

class LegacyReading(Base):
    """Tabela antiga de leituras, mantida só para compatibilidade (append-only)."""

    __tablename__ = "readings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    device_id = Column(Uuid, ForeignKey("devices.id"), nullable=False)
    device = relationship("Device")

    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)
    temperature = Column(Float, nullable=True)
    humidity = Column(Float, nullable=True)
    pressure = Column(Float, nullable=True)
    dew_point = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_readings_device_timestamp", "device_id", "timestamp"),
    )


event.listen(LegacyReading, "before_update", _bloquear_mutacao)
event.listen(LegacyReading, "before_delete", _bloquear_mutacao)
