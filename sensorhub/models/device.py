import uuid
from sqlalchemy import Column, String, DateTime, Enum, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
from sensorhub.db.base import Base
from sensorhub.models.enums import DeviceType, enum_values

class Device(Base):
    __tablename__ = "devices"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    device_id = Column(String, nullable=False, unique=True, index=True)   # identificador público (impresso no hardware)
    name = Column(String, nullable=False)

    user_id = Column(Uuid, ForeignKey("profiles.id"), nullable=False, index=True)
    owner = relationship("Profile")

    device_type = Column(Enum(DeviceType, name="device_type", values_callable=enum_values), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
