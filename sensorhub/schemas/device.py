from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import Optional

from sensorhub.models.enums import DeviceType

class DeviceBase(BaseModel):
    device_id: str = Field(..., min_length=1, description="Identificador público, único no sistema")
    name: str = Field(..., min_length=1)
    device_type: DeviceType                   # "AIR" ou "SOIL"

class DeviceCreate(DeviceBase):
    user_id: Optional[UUID] = Field(None, description="Dono (só admin pode informar outro usuário)")

class DeviceRename(BaseModel):
    name: str = Field(..., min_length=1)

class DeviceOut(DeviceBase):
    id: UUID
    user_id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
