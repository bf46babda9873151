from pydantic import BaseModel
from uuid import UUID
from datetime import datetime

from sensorhub.models.enums import AppRole

class RoleGrant(BaseModel):
    role: AppRole

class RoleOut(BaseModel):
    id: UUID
    user_id: UUID
    role: AppRole
    created_at: datetime

    class Config:
        from_attributes = True
