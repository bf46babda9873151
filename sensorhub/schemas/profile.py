from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from sensorhub.models.enums import AppRole, SubscriptionTier

class ProfileOut(BaseModel):
    id: UUID
    display_name: Optional[str] = None
    email: Optional[str] = None
    subscription_tier: SubscriptionTier
    is_admin: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ProfileList(BaseModel):
    items: List[ProfileOut]
    total: int
    limit: int
    offset: int

class TierUpdate(BaseModel):
    subscription_tier: SubscriptionTier

class AdminUpdate(BaseModel):
    is_admin: bool

class EntitlementOut(BaseModel):
    """O que o chamador enxerga (calculado pelos predicados)."""
    is_premium: bool
    is_admin: bool
    roles: List[AppRole]

class MeOut(BaseModel):
    profile: ProfileOut
    entitlement: EntitlementOut
