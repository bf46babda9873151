from sqlalchemy import Column, String, Boolean, DateTime, Enum, Uuid
from datetime import datetime
from sensorhub.db.base import Base
from sensorhub.models.enums import SubscriptionTier, enum_values

class Profile(Base):
    """Um perfil por identidade do provedor de autenticação (id = auth.uid())."""

    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, index=True)
    display_name = Column(String, nullable=True)
    email = Column(String, nullable=True, index=True)
    subscription_tier = Column(
        Enum(SubscriptionTier, name="subscription_tier", values_callable=enum_values),
        nullable=False,
        default=SubscriptionTier.FREE,
    )
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Profile(id='{self.id}', tier='{self.subscription_tier}', is_admin={self.is_admin})>"
