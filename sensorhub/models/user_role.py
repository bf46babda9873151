import uuid
from sqlalchemy import Column, DateTime, Enum, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
from sensorhub.db.base import Base
from sensorhub.models.enums import AppRole, enum_values

class UserRole(Base):
    __tablename__ = "user_roles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(Enum(AppRole, name="app_role", values_callable=enum_values), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    profile = relationship("Profile")

    __table_args__ = (
        UniqueConstraint("user_id", "role", name="user_roles_user_id_role_key"),
    )
