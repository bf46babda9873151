from typing import List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sensorhub.access.predicates import Entitlement
from sensorhub.core.errors import ConstraintViolation, NotFound
from sensorhub.core.logging import get_logger
from sensorhub.models.enums import AppRole, parse_enum
from sensorhub.models.profile import Profile
from sensorhub.models.user_role import UserRole
from sensorhub.services.profile_service import exigir_admin

logger = get_logger(__name__)


def list_roles(db: Session, identity: UUID) -> List[UserRole]:
    return db.query(UserRole).filter(UserRole.user_id == identity).order_by(UserRole.created_at).all()


def grant_role(db: Session, caller: Entitlement, target: UUID, role) -> UserRole:
    """Insere (identidade, role). Se já existir, devolve a linha existente."""
    role = parse_enum(AppRole, role, "role")
    exigir_admin(caller, "atribuir roles")

    if db.get(Profile, target) is None:
        raise ConstraintViolation("Perfil inexistente para a identidade informada.")

    existente = (
        db.query(UserRole)
        .filter(UserRole.user_id == target, UserRole.role == role)
        .first()
    )
    if existente:
        return existente

    linha = UserRole(user_id=target, role=role)
    db.add(linha)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConstraintViolation("Não foi possível registrar a role.")
    db.refresh(linha)
    logger.info("role_concedida", by=str(caller.identity), identity=str(target), role=role.value)
    return linha


def revoke_role(db: Session, caller: Entitlement, target: UUID, role) -> None:
    role = parse_enum(AppRole, role, "role")
    exigir_admin(caller, "remover roles")

    linha = (
        db.query(UserRole)
        .filter(UserRole.user_id == target, UserRole.role == role)
        .first()
    )
    if not linha:
        raise NotFound("Role não atribuída a esta identidade.")

    db.delete(linha)
    db.commit()
    logger.info("role_revogada", by=str(caller.identity), identity=str(target), role=role.value)
