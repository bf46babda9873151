from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sensorhub.access.predicates import Entitlement, is_admin
from sensorhub.core.errors import AccessDenied, NotFound
from sensorhub.core.logging import get_logger
from sensorhub.models.enums import SubscriptionTier, parse_enum
from sensorhub.models.profile import Profile

logger = get_logger(__name__)


def exigir_admin(caller: Entitlement, acao: str) -> None:
    if not is_admin(caller):
        logger.warning("acesso_negado", identity=str(caller.identity), acao=acao)
        raise AccessDenied(f"Apenas administradores podem {acao}.")


def provision_profile(
    db: Session,
    identity: UUID,
    email: Optional[str] = None,
    display_name: Optional[str] = None,
) -> Profile:
    """
    Cria o perfil da identidade (tier free, sem admin) se ainda não existir.

    Idempotente: chamar de novo devolve o perfil existente sem alterá-lo.
    Se outra requisição inserir o mesmo id ao mesmo tempo, o IntegrityError
    é absorvido e o perfil vencedor é devolvido.
    """
    existente = db.get(Profile, identity)
    if existente:
        return existente

    perfil = Profile(
        id=identity,
        email=email,
        display_name=display_name or email,
        subscription_tier=SubscriptionTier.FREE,
        is_admin=False,
    )
    db.add(perfil)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existente = db.get(Profile, identity)
        if existente is None:
            raise
        return existente

    db.refresh(perfil)
    logger.info("perfil_provisionado", identity=str(identity))
    return perfil


def get_profile(db: Session, identity: UUID) -> Profile:
    perfil = db.get(Profile, identity)
    if not perfil:
        raise NotFound("Perfil não encontrado")
    return perfil


def list_profiles(db: Session, caller: Entitlement, limit: int = 100, offset: int = 0) -> Tuple[List[Profile], int]:
    exigir_admin(caller, "listar perfis")
    q = db.query(Profile)
    total = q.count()
    items = q.order_by(Profile.created_at.desc()).offset(offset).limit(limit).all()
    return items, total


def set_tier(db: Session, caller: Entitlement, target: UUID, tier) -> Profile:
    """Altera o tier de assinatura (operação privilegiada)."""
    tier = parse_enum(SubscriptionTier, tier, "subscription_tier")
    exigir_admin(caller, "alterar o tier de assinatura")

    perfil = get_profile(db, target)
    perfil.subscription_tier = tier
    db.commit()
    db.refresh(perfil)
    logger.info("tier_alterado", by=str(caller.identity), identity=str(target), tier=tier.value)
    return perfil


def set_admin(db: Session, caller: Entitlement, target: UUID, value: bool) -> Profile:
    """
    Liga/desliga a flag is_admin (operação privilegiada).

    Não mexe em user_roles: a flag é a fonte canônica de admin.
    """
    exigir_admin(caller, "conceder ou revogar admin")

    perfil = get_profile(db, target)
    perfil.is_admin = bool(value)
    db.commit()
    db.refresh(perfil)
    logger.info("admin_alterado", by=str(caller.identity), identity=str(target), is_admin=perfil.is_admin)
    return perfil
