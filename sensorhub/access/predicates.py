"""
Predicados de autorização.

Tudo aqui recebe a identidade do chamador de forma explícita. O estado de
autorização é carregado uma vez por requisição num ``Entitlement`` imutável;
os predicados são funções puras sobre esse snapshot.
"""
from dataclasses import dataclass, field
from typing import FrozenSet, Union
from uuid import UUID

from sqlalchemy.orm import Session

from sensorhub.models.enums import AppRole, SubscriptionTier
from sensorhub.models.profile import Profile
from sensorhub.models.user_role import UserRole


@dataclass(frozen=True)
class Entitlement:
    """Snapshot do que um chamador pode ver, válido durante uma requisição."""

    identity: UUID
    tier: SubscriptionTier = SubscriptionTier.FREE
    admin: bool = False
    roles: FrozenSet[AppRole] = field(default_factory=frozenset)


def is_premium(caller: Entitlement) -> bool:
    """Tier premium OU admin (admin é superconjunto de premium)."""
    return caller.tier == SubscriptionTier.PREMIUM or caller.admin


def is_admin(caller: Entitlement) -> bool:
    """
    Fonte canônica: a flag ``profiles.is_admin``.

    Linhas ``admin`` em ``user_roles`` não entram aqui; use ``has_role`` para
    consultá-las.
    """
    return caller.admin


def has_role(caller: Entitlement, role: Union[AppRole, str]) -> bool:
    """Teste de pertinência: existe uma linha em user_roles para (identidade, role)?"""
    try:
        role = AppRole(role)
    except ValueError:
        return False
    return role in caller.roles


def resolve_entitlement(db: Session, identity: UUID) -> Entitlement:
    """
    Lê perfil e roles da identidade.

    Identidade sem perfil não tem nenhum direito (equivale ao EXISTS falso das
    funções SQL).
    """
    profile = db.get(Profile, identity)
    roles = frozenset(
        role for (role,) in db.query(UserRole.role).filter(UserRole.user_id == identity).all()
    )
    if profile is None:
        return Entitlement(identity=identity, roles=roles)
    return Entitlement(
        identity=identity,
        tier=profile.subscription_tier,
        admin=bool(profile.is_admin),
        roles=roles,
    )
