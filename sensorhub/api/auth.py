from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sensorhub.access.predicates import Entitlement, is_admin, is_premium
from sensorhub.core.deps import get_caller, get_db
from sensorhub.schemas.profile import EntitlementOut, MeOut, ProfileOut
from sensorhub.services.profile_service import get_profile

router = APIRouter(prefix="/api/auth", tags=["auth"])

@router.get("/me", response_model=MeOut)
def me(db: Session = Depends(get_db), caller: Entitlement = Depends(get_caller)):
    """
    Perfil do chamador + o que ele pode ver.
    A autenticação em si é do provedor externo; aqui só resolvemos o token.
    """
    perfil = get_profile(db, caller.identity)
    return MeOut(
        profile=ProfileOut.model_validate(perfil),
        entitlement=EntitlementOut(
            is_premium=is_premium(caller),
            is_admin=is_admin(caller),
            roles=sorted(caller.roles, key=lambda r: r.value),
        ),
    )
