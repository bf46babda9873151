from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from sensorhub.access.predicates import Entitlement
from sensorhub.core.deps import get_caller, get_db
from sensorhub.models.enums import AppRole
from sensorhub.schemas.profile import AdminUpdate, ProfileList, ProfileOut, TierUpdate
from sensorhub.schemas.role import RoleGrant, RoleOut
from sensorhub.services import profile_service, role_service

router = APIRouter(prefix="/profiles", tags=["Perfis"])


#listar todos os perfis (apenas admin)
@router.get("/", response_model=ProfileList)
def listar_perfis(
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
):
    items, total = profile_service.list_profiles(db, caller, limit=limit, offset=offset)
    return {"items": items, "total": total, "limit": limit, "offset": offset}


@router.patch("/{profile_id}/tier", response_model=ProfileOut)
def alterar_tier(
    profile_id: UUID,
    body: TierUpdate,
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    return profile_service.set_tier(db, caller, profile_id, body.subscription_tier)


@router.patch("/{profile_id}/admin", response_model=ProfileOut)
def alterar_admin(
    profile_id: UUID,
    body: AdminUpdate,
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    return profile_service.set_admin(db, caller, profile_id, body.is_admin)


@router.get("/{profile_id}/roles", response_model=List[RoleOut])
def listar_roles(
    profile_id: UUID,
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    # cada um vê as próprias roles; admin vê de qualquer um
    if profile_id != caller.identity:
        profile_service.exigir_admin(caller, "consultar roles de outro usuário")
    return role_service.list_roles(db, profile_id)


@router.post("/{profile_id}/roles", response_model=RoleOut, status_code=status.HTTP_201_CREATED)
def atribuir_role(
    profile_id: UUID,
    body: RoleGrant,
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    return role_service.grant_role(db, caller, profile_id, body.role)


@router.delete("/{profile_id}/roles/{role}", status_code=status.HTTP_204_NO_CONTENT)
def remover_role(
    profile_id: UUID,
    role: AppRole,
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    role_service.revoke_role(db, caller, profile_id, role)
