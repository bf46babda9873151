from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from uuid import UUID
from typing import List

from sensorhub.access.predicates import Entitlement
from sensorhub.core.deps import get_caller, get_db
from sensorhub.schemas.device import DeviceCreate, DeviceOut, DeviceRename
from sensorhub.services import device_service

router = APIRouter(prefix="/devices", tags=["devices"])


#Registrar novo dispositivo (dono = chamador, ou outro usuário se admin)
@router.post("/", response_model=DeviceOut, status_code=status.HTTP_201_CREATED)
def registrar_dispositivo(
    dispositivo: DeviceCreate,
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    return device_service.register_device(
        db,
        caller,
        device_id=dispositivo.device_id,
        name=dispositivo.name,
        device_type=dispositivo.device_type,
        owner_id=dispositivo.user_id,
    )


#Listar dispositivos (admin vê todos)
@router.get("/", response_model=List[DeviceOut])
def listar_dispositivos(
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    return device_service.list_devices(db, caller)


@router.get("/{device_pk}", response_model=DeviceOut)
def obter_dispositivo(
    device_pk: UUID,
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    return device_service.get_device(db, caller, device_pk)


@router.patch("/{device_pk}", response_model=DeviceOut)
def renomear_dispositivo(
    device_pk: UUID,
    body: DeviceRename,
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    return device_service.rename_device(db, caller, device_pk, body.name)
