from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sensorhub.access.predicates import Entitlement, is_admin
from sensorhub.core.errors import AccessDenied, ConstraintViolation, NotFound
from sensorhub.core.logging import get_logger
from sensorhub.models.device import Device
from sensorhub.models.enums import DeviceType, parse_enum
from sensorhub.models.profile import Profile

logger = get_logger(__name__)


def pode_acessar(caller: Entitlement, device: Device) -> bool:
    """Dono do dispositivo ou admin."""
    return device.user_id == caller.identity or is_admin(caller)


def get_device(db: Session, caller: Entitlement, device_pk: UUID) -> Device:
    device = db.get(Device, device_pk)
    if not device:
        raise NotFound("Dispositivo não encontrado.")
    if not pode_acessar(caller, device):
        logger.warning("acesso_negado", identity=str(caller.identity), device=str(device_pk))
        raise AccessDenied("Dispositivo não pertence ao usuário.")
    return device


def list_devices(db: Session, caller: Entitlement) -> List[Device]:
    q = db.query(Device)
    if not is_admin(caller):
        q = q.filter(Device.user_id == caller.identity)
    return q.order_by(Device.created_at.desc()).all()


def register_device(
    db: Session,
    caller: Entitlement,
    device_id: str,
    name: str,
    device_type,
    owner_id: Optional[UUID] = None,
) -> Device:
    """
    Registra um dispositivo. O dono é o próprio chamador; só admin pode
    registrar em nome de outra identidade.
    """
    device_type = parse_enum(DeviceType, device_type, "device_type")
    owner_id = owner_id or caller.identity

    if owner_id != caller.identity and not is_admin(caller):
        raise AccessDenied("Apenas administradores podem registrar dispositivos para outro usuário.")

    if db.get(Profile, owner_id) is None:
        raise ConstraintViolation("Dono do dispositivo não existe.")

    if db.query(Device).filter(Device.device_id == device_id).first():
        raise ConstraintViolation(f"Já existe um dispositivo com device_id '{device_id}'.")

    novo = Device(
        device_id=device_id,
        name=name,
        user_id=owner_id,
        device_type=device_type,
    )
    db.add(novo)
    try:
        db.commit()
    except IntegrityError:
        # corrida com outro registro do mesmo device_id
        db.rollback()
        raise ConstraintViolation(f"Já existe um dispositivo com device_id '{device_id}'.")

    db.refresh(novo)
    logger.info("dispositivo_registrado", device_id=device_id, owner=str(owner_id), device_type=device_type.value)
    return novo


def rename_device(db: Session, caller: Entitlement, device_pk: UUID, name: str) -> Device:
    device = get_device(db, caller, device_pk)
    device.name = name
    db.commit()
    db.refresh(device)
    logger.info("dispositivo_renomeado", device_id=device.device_id, name=name)
    return device
