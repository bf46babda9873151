"""
Leituras: escrita append-only e leitura mascarada por tier.
"""
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from sensorhub.access.predicates import Entitlement
from sensorhub.access.projection import FIELD_POLICY, mask_row, visible_fields
from sensorhub.core.errors import MalformedInput, NotFound
from sensorhub.core.logging import get_logger
from sensorhub.models.legacy_reading import LegacyReading
from sensorhub.models.sensor_reading import SensorReading
from sensorhub.services.device_service import get_device

logger = get_logger(__name__)

LEGACY_FIELDS = ("temperature", "humidity", "pressure", "dew_point")


def _validar_medidas(medidas: Mapping[str, Any], permitidas) -> Dict[str, Any]:
    desconhecidas = sorted(set(medidas) - set(permitidas))
    if desconhecidas:
        raise MalformedInput(f"Campos de medição desconhecidos: {', '.join(desconhecidas)}")
    return dict(medidas)


def append_reading(
    db: Session,
    caller: Entitlement,
    device_pk: UUID,
    medidas: Mapping[str, Any],
    timestamp: Optional[datetime] = None,
) -> SensorReading:
    """Grava uma leitura nova. Só o dono do dispositivo (ou admin) pode escrever."""
    device = get_device(db, caller, device_pk)
    dados = _validar_medidas(medidas, FIELD_POLICY)

    leitura = SensorReading(
        device_id=device.id,
        timestamp=timestamp or datetime.utcnow(),
        **dados,
    )
    db.add(leitura)
    db.commit()
    db.refresh(leitura)
    logger.debug("leitura_gravada", device_id=device.device_id, campos=len(dados))
    return leitura


def append_legacy_reading(
    db: Session,
    caller: Entitlement,
    device_pk: UUID,
    medidas: Mapping[str, Any],
    timestamp: Optional[datetime] = None,
) -> LegacyReading:
    device = get_device(db, caller, device_pk)
    dados = _validar_medidas(medidas, LEGACY_FIELDS)

    leitura = LegacyReading(
        device_id=device.id,
        timestamp=timestamp or datetime.utcnow(),
        **dados,
    )
    db.add(leitura)
    db.commit()
    db.refresh(leitura)
    logger.debug("leitura_legada_gravada", device_id=device.device_id)
    return leitura


def _filtrar_periodo(q, model, inicio: Optional[datetime], fim: Optional[datetime]):
    if inicio:
        q = q.filter(model.timestamp >= inicio)
    if fim:
        q = q.filter(model.timestamp <= fim)
    return q


def list_masked_readings(
    db: Session,
    caller: Entitlement,
    device_pk: UUID,
    inicio: Optional[datetime] = None,
    fim: Optional[datetime] = None,
    limite: int = 100,
) -> List[Dict[str, Any]]:
    """
    Leituras do dispositivo no período, mais recentes primeiro, já mascaradas
    para o chamador.
    """
    device = get_device(db, caller, device_pk)

    q = db.query(SensorReading).filter(SensorReading.device_id == device.id)
    q = _filtrar_periodo(q, SensorReading, inicio, fim)
    q = q.order_by(SensorReading.timestamp.desc()).limit(limite)

    campos = visible_fields(caller)
    return [mask_row(leitura, caller, campos) for leitura in q.all()]


def latest_masked_reading(db: Session, caller: Entitlement, device_pk: UUID) -> Dict[str, Any]:
    device = get_device(db, caller, device_pk)

    leitura = (
        db.query(SensorReading)
        .filter(SensorReading.device_id == device.id)
        .order_by(SensorReading.timestamp.desc())
        .first()
    )
    if not leitura:
        raise NotFound("Nenhuma leitura encontrada para este dispositivo.")
    return mask_row(leitura, caller)


def list_masked_legacy_readings(
    db: Session,
    caller: Entitlement,
    device_pk: UUID,
    inicio: Optional[datetime] = None,
    fim: Optional[datetime] = None,
    limite: int = 100,
) -> List[Dict[str, Any]]:
    """Tabela legada passa pela mesma política (dew_point continua premium)."""
    device = get_device(db, caller, device_pk)

    q = db.query(LegacyReading).filter(LegacyReading.device_id == device.id)
    q = _filtrar_periodo(q, LegacyReading, inicio, fim)
    q = q.order_by(LegacyReading.timestamp.desc()).limit(limite)

    campos = visible_fields(caller)
    return [mask_row(leitura, caller, campos) for leitura in q.all()]
