from uuid import UUID
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from sensorhub.access.predicates import Entitlement
from sensorhub.access.projection import mask_row
from sensorhub.core.config import settings
from sensorhub.core.deps import get_caller, get_db
from sensorhub.schemas.reading import (
    LegacyReadingCreate,
    LegacyReadingOut,
    MaskedReadingOut,
    ReadingCreate,
)
from sensorhub.services import reading_service

router = APIRouter(prefix="/readings", tags=["readings"])


@router.get("/latest/{device_id}", response_model=MaskedReadingOut)
def obter_ultima_leitura(
    device_id: UUID,
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    return reading_service.latest_masked_reading(db, caller, device_id)


@router.get("/", response_model=List[MaskedReadingOut])
def listar_leituras(
    device_id: UUID,
    inicio: Optional[datetime] = Query(None),
    fim: Optional[datetime] = Query(None),
    limite: int = Query(100, ge=1, le=settings.READINGS_MAX_LIMIT),
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    return reading_service.list_masked_readings(db, caller, device_id, inicio, fim, limite)


@router.post("/", response_model=MaskedReadingOut, status_code=status.HTTP_201_CREATED)
def gravar_leitura(
    body: ReadingCreate,
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    medidas = body.model_dump(exclude={"device_id", "timestamp"}, exclude_unset=True)
    leitura = reading_service.append_reading(db, caller, body.device_id, medidas, body.timestamp)
    # a resposta também passa pela máscara
    return mask_row(leitura, caller)


@router.get("/legacy", response_model=List[LegacyReadingOut])
def listar_leituras_legadas(
    device_id: UUID,
    inicio: Optional[datetime] = Query(None),
    fim: Optional[datetime] = Query(None),
    limite: int = Query(100, ge=1, le=settings.READINGS_MAX_LIMIT),
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    return reading_service.list_masked_legacy_readings(db, caller, device_id, inicio, fim, limite)


@router.post("/legacy", response_model=LegacyReadingOut, status_code=status.HTTP_201_CREATED)
def gravar_leitura_legada(
    body: LegacyReadingCreate,
    db: Session = Depends(get_db),
    caller: Entitlement = Depends(get_caller),
):
    medidas = body.model_dump(exclude={"device_id", "timestamp"}, exclude_unset=True)
    leitura = reading_service.append_legacy_reading(db, caller, body.device_id, medidas, body.timestamp)
    return mask_row(leitura, caller)
