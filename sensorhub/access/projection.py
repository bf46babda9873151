"""
Projeção por tier das leituras de sensores.

Cada coluna de medição tem uma classe de visibilidade em ``FIELD_POLICY``.
Reclassificar um campo (ou adicionar um novo) é uma linha nessa tabela; a
view ``sensor_readings_effective`` do PostgreSQL é gerada a partir dela
(veja ``sensorhub.db.views``).
"""
import enum
from typing import Any, Dict, Mapping, Optional

from sensorhub.access.predicates import Entitlement, is_admin, is_premium


class Visibility(str, enum.Enum):
    BASELINE = "baseline"   # todo mundo com acesso ao dispositivo
    PREMIUM = "premium"     # premium ou admin
    ADMIN = "admin"         # só admin (premium sozinho NÃO libera)


FIELD_POLICY: Dict[str, Visibility] = {
    "temperature": Visibility.BASELINE,
    "humidity": Visibility.BASELINE,
    "pressure": Visibility.BASELINE,
    "co2": Visibility.PREMIUM,
    "light_veml7700": Visibility.PREMIUM,
    "light_tsl2591": Visibility.PREMIUM,
    "acceleration_x": Visibility.PREMIUM,
    "acceleration_y": Visibility.PREMIUM,
    "acceleration_z": Visibility.PREMIUM,
    "soil_capacitance": Visibility.PREMIUM,
    "battery_voltage": Visibility.ADMIN,
    "battery_percentage": Visibility.ADMIN,
    "dew_point": Visibility.PREMIUM,
    "wet_bulb_temp": Visibility.PREMIUM,
    "heat_index": Visibility.PREMIUM,
    "vpd": Visibility.PREMIUM,
    "absolute_humidity": Visibility.PREMIUM,
    "altitude": Visibility.PREMIUM,
    "weather_trend": Visibility.PREMIUM,
    "uv_index": Visibility.PREMIUM,
    "par": Visibility.PREMIUM,
    "soil_moisture_percentage": Visibility.PREMIUM,
    "battery_health": Visibility.ADMIN,
    "shock_detected": Visibility.PREMIUM,
}

# Colunas de identificação: sempre passam, não são medições.
KEY_FIELDS = ("id", "device_id", "timestamp", "created_at")


def is_visible(visibility: Visibility, caller: Entitlement) -> bool:
    if visibility is Visibility.BASELINE:
        return True
    if visibility is Visibility.PREMIUM:
        return is_premium(caller)
    if visibility is Visibility.ADMIN:
        return is_admin(caller)
    raise ValueError(f"Classe de visibilidade desconhecida: {visibility!r}")


def visible_fields(caller: Entitlement) -> Dict[str, bool]:
    """Mapa campo -> visível para este chamador (calculado uma vez por requisição)."""
    return {name: is_visible(visibility, caller) for name, visibility in FIELD_POLICY.items()}


def _read(row: Any, name: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def mask_row(row: Any, caller: Entitlement, fields: Optional[Dict[str, bool]] = None) -> Dict[str, Any]:
    """
    Devolve um dict novo com as chaves + todos os campos de FIELD_POLICY que a
    linha possui; o que o chamador não pode ver vira None.

    ``row`` pode ser um modelo ORM ou um Mapping; nunca é modificado.
    Linhas de schema mais estreito (ex.: leituras legadas) só produzem as
    colunas que realmente têm.
    """
    if fields is None:
        fields = visible_fields(caller)

    has = (lambda name: name in row) if isinstance(row, Mapping) else (lambda name: hasattr(row, name))

    masked: Dict[str, Any] = {name: _read(row, name) for name in KEY_FIELDS if has(name)}
    for name, allowed in fields.items():
        if not has(name):
            continue
        masked[name] = _read(row, name) if allowed else None
    return masked
