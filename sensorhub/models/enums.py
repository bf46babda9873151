"""Enums fechados do domínio (espelham os tipos ENUM do PostgreSQL)."""
import enum

from sensorhub.core.errors import MalformedInput


class SubscriptionTier(str, enum.Enum):
    FREE = "free"
    PREMIUM = "premium"


class DeviceType(str, enum.Enum):
    AIR = "AIR"     # estação de ar (temperatura, umidade, CO2, luz...)
    SOIL = "SOIL"   # sonda de solo


class AppRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


def enum_values(enum_cls):
    """Persiste o .value do enum (e não o nome do membro)."""
    return [member.value for member in enum_cls]


def parse_enum(enum_cls, value, campo: str):
    """Converte string -> membro do enum; valor fora do conjunto vira MalformedInput."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        validos = ", ".join(enum_values(enum_cls))
        raise MalformedInput(f"Valor inválido para {campo}: {value!r} (use: {validos})")
