from uuid import UUID
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

class Medidas(BaseModel):
    """Colunas de medição de sensor_readings (todas opcionais)."""
    model_config = ConfigDict(extra="forbid")

    temperature: Optional[float] = None
    humidity: Optional[float] = None
    pressure: Optional[float] = None
    co2: Optional[float] = None
    vpd: Optional[float] = None
    heat_index: Optional[float] = None
    wet_bulb_temp: Optional[float] = None
    absolute_humidity: Optional[float] = None
    dew_point: Optional[float] = None
    altitude: Optional[float] = None
    weather_trend: Optional[str] = None
    uv_index: Optional[float] = None
    light_veml7700: Optional[float] = None
    light_tsl2591: Optional[float] = None
    par: Optional[float] = None
    acceleration_x: Optional[float] = None
    acceleration_y: Optional[float] = None
    acceleration_z: Optional[float] = None
    shock_detected: Optional[bool] = None
    soil_capacitance: Optional[float] = None
    soil_moisture_percentage: Optional[float] = None
    battery_voltage: Optional[float] = None
    battery_percentage: Optional[float] = None
    battery_health: Optional[str] = None

class ReadingCreate(Medidas):
    device_id: UUID
    timestamp: Optional[datetime] = None

class MaskedReadingOut(Medidas):
    """
    Linha da "view" efetiva: campos fora do direito do chamador vêm null.
    """
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: UUID
    device_id: UUID
    timestamp: datetime
    created_at: datetime

class LegacyReadingCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    device_id: UUID
    timestamp: Optional[datetime] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    pressure: Optional[float] = None
    dew_point: Optional[float] = None

class LegacyReadingOut(BaseModel):
    id: UUID
    device_id: UUID
    timestamp: datetime
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    pressure: Optional[float] = None
    dew_point: Optional[float] = None
    created_at: datetime

    class Config:
        from_attributes = True
