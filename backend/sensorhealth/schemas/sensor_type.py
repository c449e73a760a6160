"""Pydantic schemas for the sensor type catalog."""

from pydantic import BaseModel, ConfigDict, Field

from sensorhealth.domain import Zone


class Band(BaseModel):
    """A closed interval associated with one zone."""

    zone: Zone
    low: float
    high: float


class SensorTypeOut(BaseModel):
    """Sensor type definition with its bands in classification order."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    unit: str
    min_value: float = Field(serialization_alias="minValue")
    max_value: float = Field(serialization_alias="maxValue")
    bands: list[Band]


class ClassificationResponse(BaseModel):
    """Result of classifying a single value against a sensor type."""

    model_config = ConfigDict(populate_by_name=True)

    sensor_type: str = Field(serialization_alias="sensorType")
    value: float
    zone: Zone
    is_valid: bool = Field(serialization_alias="isValid")
    is_normal: bool = Field(serialization_alias="isNormal")
    is_warning_or_error: bool = Field(serialization_alias="isWarningOrError")
