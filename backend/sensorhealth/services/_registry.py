"""Default sensor type catalog, seeded into the sensor_types table."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class SensorTypeDefinition:
    """Absolute range and five closed threshold bands of one sensor type."""

    name: str
    unit: str
    min_value: float
    max_value: float
    error_low_min: float
    error_low_max: float
    warning_low_min: float
    warning_low_max: float
    normal_min: float
    normal_max: float
    warning_high_min: float
    warning_high_max: float
    error_high_min: float
    error_high_max: float

    def as_columns(self) -> dict[str, float | str]:
        """Column values for a SensorType row."""
        return asdict(self)


# Bands may overlap (humidity, ec) or leave gaps; classification order resolves both.
SENSOR_TYPE_CATALOG: dict[str, SensorTypeDefinition] = {
    "temperature": SensorTypeDefinition(
        name="Temperature Sensor",
        unit="°C",
        min_value=0,
        max_value=100,
        error_low_min=0,
        error_low_max=11,
        warning_low_min=12,
        warning_low_max=15,
        normal_min=16,
        normal_max=22,
        warning_high_min=23,
        warning_high_max=30,
        error_high_min=31,
        error_high_max=40,
    ),
    "humidity": SensorTypeDefinition(
        name="Humidity Sensor",
        unit="%",
        min_value=0,
        max_value=100,
        error_low_min=0,
        error_low_max=39,
        warning_low_min=40,
        warning_low_max=59,
        normal_min=60,
        normal_max=99,
        warning_high_min=80,
        warning_high_max=90,
        error_high_min=91,
        error_high_max=100,
    ),
    "pressure": SensorTypeDefinition(
        name="Pressure Sensor",
        unit="bar",
        min_value=0,
        max_value=11,
        error_low_min=0,
        error_low_max=3,
        warning_low_min=4,
        warning_low_max=5,
        normal_min=6,
        normal_max=8,
        warning_high_min=8.1,
        warning_high_max=9,
        error_high_min=10,
        error_high_max=11,
    ),
    "ph": SensorTypeDefinition(
        name="pH Sensor",
        unit="pH",
        min_value=0,
        max_value=14,
        error_low_min=0.0,
        error_low_max=4.9,
        warning_low_min=5.0,
        warning_low_max=5.9,
        normal_min=6.0,
        normal_max=7.5,
        warning_high_min=7.6,
        warning_high_max=8.4,
        error_high_min=8.5,
        error_high_max=14,
    ),
    "ec": SensorTypeDefinition(
        name="EC Sensor",
        unit="mS/cm",
        min_value=0,
        max_value=10,
        error_low_min=0.0,
        error_low_max=0.8,
        warning_low_min=0.8,
        warning_low_max=1.1,
        normal_min=1.2,
        normal_max=2.8,
        warning_high_min=2.5,
        warning_high_max=3.0,
        error_high_min=3.1,
        error_high_max=10,
    ),
}


def get_definition(key: str) -> SensorTypeDefinition | None:
    """Get the catalog definition for a short sensor type key."""
    return SENSOR_TYPE_CATALOG.get(key)
