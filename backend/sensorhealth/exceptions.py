"""Exceptions raised by the sensor health engine."""

from sensorhealth.domain import ValidationKind


class SensorHealthError(Exception):
    """Base exception for the sensor health engine."""

    pass


class ReadingValidationError(SensorHealthError):
    """An incoming reading was rejected and nothing was persisted."""

    def __init__(self, kind: ValidationKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class StorageError(SensorHealthError):
    """The persistent store failed during a write or a history read."""

    pass


class SensorNotFoundError(SensorHealthError):
    """No sensor instance exists with the requested id."""

    pass


class SensorTypeNotFoundError(SensorHealthError):
    """No sensor type definition exists with the requested name."""

    pass


class DeviceNotFoundError(SensorHealthError):
    """No device exists with the requested id."""

    pass


class DuplicateSensorError(SensorHealthError):
    """A device already carries a sensor instance of the given type."""

    pass


class DeviceExistsError(SensorHealthError):
    """A device with the requested id is already provisioned."""

    pass
