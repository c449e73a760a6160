"""Sensor telemetry classification and health-state service."""
