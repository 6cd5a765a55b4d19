"""Telemetry and process-level path helpers."""
