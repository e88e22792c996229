"""Presentation-side telemetry for affect responses."""
