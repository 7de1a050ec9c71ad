"""Integration systems: events, starvation handling, messages and telemetry."""
