"""Runtime configuration for the survival core."""
