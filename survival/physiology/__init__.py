"""Physiology: survival data, metabolism and the thermal model."""
