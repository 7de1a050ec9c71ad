"""Actors built on top of the body and physiology layers."""

from .survivor import Survivor

__all__ = ["Survivor"]
