"""Abuse detection feature: opponent interaction analysis over match history."""

from .router import router as abuse_detection_router

__all__ = ["abuse_detection_router"]
