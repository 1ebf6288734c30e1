"""Composition root."""

from .container import get_diagnosis_service, get_engine, get_store

__all__ = ["get_diagnosis_service", "get_engine", "get_store"]
