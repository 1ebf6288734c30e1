"""Diagnosis core: domain models, ports and services."""
