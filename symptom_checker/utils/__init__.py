"""Triage helpers."""
