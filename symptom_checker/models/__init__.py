"""Pydantic models for symptoms, conditions and sessions."""
