"""Reference data: symptom catalog, provider directory and disease lookup."""

from symptom_checker.tools.symptom_catalog import (
    SYMPTOM_CATALOG,
    get_symptom,
    search_symptoms,
)
from symptom_checker.tools.provider_directory import get_provider, list_providers
from symptom_checker.tools.disease_reference import search_diseases

__all__ = [
    "SYMPTOM_CATALOG",
    "get_symptom",
    "search_symptoms",
    "get_provider",
    "list_providers",
    "search_diseases",
]
