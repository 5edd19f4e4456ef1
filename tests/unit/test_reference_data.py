"""
Unit Tests for Reference Data and Symptom Selection

Symptom catalog search, the selected-symptom set, the provider directory
and the disease lookup.
"""
from symptom_checker.models.symptom import SelectedSymptomSet
from symptom_checker.models.triage import SymptomSeverity
from symptom_checker.tools.disease_reference import DISEASE_REFERENCE, search_diseases
from symptom_checker.tools.provider_directory import get_provider, list_providers
from symptom_checker.tools.symptom_catalog import (
    SYMPTOM_CATALOG,
    get_symptom,
    search_symptoms,
)


class TestSymptomCatalog:
    """Tests for the symptom catalog."""

    def test_ids_are_unique(self):
        ids = [s.id for s in SYMPTOM_CATALOG]
        assert len(ids) == len(set(ids)) == 93

    def test_get_symptom(self):
        chest_pain = get_symptom("21")

        assert chest_pain.name == "Chest pain"
        assert chest_pain.severity == SymptomSeverity.SEVERE
        assert get_symptom("999") is None

    def test_search_is_case_insensitive_substring(self):
        names = [s.name for s in search_symptoms("CHEST")]

        assert names == ["Chest tightness", "Chest pain"]

    def test_search_excludes_selected(self):
        names = [s.name for s in search_symptoms("chest", exclude_ids=["21"])]

        assert names == ["Chest tightness"]

    def test_blank_query_suggests_nothing(self):
        assert search_symptoms("") == []
        assert search_symptoms("   ") == []


class TestSelectedSymptomSet:
    """Uniqueness and ordering of the symptom selection."""

    def test_add_duplicate_is_noop(self, symptom):
        chosen = SelectedSymptomSet()

        assert chosen.add(symptom("Fever")) is True
        assert chosen.add(symptom("Fever")) is False
        assert len(chosen) == 1

    def test_remove_absent_is_noop(self, symptom):
        chosen = SelectedSymptomSet()
        chosen.add(symptom("Fever"))

        assert chosen.remove("11") is False
        assert chosen.ids() == ["50"]

    def test_remove_keeps_order_of_the_rest(self, selection):
        chosen = selection("Fever", "Cough", "Headache")

        assert chosen.remove("11") is True
        assert chosen.ids() == ["50", "1"]

    def test_names_are_lowercased(self, selection):
        assert selection("Fever", "Sore throat").names() == frozenset({"fever", "sore throat"})

    def test_has_severity(self, selection):
        chosen = selection("Cough", "Fever")

        assert chosen.has_severity(SymptomSeverity.MODERATE)
        assert not chosen.has_severity(SymptomSeverity.SEVERE)


class TestProviderDirectory:
    """Tests for the mock provider directory."""

    def test_lists_all_providers(self):
        assert [p.name for p in list_providers()] == [
            "Dr. Sarah Johnson",
            "Dr. Michael Chen",
            "Dr. Emily Rodriguez",
        ]

    def test_specialty_filter(self):
        providers = list_providers("emergency")

        assert [p.id for p in providers] == ["2"]

    def test_get_provider(self):
        assert get_provider("3").specialty == "Family Medicine"
        assert get_provider("42") is None


class TestDiseaseLookup:
    """Tests for the disease reference search."""

    def test_reference_covers_every_condition_once(self):
        names = [d.name for d in DISEASE_REFERENCE]

        assert len(names) == len(set(names)) == 17
        assert "General Malaise" in names

    def test_search_by_name(self):
        assert [d.name for d in search_diseases("asthma")] == ["Asthma"]

    def test_search_by_description(self):
        names = [d.name for d in search_diseases("blood sugar")]

        assert names == ["Diabetes"]

    def test_blank_query_returns_everything(self):
        assert len(search_diseases("")) == len(DISEASE_REFERENCE)
