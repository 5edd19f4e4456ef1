"""Symptom reference catalog.

Known symptoms grouped by body system, each with a fixed severity class.
The catalog is read-only; sessions only ever hold references to entries.
"""

from typing import Dict, Iterable, List, Optional
from symptom_checker.models.symptom import Symptom
from symptom_checker.models.triage import SymptomSeverity

MILD = SymptomSeverity.MILD
MODERATE = SymptomSeverity.MODERATE
SEVERE = SymptomSeverity.SEVERE

_CATALOG_ROWS = [
    # Neurological
    ("1", "Headache", MILD),
    ("2", "Migraine", MODERATE),
    ("3", "Dizziness", MODERATE),
    ("4", "Memory loss", MODERATE),
    ("5", "Confusion", MODERATE),
    ("6", "Seizures", SEVERE),
    ("7", "Numbness in limbs", MODERATE),
    ("8", "Tremors", MODERATE),
    ("9", "Loss of coordination", SEVERE),
    ("10", "Blurred vision", MODERATE),
    # Respiratory
    ("11", "Cough", MILD),
    ("12", "Shortness of breath", SEVERE),
    ("13", "Wheezing", MODERATE),
    ("14", "Chest tightness", MODERATE),
    ("15", "Coughing up blood", SEVERE),
    ("16", "Sore throat", MILD),
    ("17", "Runny nose", MILD),
    ("18", "Sneezing", MILD),
    ("19", "Hoarse voice", MILD),
    ("20", "Difficulty swallowing", MODERATE),
    # Cardiovascular
    ("21", "Chest pain", SEVERE),
    ("22", "Heart palpitations", MODERATE),
    ("23", "Rapid heartbeat", MODERATE),
    ("24", "Irregular heartbeat", MODERATE),
    ("25", "Swelling in legs", MODERATE),
    ("26", "High blood pressure", MODERATE),
    ("27", "Low blood pressure", MODERATE),
    ("28", "Cold hands and feet", MILD),
    # Gastrointestinal
    ("29", "Nausea", MODERATE),
    ("30", "Vomiting", MODERATE),
    ("31", "Diarrhea", MODERATE),
    ("32", "Constipation", MILD),
    ("33", "Abdominal pain", MODERATE),
    ("34", "Bloating", MILD),
    ("35", "Loss of appetite", MODERATE),
    ("36", "Heartburn", MILD),
    ("37", "Blood in stool", SEVERE),
    ("38", "Black stool", SEVERE),
    ("39", "Excessive gas", MILD),
    ("40", "Acid reflux", MILD),
    # Musculoskeletal
    ("41", "Joint pain", MODERATE),
    ("42", "Muscle pain", MILD),
    ("43", "Back pain", MODERATE),
    ("44", "Neck pain", MODERATE),
    ("45", "Stiffness", MILD),
    ("46", "Swollen joints", MODERATE),
    ("47", "Muscle weakness", MODERATE),
    ("48", "Muscle cramps", MILD),
    ("49", "Bone pain", MODERATE),
    # General / constitutional
    ("50", "Fever", MODERATE),
    ("51", "Chills", MODERATE),
    ("52", "Fatigue", MILD),
    ("53", "Weakness", MODERATE),
    ("54", "Weight loss", MODERATE),
    ("55", "Weight gain", MODERATE),
    ("56", "Night sweats", MODERATE),
    ("57", "Excessive sweating", MILD),
    ("58", "Sleep problems", MILD),
    ("59", "Loss of consciousness", SEVERE),
    # Skin
    ("60", "Rash", MILD),
    ("61", "Itching", MILD),
    ("62", "Dry skin", MILD),
    ("63", "Skin discoloration", MODERATE),
    ("64", "Bruising", MODERATE),
    ("65", "Unusual moles", MODERATE),
    ("66", "Hair loss", MILD),
    ("67", "Nail changes", MILD),
    # Urinary / reproductive
    ("68", "Frequent urination", MODERATE),
    ("69", "Painful urination", MODERATE),
    ("70", "Blood in urine", SEVERE),
    ("71", "Difficulty urinating", MODERATE),
    ("72", "Pelvic pain", MODERATE),
    ("73", "Irregular periods", MODERATE),
    ("74", "Heavy menstrual bleeding", MODERATE),
    # Mental health
    ("75", "Anxiety", MODERATE),
    ("76", "Depression", MODERATE),
    ("77", "Mood swings", MILD),
    ("78", "Irritability", MILD),
    ("79", "Panic attacks", MODERATE),
    ("80", "Difficulty concentrating", MILD),
    # Eye / ear / nose / throat
    ("81", "Eye pain", MODERATE),
    ("82", "Red eyes", MILD),
    ("83", "Ear pain", MODERATE),
    ("84", "Hearing loss", MODERATE),
    ("85", "Ringing in ears", MILD),
    ("86", "Nasal congestion", MILD),
    ("87", "Loss of smell", MODERATE),
    ("88", "Loss of taste", MODERATE),
    # Endocrine
    ("89", "Excessive thirst", MODERATE),
    ("90", "Excessive hunger", MODERATE),
    ("91", "Heat intolerance", MILD),
    ("92", "Cold intolerance", MILD),
    ("93", "Changes in appetite", MILD),
]

SYMPTOM_CATALOG: List[Symptom] = [
    Symptom(id=sid, name=name, severity=severity) for sid, name, severity in _CATALOG_ROWS
]

_BY_ID: Dict[str, Symptom] = {s.id: s for s in SYMPTOM_CATALOG}


def get_symptom(symptom_id: str) -> Optional[Symptom]:
    """Look up a catalog symptom by id."""
    return _BY_ID.get(symptom_id)


def search_symptoms(query: str, exclude_ids: Iterable[str] = ()) -> List[Symptom]:
    """Suggest catalog symptoms whose name contains the query.

    Args:
        query: Free text typed by the user (case-insensitive)
        exclude_ids: Ids already selected, left out of the suggestions

    Returns:
        Matching symptoms in catalog order; empty for a blank query
    """
    text = query.strip().lower()
    if not text:
        return []

    excluded = set(exclude_ids)
    return [
        s for s in SYMPTOM_CATALOG if text in s.name.lower() and s.id not in excluded
    ]
