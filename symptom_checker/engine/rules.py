"""Condition rule table.

Each rule pairs a predicate over the lowercased names of the selected
symptoms with the Condition it produces. Rules are authored per body system
and evaluated as one flat list in the order they appear here; that order is
the tie-break when two conditions share a confidence.

Every rule inside a system group also requires the group's entry symptoms
(``gate``), so e.g. "migraine" alone does not reach the Migraine rule unless
a neurological entry symptom is present too.

Templates are ``ConditionTemplate``, an alias of the frozen ``Condition``
model, so an unescalated match is a plain copy of its template.
"""

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List
from symptom_checker.models.condition import ConditionTemplate
from symptom_checker.models.triage import ConditionSeverity

Predicate = Callable[[FrozenSet[str]], bool]


@dataclass(frozen=True)
class ConditionRule:
    """One predicate-to-condition mapping."""

    rule_id: str
    system: str
    predicate: Predicate
    template: ConditionTemplate
    # Raise severity to HIGH when any selected symptom is severe
    escalate_when_severe: bool = False

    def matches(self, names: FrozenSet[str]) -> bool:
        return self.predicate(names)


# ── Predicate builders ───────────────────────────────────────────────────────


def any_of(*symptoms: str) -> Predicate:
    """True if at least one of the symptoms is selected."""
    wanted = frozenset(symptoms)
    return lambda names: not wanted.isdisjoint(names)


def all_of(*symptoms: str) -> Predicate:
    """True if every one of the symptoms is selected."""
    wanted = frozenset(symptoms)
    return lambda names: wanted <= names


def either(*predicates: Predicate) -> Predicate:
    return lambda names: any(p(names) for p in predicates)


def gated(gate: Predicate, inner: Predicate) -> Predicate:
    """Inner predicate that only applies once the group's gate holds."""
    return lambda names: gate(names) and inner(names)


def _rule(
    rule_id: str,
    system: str,
    gate: Predicate,
    inner: Predicate,
    name: str,
    confidence: int,
    severity: ConditionSeverity,
    description: str,
    recommendations: List[str],
    escalate_when_severe: bool = False,
) -> ConditionRule:
    return ConditionRule(
        rule_id=rule_id,
        system=system,
        predicate=gated(gate, inner),
        template=ConditionTemplate(
            name=name,
            confidence=confidence,
            severity=severity,
            description=description,
            recommendations=recommendations,
        ),
        escalate_when_severe=escalate_when_severe,
    )


# ── Respiratory ──────────────────────────────────────────────────────────────

_RESPIRATORY_GATE = any_of("cough", "shortness of breath", "chest tightness", "wheezing")

RESPIRATORY_RULES = [
    _rule(
        "RESP-ASTHMA", "respiratory", _RESPIRATORY_GATE,
        any_of("shortness of breath", "chest pain"),
        "Asthma", 75, ConditionSeverity.MEDIUM,
        "Chronic respiratory condition causing airway inflammation",
        ["Use prescribed inhaler", "Avoid triggers", "Seek immediate care if severe"],
    ),
    _rule(
        "RESP-PNEUMONIA", "respiratory", _RESPIRATORY_GATE,
        any_of("fever", "cough"),
        "Pneumonia", 65, ConditionSeverity.MEDIUM,
        "Infection that inflames air sacs in lungs",
        ["Seek medical attention", "Rest and hydration", "Complete prescribed antibiotics"],
        escalate_when_severe=True,
    ),
]

# ── Cardiovascular ───────────────────────────────────────────────────────────

_CARDIO_GATE = any_of("chest pain", "heart palpitations", "shortness of breath", "swelling in legs")

CARDIOVASCULAR_RULES = [
    _rule(
        "CARD-ANGINA", "cardiovascular", _CARDIO_GATE,
        all_of("chest pain"),
        "Angina", 70, ConditionSeverity.HIGH,
        "Chest pain due to reduced blood flow to heart",
        ["Seek immediate medical attention", "Rest", "Take prescribed nitroglycerin if available"],
    ),
    _rule(
        "CARD-ARRHYTHMIA", "cardiovascular", _CARDIO_GATE,
        any_of("heart palpitations", "rapid heartbeat"),
        "Arrhythmia", 60, ConditionSeverity.MEDIUM,
        "Irregular heart rhythm",
        ["Monitor symptoms", "Avoid caffeine", "Consult cardiologist"],
    ),
]

# ── Gastrointestinal ─────────────────────────────────────────────────────────

_GI_GATE = any_of("nausea", "vomiting", "diarrhea", "abdominal pain")

GASTROINTESTINAL_RULES = [
    _rule(
        "GI-GASTROENTERITIS", "gastrointestinal", _GI_GATE,
        all_of("diarrhea", "vomiting"),
        "Gastroenteritis", 80, ConditionSeverity.MEDIUM,
        "Inflammation of stomach and intestines",
        ["Stay hydrated", "BRAT diet", "Rest", "Seek care if dehydration occurs"],
    ),
    _rule(
        "GI-APPENDICITIS", "gastrointestinal", _GI_GATE,
        all_of("abdominal pain", "nausea"),
        "Appendicitis", 55, ConditionSeverity.HIGH,
        "Inflammation of the appendix",
        ["Seek immediate medical attention", "Do not eat or drink", "Go to emergency room"],
    ),
]

# ── Neurological ─────────────────────────────────────────────────────────────

_NEURO_GATE = any_of("headache", "dizziness", "confusion", "memory loss")

NEUROLOGICAL_RULES = [
    _rule(
        "NEURO-MENINGITIS", "neurological", _NEURO_GATE,
        all_of("headache", "fever"),
        "Meningitis", 45, ConditionSeverity.HIGH,
        "Inflammation of protective membranes covering brain and spinal cord",
        ["Seek immediate emergency care", "Do not delay treatment", "Call 112"],
    ),
    _rule(
        "NEURO-MIGRAINE", "neurological", _NEURO_GATE,
        either(all_of("migraine"), all_of("headache", "nausea")),
        "Migraine", 85, ConditionSeverity.MEDIUM,
        "Severe headache often with nausea and light sensitivity",
        ["Rest in dark room", "Apply cold compress", "Take prescribed medication"],
    ),
]

# ── Infectious ───────────────────────────────────────────────────────────────

_INFECTIOUS_GATE = all_of("fever")

INFECTIOUS_RULES = [
    _rule(
        "INF-COMMON-COLD", "infectious", _INFECTIOUS_GATE,
        any_of("cough", "sore throat", "runny nose"),
        "Common Cold", 90, ConditionSeverity.LOW,
        "Viral upper respiratory tract infection",
        ["Rest and hydration", "Over-the-counter pain relievers", "Monitor symptoms"],
    ),
    _rule(
        "INF-INFLUENZA", "infectious", _INFECTIOUS_GATE,
        any_of("muscle pain", "fatigue", "chills"),
        "Influenza", 75, ConditionSeverity.MEDIUM,
        "Seasonal flu virus infection",
        ["Antiviral medication within 48 hours", "Complete rest", "Increase fluid intake"],
    ),
]

# ── Musculoskeletal ──────────────────────────────────────────────────────────

_MSK_GATE = any_of("joint pain", "muscle pain", "stiffness", "swollen joints")

MUSCULOSKELETAL_RULES = [
    _rule(
        "MSK-ARTHRITIS", "musculoskeletal", _MSK_GATE,
        all_of("joint pain", "stiffness"),
        "Arthritis", 70, ConditionSeverity.MEDIUM,
        "Inflammation of joints causing pain and stiffness",
        ["Anti-inflammatory medication", "Gentle exercise", "Heat/cold therapy"],
    ),
    _rule(
        "MSK-FIBROMYALGIA", "musculoskeletal", _MSK_GATE,
        all_of("muscle pain", "fatigue"),
        "Fibromyalgia", 55, ConditionSeverity.MEDIUM,
        "Chronic condition causing widespread muscle pain",
        ["Regular exercise", "Stress management", "Sleep hygiene", "Pain management"],
    ),
]

# ── Mental health ────────────────────────────────────────────────────────────

_MENTAL_GATE = any_of("anxiety", "depression", "panic attacks", "mood swings")

MENTAL_HEALTH_RULES = [
    _rule(
        "MH-ANXIETY", "mental_health", _MENTAL_GATE,
        any_of("anxiety", "panic attacks"),
        "Anxiety Disorder", 80, ConditionSeverity.MEDIUM,
        "Mental health condition characterized by excessive worry",
        ["Breathing exercises", "Professional counseling", "Stress reduction techniques"],
    ),
    _rule(
        "MH-DEPRESSION", "mental_health", _MENTAL_GATE,
        any_of("depression", "mood swings"),
        "Depression", 75, ConditionSeverity.MEDIUM,
        "Mental health disorder causing persistent sadness",
        ["Professional therapy", "Support groups", "Regular exercise", "Medication if needed"],
    ),
]

# ── Endocrine ────────────────────────────────────────────────────────────────

_ENDOCRINE_GATE = any_of("excessive thirst", "frequent urination", "weight loss", "fatigue")

ENDOCRINE_RULES = [
    _rule(
        "ENDO-DIABETES", "endocrine", _ENDOCRINE_GATE,
        all_of("excessive thirst", "frequent urination"),
        "Diabetes", 70, ConditionSeverity.MEDIUM,
        "Condition affecting blood sugar regulation",
        ["Blood sugar testing", "Dietary changes", "Medical evaluation", "Regular monitoring"],
    ),
]

# ── Skin ─────────────────────────────────────────────────────────────────────

_SKIN_GATE = any_of("rash", "itching", "skin discoloration")

SKIN_RULES = [
    _rule(
        "SKIN-ECZEMA", "skin", _SKIN_GATE,
        all_of("rash", "itching"),
        "Eczema", 65, ConditionSeverity.LOW,
        "Chronic skin condition causing inflammation and itching",
        ["Moisturize regularly", "Avoid triggers", "Topical treatments", "Dermatologist consultation"],
    ),
]


# ── Registry: body system → rules (evaluation order) ─────────────────────────
RULE_GROUPS: Dict[str, List[ConditionRule]] = {
    "respiratory": RESPIRATORY_RULES,
    "cardiovascular": CARDIOVASCULAR_RULES,
    "gastrointestinal": GASTROINTESTINAL_RULES,
    "neurological": NEUROLOGICAL_RULES,
    "infectious": INFECTIOUS_RULES,
    "musculoskeletal": MUSCULOSKELETAL_RULES,
    "mental_health": MENTAL_HEALTH_RULES,
    "endocrine": ENDOCRINE_RULES,
    "skin": SKIN_RULES,
}

RULE_TABLE: List[ConditionRule] = [
    rule for rules in RULE_GROUPS.values() for rule in rules
]


# Emitted when no rule matches; severity is decided by the engine
FALLBACK_NAME = "General Malaise"
FALLBACK_CONFIDENCE = 60
FALLBACK_DESCRIPTION = "General feeling of discomfort or illness"
FALLBACK_RECOMMENDATIONS = [
    "Rest and hydration",
    "Monitor symptoms",
    "Consult healthcare provider if symptoms persist",
]
