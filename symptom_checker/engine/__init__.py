"""Diagnostic rule matching.

Usage:
    from symptom_checker.engine import ConditionRuleEngine

    engine = ConditionRuleEngine()
    results = engine.evaluate(symptoms)   # SelectedSymptomSet
"""

from symptom_checker.engine.rule_engine import ConditionRuleEngine, get_rule_engine
from symptom_checker.engine.rules import ConditionRule, RULE_TABLE, RULE_GROUPS

__all__ = [
    "ConditionRuleEngine",
    "get_rule_engine",
    "ConditionRule",
    "RULE_TABLE",
    "RULE_GROUPS",
]
