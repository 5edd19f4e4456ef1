"""Condition rule engine.

Runs the rule table against a symptom selection and returns a ranked,
size-bounded list of candidate conditions.

Usage:
    from symptom_checker.engine import ConditionRuleEngine

    engine = ConditionRuleEngine()
    results = engine.evaluate(session.symptoms)
    for condition in results:
        print(condition.name, condition.confidence, condition.severity)
"""

from typing import List, Optional, Sequence
from symptom_checker.engine.rules import (
    ConditionRule,
    RULE_TABLE,
    FALLBACK_NAME,
    FALLBACK_CONFIDENCE,
    FALLBACK_DESCRIPTION,
    FALLBACK_RECOMMENDATIONS,
)
from symptom_checker.models.condition import Condition
from symptom_checker.models.symptom import SelectedSymptomSet
from symptom_checker.models.triage import ConditionSeverity, SymptomSeverity
import logging

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 3


class ConditionRuleEngine:
    """Evaluates condition rules against a symptom selection.

    Stateless apart from its rule table, so one instance can serve every
    session.
    """

    def __init__(
        self,
        rules: Optional[Sequence[ConditionRule]] = None,
        max_results: int = DEFAULT_MAX_RESULTS,
    ):
        self.rules: List[ConditionRule] = list(RULE_TABLE if rules is None else rules)
        self.max_results = max_results

    def evaluate(self, symptoms: SelectedSymptomSet) -> List[Condition]:
        """
        Rank candidate conditions for a symptom selection.

        Args:
            symptoms: The session's selected symptoms. Expected non-empty;
                an empty selection yields the fallback condition only.

        Returns:
            Between 1 and ``max_results`` conditions, highest confidence
            first. Equal confidences keep rule-table order.
        """
        if len(symptoms) == 0:
            logger.warning("evaluate() called with no symptoms, returning fallback")

        names = symptoms.names()
        has_severe = symptoms.has_severity(SymptomSeverity.SEVERE)

        matched: List[Condition] = []
        for rule in self.rules:
            if not rule.matches(names):
                continue
            matched.append(self._instantiate(rule, has_severe))
            logger.debug(f"Rule {rule.rule_id} matched -> {rule.template.name}")

        if not matched:
            matched.append(self._fallback(symptoms))

        # sorted() is stable, so ties keep evaluation order
        ranked = sorted(matched, key=lambda c: c.confidence, reverse=True)
        results = ranked[: self.max_results]

        logger.info(
            f"Evaluated {len(symptoms)} symptom(s): {len(matched)} candidate(s), "
            f"top={results[0].name} ({results[0].confidence})"
        )
        return results

    @staticmethod
    def _instantiate(rule: ConditionRule, has_severe: bool) -> Condition:
        if rule.escalate_when_severe and has_severe:
            return rule.template.model_copy(update={"severity": ConditionSeverity.HIGH})
        return rule.template.model_copy()

    @staticmethod
    def _fallback(symptoms: SelectedSymptomSet) -> Condition:
        elevated = symptoms.has_severity(SymptomSeverity.MODERATE, SymptomSeverity.SEVERE)
        return Condition(
            name=FALLBACK_NAME,
            confidence=FALLBACK_CONFIDENCE,
            severity=ConditionSeverity.MEDIUM if elevated else ConditionSeverity.LOW,
            description=FALLBACK_DESCRIPTION,
            recommendations=list(FALLBACK_RECOMMENDATIONS),
        )


# Global engine instance
_engine: Optional[ConditionRuleEngine] = None


def get_rule_engine() -> ConditionRuleEngine:
    """Get or create the shared ConditionRuleEngine."""
    global _engine
    if _engine is None:
        from symptom_checker.config.settings import settings

        _engine = ConditionRuleEngine(max_results=settings.max_results)
    return _engine
