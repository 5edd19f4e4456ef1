"""Symptom checker: rule-based condition matching and appointment workflow."""
