"""Scoring rules, the recommendation engine and the recommendation use case."""
