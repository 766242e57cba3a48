"""Analyst package -- triage coordinator."""

from kubets.analyst.coordinator import Fetcher, TriageCoordinator

__all__ = ["Fetcher", "TriageCoordinator"]
