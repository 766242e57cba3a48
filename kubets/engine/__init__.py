"""Diagnosis engine -- pure, synchronous classification of pod snapshots.

Submodules
----------
validation  -- pod name syntax check, run before any lookup.
containers  -- per-container state normalization.
suggestions -- phase-level and container-level remediation rule tables.
restarts    -- restart totals and the restart warning.
diagnoser   -- single-pod diagnosis.
fleet       -- fleet scan aggregation.
"""

from kubets.engine.containers import analyze_container, analyze_containers
from kubets.engine.diagnoser import diagnose_pod
from kubets.engine.fleet import aggregate_fleet
from kubets.engine.restarts import total_restarts, warrants_warning
from kubets.engine.validation import is_valid_pod_name, validate_pod_name

__all__ = [
    "aggregate_fleet",
    "analyze_container",
    "analyze_containers",
    "diagnose_pod",
    "is_valid_pod_name",
    "total_restarts",
    "validate_pod_name",
    "warrants_warning",
]
