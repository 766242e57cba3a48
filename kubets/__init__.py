"""kubets -- point-in-time pod triage for Kubernetes clusters."""

__version__ = "0.3.0"
