"""Error taxonomy for kubets.

Every error is terminal for the invocation: nothing is retried. Each class
carries a stable ``code`` used in log lines and JSON error output.
"""

from __future__ import annotations


class TriageError(Exception):
    """Base class for all errors reported to the user."""

    code = "TRIAGE_ERROR"
    exit_code = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingArgumentError(TriageError):
    """A required argument or option value was not supplied."""

    code = "MISSING_ARGUMENT"


class InvalidFlagError(TriageError):
    """An unknown or malformed flag was supplied."""

    code = "INVALID_FLAG"


class UnknownTargetTypeError(TriageError):
    """The target type is neither ``pod`` nor ``pods``."""

    code = "UNKNOWN_TARGET_TYPE"

    def __init__(self, target: str) -> None:
        super().__init__(f"Unknown target type: {target!r}. Expected 'pod' or 'pods'.")
        self.target = target


class InvalidPodNameFormatError(TriageError):
    """The pod name does not follow Kubernetes naming syntax."""

    code = "INVALID_POD_NAME"

    def __init__(self, name: str) -> None:
        if not name:
            message = "Pod name must not be empty."
        else:
            message = (
                f"Invalid pod name: {name!r}. Use lowercase alphanumeric characters or '-', "
                "starting and ending with an alphanumeric character."
            )
        super().__init__(message)
        self.name = name


class NamespaceNotFoundError(TriageError):
    """The requested namespace does not exist."""

    code = "NAMESPACE_NOT_FOUND"

    def __init__(self, namespace: str) -> None:
        super().__init__(f"Namespace '{namespace}' not found.")
        self.namespace = namespace


class PodNotFoundError(TriageError):
    """The pod does not exist in the requested namespace."""

    code = "POD_NOT_FOUND"

    def __init__(self, name: str, namespace: str) -> None:
        super().__init__(f"Pod '{name}' not found in namespace '{namespace}'.")
        self.name = name
        self.namespace = namespace


class ClusterAccessError(TriageError):
    """The Kubernetes API could not be reached or returned an unexpected error."""

    code = "CLUSTER_ACCESS"


class SnapshotFormatError(ClusterAccessError):
    """An API object did not match the expected shape."""

    code = "SNAPSHOT_FORMAT"
