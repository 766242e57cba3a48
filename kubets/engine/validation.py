"""Pod name validation.

Names must be non-empty, use lowercase alphanumerics and '-', and start and
end with an alphanumeric character. The 253-character DNS subdomain limit is
intentionally not enforced here.
"""

from __future__ import annotations

import re

from kubets.errors import InvalidPodNameFormatError

_POD_NAME_RE = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")


def is_valid_pod_name(name: str) -> bool:
    return bool(name) and _POD_NAME_RE.fullmatch(name) is not None


def validate_pod_name(name: str) -> None:
    """Raise InvalidPodNameFormatError if *name* is not a valid pod name."""
    if not is_valid_pod_name(name):
        raise InvalidPodNameFormatError(name)
