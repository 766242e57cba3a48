"""Entry point for `python -m kubets`.

Usage:
    python -m kubets pod <name> [--namespace <ns>]
    python -m kubets pods --all-namespaces
"""

from __future__ import annotations

from kubets.cli.main import main

main()
