"""kubets command-line interface.

Exposes:
    cli  -- Click group (``pod`` and ``pods`` targets).
    main -- Console-script entry point registered as ``ts``.
    run  -- Same as main, but returns the exit code instead of exiting.
"""

from kubets.cli.main import cli, main, run

__all__ = ["cli", "main", "run"]
