"""``ts`` command-line entry point.

    ts pod <name> [--namespace <ns>] [--output text|json]
    ts pods --all-namespaces [--output text|json]
    ts pods [--namespace <ns>] [--output text|json]

Every failure prints one error line to stderr and exits with status 1.
``--help`` prints usage and also exits with status 1.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Sequence
from typing import Any

import click

from kubets.analyst.coordinator import TriageCoordinator
from kubets.cli.report import render, render_error
from kubets.collector.fetcher import connect
from kubets.config import load_config
from kubets.engine.validation import validate_pod_name
from kubets.errors import (
    InvalidFlagError,
    MissingArgumentError,
    TriageError,
    UnknownTargetTypeError,
)
from kubets.models.config import TriageConfig
from kubets.models.diagnosis import Diagnosis, FleetReport
from kubets.observability.logging import get_logger, setup_logging

_OUTPUT_FORMATS = ("text", "json")


def _print_help_and_fail(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(ctx.get_help())
    ctx.exit(1)


def _help_option(f: Any) -> Any:
    return click.option(
        "--help",
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_print_help_and_fail,
        help="Show this message and exit.",
    )(f)


def _output_option(f: Any) -> Any:
    return click.option(
        "--output",
        "-o",
        type=click.Choice(_OUTPUT_FORMATS),
        default="text",
        show_default=True,
        help="Report format.",
    )(f)


class TargetGroup(click.Group):
    """Group that reports unknown subcommands as unknown target types."""

    def resolve_command(self, ctx: click.Context, args: list[str]) -> tuple[str | None, click.Command | None, list[str]]:
        target = args[0] if args else ""
        if target and not target.startswith("-") and self.get_command(ctx, target) is None:
            raise UnknownTargetTypeError(target)
        return super().resolve_command(ctx, args)


def _config(ctx: click.Context) -> TriageConfig:
    return ctx.find_object(TriageConfig) or TriageConfig()


async def _run_diagnosis(config: TriageConfig, name: str, namespace: str) -> Diagnosis:
    async with connect(config.cluster) as fetcher:
        return await TriageCoordinator(fetcher, config).diagnose(name, namespace)


async def _run_scan(config: TriageConfig, all_namespaces: bool, namespace: str) -> FleetReport:
    async with connect(config.cluster) as fetcher:
        return await TriageCoordinator(fetcher, config).scan(all_namespaces=all_namespaces, namespace=namespace)


@click.group(
    cls=TargetGroup,
    invoke_without_command=True,
    no_args_is_help=False,
    context_settings={"help_option_names": []},
)
@_help_option
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Diagnose pod failures in a Kubernetes cluster."""
    if ctx.invoked_subcommand is None:
        raise MissingArgumentError("Missing target type. Expected 'pod' or 'pods'.")


@cli.command("pod")
@_help_option
@click.argument("name", required=True)
@click.option("--namespace", "-n", default=None, help="Namespace of the pod.  [default: default]")
@_output_option
@click.pass_context
def pod_command(ctx: click.Context, name: str, namespace: str | None, output: str) -> None:
    """Diagnose a single pod."""
    config = _config(ctx)
    # Bad names fail before credentials are loaded.
    validate_pod_name(name)
    namespace = namespace if namespace is not None else config.cluster.default_namespace
    diagnosis = asyncio.run(_run_diagnosis(config, name, namespace))
    render(diagnosis, output)


@cli.command("pods")
@_help_option
@click.option("--all-namespaces", "-A", is_flag=True, default=False, help="Scan pods in every namespace.")
@click.option("--namespace", "-n", default=None, help="Scan a single namespace instead.")
@_output_option
@click.pass_context
def pods_command(ctx: click.Context, all_namespaces: bool, namespace: str | None, output: str) -> None:
    """Scan pods and summarize every pod that is not running."""
    config = _config(ctx)
    if all_namespaces and namespace is not None:
        raise InvalidFlagError("--all-namespaces and --namespace cannot be combined.")
    namespace = namespace if namespace is not None else config.cluster.default_namespace
    report = asyncio.run(_run_scan(config, all_namespaces, namespace))
    render(report, output)


def _usage_error(exc: click.UsageError) -> TriageError:
    message = exc.format_message()
    if isinstance(exc, click.NoSuchOption):
        return InvalidFlagError(message)
    if isinstance(exc, (click.MissingParameter, click.BadOptionUsage)):
        return MissingArgumentError(message)
    return InvalidFlagError(message)


def run(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    try:
        config = load_config()
    except ValueError as exc:
        render_error(f"Invalid configuration: {exc}")
        return 1
    setup_logging(config.log.level, config.log.format)
    log = get_logger("cli")

    try:
        rv = cli.main(
            args=list(argv) if argv is not None else None,
            prog_name="ts",
            standalone_mode=False,
            obj=config,
        )
    except click.UsageError as exc:
        err = _usage_error(exc)
        log.info("usage error", code=err.code, error=err.message)
        render_error(err.message)
        return err.exit_code
    except TriageError as exc:
        log.info("triage failed", code=exc.code, error=exc.message)
        render_error(exc.message)
        return exc.exit_code
    except click.Abort:
        render_error("Aborted.")
        return 1
    return rv if isinstance(rv, int) else 0


def main() -> None:
    sys.exit(run())
