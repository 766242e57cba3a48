"""Rendering of diagnoses and fleet reports.

The engine hands over plain dataclasses; colors and the "N/A" placeholder
exist only here. Text goes through ``click.echo`` so ANSI codes are stripped
automatically when stdout is not a terminal.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from typing import Any

import click

from kubets.models.diagnosis import ContainerFinding, Diagnosis, FleetReport, Outcome
from kubets.models.events import EventRecord, EventType

NOT_AVAILABLE = "N/A"

_OUTCOME_COLORS: dict[Outcome, str] = {
    Outcome.SUCCESS: "green",
    Outcome.WARNING: "yellow",
    Outcome.ERROR: "red",
    Outcome.INFO: "cyan",
}

_OUTCOME_HEADLINES: dict[Outcome, str] = {
    Outcome.SUCCESS: "Pod is running.",
    Outcome.WARNING: "Pod is pending.",
    Outcome.ERROR: "Pod has failed.",
    Outcome.INFO: "Pod is in phase {phase}.",
}


def _or_na(value: object) -> str:
    return NOT_AVAILABLE if value is None or value == "" else str(value)


def _json_default(obj: Any) -> str:
    if isinstance(obj, datetime):
        return obj.isoformat()
    return str(obj)


def to_json(result: Diagnosis | FleetReport) -> str:
    """Serialize a result as indented JSON."""
    payload = asdict(result)
    if isinstance(result, FleetReport):
        payload["failing_pods"] = result.failing_pods
    else:
        payload["container_suggestions"] = dict(result.container_suggestions)
    return json.dumps(payload, indent=2, default=_json_default)


def _echo_suggestions(suggestions: tuple[str, ...], indent: str) -> None:
    for suggestion in suggestions:
        click.echo(f"{indent}- {suggestion}")


def _echo_finding(finding: ContainerFinding, suggestions: tuple[str, ...] = ()) -> None:
    click.echo(f"  - {click.style(finding.name, bold=True)}: {finding.state_kind}")
    click.echo(f"      Reason:   {_or_na(finding.reason)}")
    click.echo(f"      Message:  {_or_na(finding.message)}")
    if finding.exit_code is not None:
        click.echo(f"      Exit code: {finding.exit_code}")
    click.echo(f"      Restarts: {finding.restart_count}")
    if finding.last_termination_reason:
        click.echo(f"      Last termination: {finding.last_termination_reason}")
    if suggestions:
        click.echo("      Suggestions:")
        _echo_suggestions(suggestions, indent="        ")


def _echo_event(event: EventRecord) -> None:
    ts = event.timestamp.strftime("%Y-%m-%dT%H:%M:%SZ") if event.timestamp else NOT_AVAILABLE
    kind = click.style(event.type, fg="yellow") if event.type == EventType.WARNING else event.type
    click.echo(f"  {ts}  {kind}  {event.reason}: {event.message}")


def render_diagnosis(diagnosis: Diagnosis) -> None:
    color = _OUTCOME_COLORS[diagnosis.outcome]
    headline = _OUTCOME_HEADLINES[diagnosis.outcome].format(phase=diagnosis.phase)

    click.echo(f"Pod: {diagnosis.namespace}/{diagnosis.name}")
    click.echo(f"Phase: {click.style(diagnosis.phase, fg=color, bold=True)}")
    click.secho(headline, fg=color)

    if diagnosis.findings:
        click.echo("\nContainers:")
        for finding in diagnosis.findings:
            _echo_finding(finding, diagnosis.suggestions_for(finding.name))

    if diagnosis.restart_warning is not None:
        click.secho(
            f"\nWarning: containers restarted {diagnosis.restart_warning.total_restarts} time(s).",
            fg="yellow",
        )

    if diagnosis.suggestions:
        click.echo("\nSuggestions:")
        _echo_suggestions(diagnosis.suggestions, indent="  ")

    if diagnosis.recent_events:
        click.echo("\nRecent events:")
        for event in diagnosis.recent_events:
            _echo_event(event)


def render_fleet_report(report: FleetReport) -> None:
    click.echo(f"Pods scanned: {report.total_pods}")
    click.secho(f"Running: {report.running_pods}", fg="green")
    failing_color = "red" if report.failing_pods else "green"
    click.secho(f"Not running: {report.failing_pods}", fg=failing_color)

    for block in report.failure_blocks:
        click.echo("")
        click.secho(f"{block.namespace}/{block.name} ({block.phase})", fg="red", bold=True)
        if block.total_restart_count:
            click.echo(f"  Restarts: {block.total_restart_count}")
        for finding in block.findings:
            _echo_finding(finding)


def render(result: Diagnosis | FleetReport, output: str = "text") -> None:
    if output == "json":
        click.echo(to_json(result))
    elif isinstance(result, FleetReport):
        render_fleet_report(result)
    else:
        render_diagnosis(result)


def render_error(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
