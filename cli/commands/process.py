# cli/commands/process.py
"""Process definition commands: validate, export, complexity and samples."""

import sys
from pathlib import Path
from typing import Optional

import click

from core.errors import FlowForgeError
from core.interchange.bpmn_xml import export_process
from core.interchange.loader import load_process
from core.process.complexity import analyze_complexity
from core.process.samples import SAMPLES
from core.process.validation import validate_process


def _load(process_file: Path):
    try:
        return load_process(process_file)
    except (FlowForgeError, ValueError) as e:
        click.echo(f"❌ {e}")
        sys.exit(1)


def _export(definition) -> str:
    try:
        return export_process(definition)
    except FlowForgeError as e:
        click.echo(f"❌ {e}")
        sys.exit(1)


def _write(content: str, output: Optional[Path]) -> None:
    if output is None:
        click.echo(content, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding='utf-8')
    click.echo(f"✅ Written to {output}")


@click.group()
def process():
    """Inspect and convert process definitions (BPMN XML or YAML)."""
    pass


@process.command()
@click.argument('process_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(process_file: Path):
    """Validate the structure of a process."""
    definition = _load(process_file)
    report = validate_process(definition)

    click.echo(f"🔍 {definition.name} ({len(definition.activities)} activities, "
               f"{len(definition.gateways)} gateways, {len(definition.sequence_flows)} flows)")

    if report.errors:
        click.echo(f"❌ Found {len(report.errors)} errors:")
        for issue in report.errors:
            click.echo(f"   • {issue}")
    if report.warnings:
        click.echo(f"⚠️  Found {len(report.warnings)} warnings:")
        for issue in report.warnings:
            click.echo(f"   • {issue}")

    if not report.is_valid:
        sys.exit(1)
    click.echo("✅ Process is valid")


@process.command()
@click.argument('process_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output file (default: stdout)')
def export(process_file: Path, output: Optional[Path]):
    """Convert a process definition to BPMN XML."""
    _write(_export(_load(process_file)), output)


@process.command()
@click.argument('process_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def complexity(process_file: Path):
    """Show complexity metrics for a process."""
    metrics = analyze_complexity(_load(process_file))

    click.echo(f"Activities:            {metrics.activity_count}")
    click.echo(f"Gateways:              {metrics.gateway_count}")
    click.echo(f"Sequence flows:        {metrics.flow_count}")
    click.echo(f"Paths:                 {metrics.path_count}")
    click.echo(f"Cyclomatic complexity: {metrics.cyclomatic_complexity}")
    click.echo(f"Complexity level:      {metrics.complexity_level}")
    click.echo("Activity types:")
    for activity_type, count in metrics.activity_type_distribution.items():
        click.echo(f"   {activity_type}: {count}")


@process.command()
@click.argument('name', type=click.Choice(sorted(SAMPLES)))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output file (default: stdout)')
def sample(name: str, output: Optional[Path]):
    """Write a built-in sample process as BPMN XML."""
    _write(export_process(SAMPLES[name]()), output)
