# core/generator/cli.py
"""CLI commands for generating C# projects from process definitions."""

import asyncio
import sys
from pathlib import Path
from typing import List, Optional

import click
import yaml

from core.config import get_settings
from core.errors import FlowForgeError
from core.interchange.loader import load_process
from core.orchestration.orchestrator import GenerationOrchestrator
from core.storage.filesystem import FileSystemProjectSink
from core.storage.memory import InMemoryProcessRepository

from .models import GeneratedFile, GenerationProgress, GenerationRequest, PackageDependency


@click.group()
@click.pass_context
def generate(ctx):
    """Generate .NET projects from process definitions."""
    ctx.ensure_object(dict)


@generate.command()
@click.argument('process_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--name', 'project_name', required=True, help='Project name')
@click.option('--namespace', help='Root namespace (default: project name)')
@click.option('--request', 'request_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML file with config, options and dependencies')
@click.option('--template', help='Template id (see "generate templates")')
@click.option('--output', '-o', type=click.Path(file_okay=False, path_type=Path),
              help='Output root (default: settings output_root)')
@click.option('--force', '-f', is_flag=True, help='Overwrite an existing project directory')
@click.option('--preview', is_flag=True, help='Print the main files instead of writing the project')
@click.pass_context
def project(ctx, process_file: Path, project_name: str, namespace: Optional[str],
            request_file: Optional[Path], template: Optional[str], output: Optional[Path],
            force: bool, preview: bool):
    """Generate a project from a BPMN or YAML process file."""
    verbose = ctx.obj.get('verbose', False) if ctx.obj else False
    settings = get_settings()

    try:
        process = load_process(process_file)
        request = build_request(
            process.id,
            project_name,
            namespace or project_name,
            template,
            _read_request_file(request_file) if request_file else {},
        )
    except (FlowForgeError, ValueError) as e:
        click.echo(f"❌ {e}")
        sys.exit(1)

    repository = InMemoryProcessRepository()
    asyncio.run(repository.add(process))

    if preview:
        orchestrator = GenerationOrchestrator(repository, settings=settings)
        for generated in asyncio.run(orchestrator.preview(request)):
            click.echo(f"// ===== {generated.path} =====")
            click.echo(generated.content)
        return

    output_root = output or Path(settings.output_root)
    sink = FileSystemProjectSink(output_root, overwrite=force)
    orchestrator = GenerationOrchestrator(repository, sink=sink, settings=settings)

    click.echo(f"🏗️  Generating {project_name} from '{process.name}'")

    def show_progress(update: GenerationProgress) -> None:
        suffix = f" ({update.current_file})" if update.current_file and verbose else ""
        click.echo(f"   [{update.percentage:3d}%] {update.message}{suffix}")

    result = asyncio.run(orchestrator.generate(request, progress=show_progress))

    for warning in result.warnings:
        click.echo(f"⚠️  {warning}")

    if not result.success:
        click.echo(f"❌ Generation failed: {result.error}")
        sys.exit(1)

    click.echo("")
    click.echo(f"🎉 Generated {len(result.files)} files ({result.total_lines} lines)")
    click.echo(f"📁 Location: {result.project_path}")
    if verbose:
        _echo_files(result.files)
    click.echo("")
    click.echo("📝 Next steps:")
    click.echo(f"   cd {result.project_path}")
    click.echo("   dotnet run")


@generate.command()
def templates():
    """List available project templates."""
    orchestrator = GenerationOrchestrator(InMemoryProcessRepository())
    for template in orchestrator.list_templates():
        click.echo(f"{template.id:<14} {template.name}: {template.description}")
        if template.features:
            click.echo(f"{'':<14} {', '.join(template.features)}")


def build_request(process_id: str, project_name: str, namespace: str,
                  template: Optional[str] = None, data: Optional[dict] = None) -> GenerationRequest:
    """Build a request from optional file data, filling gaps from settings."""
    settings = get_settings()
    request = GenerationRequest.model_validate(data or {})

    config_update = {"project_name": project_name, "namespace": namespace}
    if "target_framework" not in request.config.model_fields_set:
        config_update["target_framework"] = settings.default_target_framework

    update = {
        "process_id": process_id,
        "config": request.config.model_copy(update=config_update),
    }
    if template is not None:
        update["template"] = template
    elif "template" not in request.model_fields_set:
        update["template"] = settings.default_template
    if "dependencies" not in request.model_fields_set:
        update["dependencies"] = [
            PackageDependency(package_id=package_id, version=version, is_required=True)
            for package_id, version in settings.default_dependencies.items()
        ]
    return request.model_copy(update=update)


def _read_request_file(path: Path) -> dict:
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML: {e}")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Request file must contain a mapping")
    return data


def _echo_files(files: List[GeneratedFile]) -> None:
    click.echo("")
    click.echo("📁 Generated files:")
    for generated in files:
        click.echo(f"   {generated.path} ({generated.line_count} lines)")
