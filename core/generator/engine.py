# core/generator/engine.py
"""Code emitter: renders a process graph into a scaffolded C# project."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import jinja2
import structlog

from core.process.model import Process

from .models import CodeGenerationOptions, CodeTemplate, GeneratedFile, GenerationRequest, ProjectConfig
from .naming import activity_identifiers, sanitize_class_prefix, workflow_class_name

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CodeStyle:
    """Rendering switches derived from :class:`CodeGenerationOptions`."""
    is_async: bool = True
    use_value_task: bool = False
    configure_await: bool = False
    logging: bool = True
    exception_handling: bool = True
    xml_comments: bool = True
    include_examples: bool = False
    expression_bodies: bool = True
    record_types: bool = True
    file_scoped: bool = True
    implicit_usings: bool = True

    @classmethod
    def from_request(cls, request: GenerationRequest) -> "CodeStyle":
        options = request.options
        return cls(
            is_async=options.generate_async_methods,
            use_value_task=options.use_value_task,
            configure_await=options.use_configure_await,
            logging=options.generate_logging,
            exception_handling=options.generate_exception_handling,
            xml_comments=options.generate_xml_comments,
            include_examples=options.include_examples,
            expression_bodies=options.use_expression_bodies,
            record_types=options.use_record_types,
            file_scoped=options.use_file_scoped,
            implicit_usings=request.config.implicit_usings,
        )

    @property
    def async_kw(self) -> str:
        return "async " if self.is_async else ""

    @property
    def return_type(self) -> str:
        if not self.is_async:
            return "ActivityResult"
        task = "ValueTask" if self.use_value_task else "Task"
        return f"{task}<ActivityResult>"

    @property
    def method_name(self) -> str:
        return "ExecuteAsync" if self.is_async else "Execute"

    def awaited(self, expression: str) -> str:
        """Call form for ``expression`` in this style."""
        if not self.is_async:
            return expression
        suffix = ".ConfigureAwait(false)" if self.configure_await else ""
        return f"await {expression}{suffix}"


@dataclass(frozen=True)
class ActivityStep:
    """Naming for one activity across the workflow and its own class."""
    id: str
    name: str
    type: str
    identifier: str
    class_name: str
    method: str
    variable: str

    @property
    def path(self) -> str:
        return f"Activities/{self.class_name}.cs"


@dataclass
class ProjectPlan:
    """Names and switches shared by every artifact of one project."""
    process: Process
    config: ProjectConfig
    options: CodeGenerationOptions
    style: CodeStyle
    workflow_class: str
    steps: List[ActivityStep]
    dependencies: list = field(default_factory=list)
    template: Optional[CodeTemplate] = None

    @property
    def namespace(self) -> str:
        return self.config.namespace

    @property
    def project_file(self) -> str:
        return f"{self.config.project_name}.csproj"

    @property
    def workflow_path(self) -> str:
        return f"Workflows/{self.workflow_class}.cs"


class CodeEmitter:
    """Generate project files from a process graph.

    The emitter never touches the filesystem and never mutates the
    process. The same process and request always produce the same
    files; only the optional README embeds the generation time.
    """

    SYSTEM_USINGS = ("System", "System.Collections.Generic", "System.Threading.Tasks")

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.templates_dir = templates_dir
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self._setup_jinja()

    def _setup_jinja(self):
        """Setup Jinja2 environment."""
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )

        self.jinja_env.filters['indent'] = self._indent
        self.jinja_env.filters['cs_string'] = self._cs_string
        self.jinja_env.filters['xml_doc'] = self._xml_doc
        self.jinja_env.filters['comment'] = self._comment

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def plan(
        self,
        process: Process,
        request: GenerationRequest,
        template: Optional[CodeTemplate] = None,
    ) -> ProjectPlan:
        """Resolve every generated name for ``process`` once."""
        options = request.options
        style = CodeStyle.from_request(request)
        activities = process.activities
        identifiers = activity_identifiers((a.name for a in activities), options.naming_style)
        class_prefix = sanitize_class_prefix(options.class_prefix)

        steps = []
        for activity, identifier in zip(activities, identifiers):
            suffix = "Async" if style.is_async else ""
            steps.append(
                ActivityStep(
                    id=activity.id,
                    name=activity.name,
                    type=activity.type,
                    identifier=identifier,
                    class_name=f"{class_prefix}{identifier}Activity",
                    method=f"Execute{identifier[0].upper()}{identifier[1:]}{suffix}",
                    variable=f"{identifier[0].lower()}{identifier[1:]}Result",
                )
            )

        return ProjectPlan(
            process=process,
            config=request.config,
            options=options,
            style=style,
            workflow_class=workflow_class_name(
                process.name, options.naming_style, options.class_prefix
            ),
            steps=steps,
            dependencies=list(request.dependencies),
            template=template,
        )

    # ------------------------------------------------------------------
    # Whole project
    # ------------------------------------------------------------------

    def emit(
        self,
        process: Process,
        request: GenerationRequest,
        template: Optional[CodeTemplate] = None,
    ) -> List[GeneratedFile]:
        """Render the full file catalogue in its fixed order."""
        plan = self.plan(process, request, template)
        files = [
            self.emit_project_file(plan),
            self.emit_program_file(plan),
            self.emit_workflow_file(plan),
        ]
        files.extend(self.emit_activity_files(plan))
        files.extend(self.emit_model_files(plan))
        files.extend(self.emit_configuration_files(plan))
        if request.options.generate_readme:
            files.append(self.emit_readme(plan))

        logger.debug(
            "project_emitted",
            process_id=process.id,
            files=len(files),
            lines=sum(f.line_count for f in files),
        )
        return files

    def preview(self, process: Process, request: GenerationRequest) -> List[GeneratedFile]:
        """Descriptor, program and workflow only."""
        plan = self.plan(process, request)
        return [
            self.emit_project_file(plan),
            self.emit_program_file(plan),
            self.emit_workflow_file(plan),
        ]

    # ------------------------------------------------------------------
    # Individual artifacts
    # ------------------------------------------------------------------

    def emit_project_file(self, plan: ProjectPlan) -> GeneratedFile:
        content = self._render('project.csproj.j2', plan)
        return GeneratedFile(path=plan.project_file, content=content)

    def emit_program_file(self, plan: ProjectPlan) -> GeneratedFile:
        usings = self._usings(
            plan,
            "Microsoft.Extensions.DependencyInjection",
            "Microsoft.Extensions.Logging" if plan.style.logging else None,
            f"{plan.namespace}.Activities",
            f"{plan.namespace}.Models",
            f"{plan.namespace}.Workflows",
        )
        body = self._render('Program.cs.j2', plan)
        return GeneratedFile(
            path="Program.cs",
            content=self._compose_source(usings, plan.namespace, body, plan.style.file_scoped),
        )

    def emit_workflow_file(self, plan: ProjectPlan) -> GeneratedFile:
        usings = self._usings(
            plan,
            "Microsoft.Extensions.Logging" if plan.style.logging else None,
            f"{plan.namespace}.Models",
        )
        body = self._render('Workflow.cs.j2', plan)
        return GeneratedFile(
            path=plan.workflow_path,
            content=self._compose_source(
                usings, f"{plan.namespace}.Workflows", body, plan.style.file_scoped
            ),
        )

    def emit_activity_files(self, plan: ProjectPlan) -> List[GeneratedFile]:
        return [self.emit_activity_file(plan, step) for step in plan.steps]

    def emit_activity_file(self, plan: ProjectPlan, step: ActivityStep) -> GeneratedFile:
        usings = self._usings(
            plan,
            "Microsoft.Extensions.Logging" if plan.style.logging else None,
            f"{plan.namespace}.Models",
        )
        body = self._render('Activity.cs.j2', plan, step=step)
        return GeneratedFile(
            path=step.path,
            content=self._compose_source(
                usings, f"{plan.namespace}.Activities", body, plan.style.file_scoped
            ),
        )

    def emit_model_files(self, plan: ProjectPlan) -> List[GeneratedFile]:
        usings = self._usings(plan)
        namespace = f"{plan.namespace}.Models"
        files = []
        for name in ("WorkflowContext", "ActivityResult"):
            body = self._render(f'{name}.cs.j2', plan)
            files.append(
                GeneratedFile(
                    path=f"Models/{name}.cs",
                    content=self._compose_source(usings, namespace, body, plan.style.file_scoped),
                )
            )
        return files

    def emit_configuration_files(self, plan: ProjectPlan) -> List[GeneratedFile]:
        return [
            GeneratedFile(path=name, content=self._render(f'{name}.j2', plan))
            for name in ("appsettings.json", "appsettings.Development.json")
        ]

    def emit_readme(self, plan: ProjectPlan) -> GeneratedFile:
        content = self._render('README.md.j2', plan, generated_at=self.clock())
        return GeneratedFile(path="README.md", content=content)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _render(self, template_name: str, plan: ProjectPlan, **extra) -> str:
        template = self.jinja_env.get_template(template_name)
        return template.render(
            process=plan.process,
            config=plan.config,
            options=plan.options,
            style=plan.style,
            workflow_class=plan.workflow_class,
            steps=plan.steps,
            dependencies=plan.dependencies,
            template=plan.template,
            **extra,
        )

    def _usings(self, plan: ProjectPlan, *extra: Optional[str]) -> List[str]:
        usings = [] if plan.style.implicit_usings else list(self.SYSTEM_USINGS)
        usings.extend(u for u in extra if u)
        return usings

    def _compose_source(
        self,
        usings: Sequence[str],
        namespace: str,
        body: str,
        file_scoped: bool,
    ) -> str:
        header = "".join(f"using {u};\n" for u in usings)
        if header:
            header += "\n"
        if file_scoped:
            return f"{header}namespace {namespace};\n\n{body}"
        return f"{header}namespace {namespace}\n{{\n{self._indent(body)}}}\n"

    def _indent(self, text: str, width: int = 4) -> str:
        """Indent every non-blank line; keeps a trailing newline."""
        lines = text.splitlines()
        indent = ' ' * width
        indented = '\n'.join(indent + line if line.strip() else '' for line in lines)
        return indented + '\n' if text.endswith('\n') else indented

    def _cs_string(self, value: str) -> str:
        """Escape for a regular C# string literal."""
        return (
            str(value)
            .replace('\\', '\\\\')
            .replace('"', '\\"')
            .replace('\r', '\\r')
            .replace('\n', '\\n')
            .replace('\t', '\\t')
        )

    def _xml_doc(self, value: str) -> str:
        """Escape for a single-line XML doc comment."""
        text = ' '.join(str(value).split())
        return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')

    def _comment(self, value: str) -> str:
        return ' '.join(str(value).split())
