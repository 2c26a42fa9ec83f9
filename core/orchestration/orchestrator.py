"""Generation orchestrator.

Runs one generation request through its phases:

    configuration (5) -> graph load and validation (10) -> template (15)
    -> project file (20) -> program (30) -> workflow (40)
    -> activities (55..69) -> models (70) -> configuration files (90)
    -> persist (95, only with a sink) -> done (100)

Progress is reported before each phase does its work. Cancellation is
checked before every phase and yields a ``cancelled`` result.
"""

import asyncio
import time
from datetime import timedelta
from typing import List, Optional

import structlog

from core.config import Settings, get_settings
from core.errors import (
    ConfigurationError,
    FlowForgeError,
    GenerationCancelledError,
    ProcessNotFoundError,
)
from core.generator.catalog import TemplateCatalog
from core.generator.engine import CodeEmitter, ProjectPlan
from core.generator.models import (
    CodeTemplate,
    ConfigurationReport,
    GeneratedFile,
    GenerationRequest,
    GenerationResult,
)
from core.generator.naming import sanitize_class_prefix
from core.process.validation import validate_process
from core.storage.interface import ProcessRepository, ProjectFileSink

from .progress import ProgressReporter, ProgressSink

logger = structlog.get_logger(__name__)

PROCESS_NOT_FOUND = "process not found"


class GenerationOrchestrator:
    """Sequences validation, graph loading and emission for a request."""

    def __init__(
        self,
        repository: ProcessRepository,
        emitter: Optional[CodeEmitter] = None,
        catalog: Optional[TemplateCatalog] = None,
        sink: Optional[ProjectFileSink] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.repository = repository
        self.emitter = emitter or CodeEmitter()
        self.catalog = catalog or TemplateCatalog()
        self.sink = sink
        self.phase_delay = settings.phase_delay
        self.project_path_prefix = settings.project_path_prefix.rstrip("/")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_templates(self) -> List[CodeTemplate]:
        return self.catalog.list()

    def validate_configuration(self, request: GenerationRequest) -> ConfigurationReport:
        """Check the request before any graph is loaded."""
        errors = []
        warnings = []

        if not request.config.project_name.strip():
            errors.append("Project name is required")
        if not request.config.namespace.strip():
            errors.append("Namespace is required")
        if not request.process_id.strip():
            errors.append("Process id is required")

        class_prefix = request.options.class_prefix
        if class_prefix != sanitize_class_prefix(class_prefix):
            warnings.append(
                f"Class prefix '{class_prefix}' is not a valid identifier part; "
                f"using '{sanitize_class_prefix(class_prefix)}'"
            )
        if request.options.enable_aot_optimizations:
            warnings.append(
                "AOT compilation restricts reflection and dynamic code; "
                "check that all dependencies are AOT compatible"
            )
        if request.options.enable_trimming:
            warnings.append(
                "Trimming may remove code reached only through reflection; "
                "test the published output"
            )

        return ConfigurationReport(is_valid=not errors, errors=errors, warnings=warnings)

    async def preview(self, request: GenerationRequest) -> List[GeneratedFile]:
        """Render the descriptor, program and workflow without running phases.

        Raises:
            ProcessNotFoundError: the process id does not resolve.
        """
        process = await self.repository.get_by_id(request.process_id)
        if process is None:
            raise ProcessNotFoundError(request.process_id)
        return self.emitter.preview(process, request)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate(
        self,
        request: GenerationRequest,
        progress: Optional[ProgressSink] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> GenerationResult:
        """Run a generation request. Never raises for expected failures."""
        started = time.perf_counter()
        reporter = ProgressReporter(progress)
        files: List[GeneratedFile] = []
        warnings: List[str] = []
        project_path: Optional[str] = None
        log = logger.bind(
            process_id=request.process_id,
            project=request.config.project_name,
        )
        log.info("generation_started", template=request.template or None)

        def result(**kwargs) -> GenerationResult:
            return GenerationResult(
                files=tuple(files),
                total_lines=sum(f.line_count for f in files),
                duration=timedelta(seconds=time.perf_counter() - started),
                warnings=tuple(warnings),
                **kwargs,
            )

        try:
            self._check_cancelled(cancel_event)
            await reporter.report(5, "Validating configuration")
            report = self.validate_configuration(request)
            warnings.extend(report.warnings)
            if not report.is_valid:
                raise ConfigurationError(report.errors)

            self._check_cancelled(cancel_event)
            await reporter.report(10, "Loading process graph")
            process = await self.repository.get_by_id(request.process_id)
            if process is None:
                raise ProcessNotFoundError(request.process_id)

            validation = validate_process(process)
            warnings.extend(str(w) for w in validation.warnings)
            if not validation.is_valid:
                log.info("generation_failed", reason="validation_failed", errors=len(validation.errors))
                return result(
                    success=False,
                    error="Process validation failed: "
                    + "; ".join(str(e) for e in validation.errors),
                    error_code="validation_failed",
                )

            template = None
            if request.template:
                self._check_cancelled(cancel_event)
                await reporter.report(15, f"Loading template {request.template}")
                template = self.catalog.get(request.template)

            plan = self.emitter.plan(process, request, template)
            await self._emit(plan, reporter, files, cancel_event)

            if self.sink is not None:
                self._check_cancelled(cancel_event)
                await reporter.report(95, "Saving project files")
                project_path = await self._persist(plan, files)
            else:
                project_path = f"{self.project_path_prefix}/{request.config.project_name}"

            await reporter.report(100, "Generation completed")

        except GenerationCancelledError as e:
            log.info("generation_cancelled", files=len(files))
            return result(success=False, error=str(e), error_code=e.code, cancelled=True)

        except ProcessNotFoundError as e:
            log.info("generation_failed", reason=e.code)
            return result(success=False, error=PROCESS_NOT_FOUND, error_code=e.code)

        except FlowForgeError as e:
            log.info("generation_failed", reason=e.code, error=str(e))
            return result(success=False, error=str(e), error_code=e.code)

        except Exception as e:
            # Files emitted so far stay in the result; callers must check success.
            log.exception("generation_failed", reason="emission_error", files=len(files))
            return result(
                success=False,
                error=f"Code generation failed: {e}",
                error_code="emission_error",
            )

        generated = result(success=True, project_path=project_path)
        log.info(
            "generation_completed",
            files=len(generated.files),
            lines=generated.total_lines,
            duration_ms=round(generated.duration.total_seconds() * 1000, 2),
        )
        return generated

    async def _emit(
        self,
        plan: ProjectPlan,
        reporter: ProgressReporter,
        files: List[GeneratedFile],
        cancel_event: Optional[asyncio.Event],
    ) -> None:
        emitter = self.emitter

        await self._phase(reporter, cancel_event, 20, "Generating project file", plan.project_file)
        files.append(emitter.emit_project_file(plan))

        await self._phase(reporter, cancel_event, 30, "Generating program entry point", "Program.cs")
        files.append(emitter.emit_program_file(plan))

        await self._phase(reporter, cancel_event, 40, "Generating workflow", plan.workflow_path)
        files.append(emitter.emit_workflow_file(plan))

        count = max(len(plan.steps), 1)
        for index, step in enumerate(plan.steps):
            await self._phase(
                reporter,
                cancel_event,
                55 + (14 * index) // count,
                f"Generating activity {step.name}",
                step.path,
            )
            files.append(emitter.emit_activity_file(plan, step))

        await self._phase(reporter, cancel_event, 70, "Generating models", "Models/")
        files.extend(emitter.emit_model_files(plan))

        await self._phase(reporter, cancel_event, 90, "Generating configuration", "appsettings.json")
        files.extend(emitter.emit_configuration_files(plan))
        if plan.options.generate_readme:
            files.append(emitter.emit_readme(plan))

    async def _phase(
        self,
        reporter: ProgressReporter,
        cancel_event: Optional[asyncio.Event],
        percentage: int,
        message: str,
        current_file: Optional[str] = None,
    ) -> None:
        self._check_cancelled(cancel_event)
        logger.debug("generation_phase", percentage=percentage, phase=message, file=current_file)
        await reporter.report(percentage, message, current_file)
        if self.phase_delay > 0:
            await asyncio.sleep(self.phase_delay)
            self._check_cancelled(cancel_event)

    async def _persist(self, plan: ProjectPlan, files: List[GeneratedFile]) -> str:
        metadata = {
            "process_id": plan.process.id,
            "process_name": plan.process.name,
            "namespace": plan.namespace,
            "template": plan.template.id if plan.template else None,
            "target_framework": plan.config.target_framework,
        }
        location = await self.sink.create_project(plan.config.project_name, metadata)
        for generated in files:
            await self.sink.save_file(location, generated.path, generated.content)
        return location

    @staticmethod
    def _check_cancelled(cancel_event: Optional[asyncio.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise GenerationCancelledError()
