"""Wire contracts for code generation requests and results.

Field names are snake_case in Python and camelCase on the wire; both
spellings are accepted on input.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectConfig(WireModel):
    """Project level settings for the generated solution."""
    project_name: str = ""
    namespace: str = ""
    version: str = "1.0.0"
    description: str = ""
    target_framework: str = "net10.0"
    enable_nullable: bool = True
    implicit_usings: bool = True
    author: str = ""
    company: str = ""
    copyright: str = ""


class CodeGenerationOptions(WireModel):
    """Independent toggles that shape the generated code."""
    naming_style: Literal["pascalCase", "camelCase", "preserve"] = "pascalCase"
    class_prefix: str = ""
    interface_prefix: str = "I"
    use_file_scoped: bool = True
    use_record_types: bool = True
    use_expression_bodies: bool = True
    use_pattern_matching: bool = True
    generate_async_methods: bool = True
    use_configure_await: bool = False
    use_value_task: bool = False
    generate_logging: bool = True
    logging_framework: str = "microsoft"
    generate_exception_handling: bool = True
    use_custom_exceptions: bool = False
    generate_xml_comments: bool = True
    include_examples: bool = False
    enable_aot_optimizations: bool = False
    enable_trimming: bool = False
    generate_source_generators: bool = False
    generate_readme: bool = False


class PackageDependency(WireModel):
    package_id: str
    version: str
    description: str = ""
    size: str = ""
    is_required: bool = False


class GenerationRequest(WireModel):
    """Everything needed to generate one project from one process."""
    process_id: str = ""
    config: ProjectConfig = Field(default_factory=ProjectConfig)
    template: str = "standard"
    options: CodeGenerationOptions = Field(default_factory=CodeGenerationOptions)
    dependencies: List[PackageDependency] = Field(default_factory=list)


class GeneratedFile(WireModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    path: str
    content: str

    @computed_field
    @property
    def line_count(self) -> int:
        return len(self.content.splitlines())

    @computed_field
    @property
    def size(self) -> int:
        return len(self.content.encode("utf-8"))

    @property
    def folder(self) -> str:
        return self.path.rpartition("/")[0]


class GenerationResult(WireModel):
    """Outcome of one generation run. Immutable once returned."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None
    cancelled: bool = False
    files: Tuple[GeneratedFile, ...] = ()
    total_lines: int = 0
    duration: timedelta = timedelta(0)
    project_path: Optional[str] = None
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    warnings: Tuple[str, ...] = ()

    def file(self, path: str) -> Optional[GeneratedFile]:
        for generated in self.files:
            if generated.path == path:
                return generated
        return None


class GenerationProgress(WireModel):
    percentage: int = Field(ge=0, le=100)
    message: str
    current_file: Optional[str] = None


class CodeTemplate(WireModel):
    id: str
    name: str
    description: str = ""
    category: str = ""
    author: str = "FlowForge Team"
    version: str = "1.0.0"
    tags: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    icon_class: str = ""
    is_custom: bool = False


class ConfigurationReport(WireModel):
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
