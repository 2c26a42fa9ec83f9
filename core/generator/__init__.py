# core/generator/__init__.py
"""Process-to-project code generation."""

from .engine import CodeEmitter, CodeStyle, ProjectPlan
from .catalog import TemplateCatalog
from .models import (
    CodeGenerationOptions,
    GeneratedFile,
    GenerationProgress,
    GenerationRequest,
    GenerationResult,
    PackageDependency,
    ProjectConfig,
)

__all__ = [
    'CodeEmitter',
    'CodeStyle',
    'ProjectPlan',
    'TemplateCatalog',
    'CodeGenerationOptions',
    'GeneratedFile',
    'GenerationProgress',
    'GenerationRequest',
    'GenerationResult',
    'PackageDependency',
    'ProjectConfig',
]
