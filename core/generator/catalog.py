"""Built-in project template catalogue."""

from typing import Dict, Iterable, List, Optional

from core.errors import TemplateNotFoundError

from .models import CodeTemplate

BUILTIN_TEMPLATES = (
    CodeTemplate(
        id="standard",
        name="Standard",
        description="Full workflow engine suitable for most business processes",
        category="General",
        tags=["recommended", "general", "complete"],
        features=["Workflow engine", "Dependency injection", "Async support", "Logging", "Exception handling"],
        icon_class="bi-diagram-3",
    ),
    CodeTemplate(
        id="minimal",
        name="Minimal",
        description="Lightweight implementation for simple processes",
        category="Lightweight",
        tags=["lightweight", "fast", "simple"],
        features=["No external dependencies", "Quick start", "Easy to read"],
        icon_class="bi-lightning",
    ),
    CodeTemplate(
        id="microservice",
        name="Microservice",
        description="Containerised microservice ready for Kubernetes",
        category="Cloud native",
        tags=["cloud-native", "k8s", "docker"],
        features=["Docker support", "Health checks", "Metrics"],
        icon_class="bi-boxes",
    ),
    CodeTemplate(
        id="serverless",
        name="Serverless",
        description="AWS Lambda or Azure Functions deployment",
        category="Serverless",
        tags=["serverless", "functions"],
        features=["Scales on demand", "Low cost", "Event driven"],
        icon_class="bi-cloud",
    ),
    CodeTemplate(
        id="enterprise",
        name="Enterprise",
        description="Enterprise features and conventions",
        category="Enterprise",
        tags=["enterprise", "complete", "secure"],
        features=["Access control", "Audit logging", "Distributed tracing", "Configuration centre"],
        icon_class="bi-building",
    ),
    CodeTemplate(
        id="api",
        name="REST API",
        description="RESTful API service around the workflow",
        category="Web",
        tags=["api", "web", "rest"],
        features=["Swagger docs", "Versioning", "Rate limiting"],
        icon_class="bi-globe",
    ),
)


class TemplateCatalog:
    """Lookup over available project templates."""

    def __init__(self, templates: Optional[Iterable[CodeTemplate]] = None):
        source = BUILTIN_TEMPLATES if templates is None else templates
        self._templates: Dict[str, CodeTemplate] = {t.id: t for t in source}

    def list(self) -> List[CodeTemplate]:
        return list(self._templates.values())

    def get(self, template_id: str) -> CodeTemplate:
        try:
            return self._templates[template_id]
        except KeyError:
            raise TemplateNotFoundError(template_id) from None

    def register(self, template: CodeTemplate) -> None:
        self._templates[template.id] = template

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._templates
