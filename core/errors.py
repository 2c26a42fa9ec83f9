"""Error taxonomy shared by the generator, the codec and the process service."""

from typing import List, Optional


class FlowForgeError(Exception):
    """Base class for all FlowForge errors."""

    code = "flowforge_error"


class ConfigurationError(FlowForgeError):
    """Raised when a generation request is missing required configuration."""

    code = "configuration_error"

    def __init__(self, issues: List[str]):
        self.issues = list(issues)
        super().__init__("; ".join(self.issues) or "Invalid configuration")


class ProcessNotFoundError(FlowForgeError):
    """Raised when a process id does not resolve."""

    code = "not_found"

    def __init__(self, process_id: str):
        self.process_id = process_id
        super().__init__(f"Process '{process_id}' not found")


class ImportParseError(FlowForgeError):
    """Raised when interchange XML cannot be parsed into a process."""

    code = "import_parse_error"

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        super().__init__(message)


class ExportError(FlowForgeError):
    """Raised when a process cannot be written as interchange XML."""

    code = "export_error"

    def __init__(self, message: str, element_id: Optional[str] = None):
        self.element_id = element_id
        super().__init__(message)


class TemplateNotFoundError(FlowForgeError):
    """Raised when a generation template id is unknown."""

    code = "template_not_found"

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Template '{template_id}' not found")


class EmissionError(FlowForgeError):
    """Wraps an unexpected failure while building project artifacts."""

    code = "emission_error"


class GenerationCancelledError(FlowForgeError):
    """Raised between phases when a caller signalled cancellation."""

    code = "cancelled"

    def __init__(self, message: str = "Generation cancelled"):
        super().__init__(message)
