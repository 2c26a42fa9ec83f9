"""Process application service."""

from typing import List, Optional, Union

import structlog

from core.errors import ProcessNotFoundError
from core.interchange.bpmn_xml import export_process, import_process
from core.process.complexity import ProcessComplexity, analyze_complexity
from core.process.model import Process
from core.process.validation import ValidationReport, validate_process
from core.storage.interface import ProcessRepository

logger = structlog.get_logger(__name__)


class ProcessService:
    """CRUD, validation, interchange and metrics over a process repository."""

    def __init__(self, repository: ProcessRepository):
        self.repository = repository

    async def list_processes(self) -> List[Process]:
        return await self.repository.get_all()

    async def get_process(self, process_id: str) -> Process:
        process = await self.repository.get_by_id(process_id)
        if process is None:
            raise ProcessNotFoundError(process_id)
        return process

    async def create_process(self, name: str, description: str = "") -> Process:
        process = Process.create(name, description)
        await self.repository.add(process)
        logger.info("process_created", process_id=process.id, name=name)
        return process

    async def update_process(
        self,
        process_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Process:
        process = await self.get_process(process_id)
        process.update(name=name, description=description)
        await self.repository.update(process)
        logger.info("process_updated", process_id=process_id)
        return process

    async def save_process(self, process: Process) -> Process:
        """Store edits made to a process obtained from this service."""
        await self.get_process(process.id)
        await self.repository.update(process)
        logger.info("process_updated", process_id=process.id)
        return process

    async def delete_process(self, process_id: str) -> None:
        if not await self.repository.delete(process_id):
            raise ProcessNotFoundError(process_id)
        logger.info("process_deleted", process_id=process_id)

    async def validate_process(self, process_id: str) -> ValidationReport:
        return validate_process(await self.get_process(process_id))

    async def export_xml(self, process_id: str) -> str:
        return export_process(await self.get_process(process_id))

    async def import_xml(self, xml: Union[str, bytes]) -> Process:
        """Parse BPMN XML and store the result.

        An existing process with the same id is replaced.
        """
        process = import_process(xml)
        if await self.repository.get_by_id(process.id) is None:
            await self.repository.add(process)
        else:
            await self.repository.update(process)
        return process

    async def analyze_complexity(self, process_id: str) -> ProcessComplexity:
        return analyze_complexity(await self.get_process(process_id))
