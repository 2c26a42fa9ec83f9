"""Best-effort progress delivery."""

import asyncio
from typing import Any, Callable, List, Optional

import structlog

from core.generator.models import GenerationProgress

logger = structlog.get_logger(__name__)

ProgressSink = Callable[[GenerationProgress], Any]


class ProgressReporter:
    """Pushes :class:`GenerationProgress` updates to an optional sink.

    The sink may be a plain function or a coroutine function. Reported
    percentages never decrease, and a failing sink is logged and
    otherwise ignored.
    """

    def __init__(self, sink: Optional[ProgressSink] = None):
        self.sink = sink
        self.is_async = asyncio.iscoroutinefunction(sink)
        self.last_percentage = 0
        self.history: List[GenerationProgress] = []

    async def report(self, percentage: int, message: str, current_file: Optional[str] = None) -> None:
        percentage = min(100, max(self.last_percentage, int(percentage)))
        self.last_percentage = percentage
        update = GenerationProgress(
            percentage=percentage,
            message=message,
            current_file=current_file,
        )
        self.history.append(update)

        if self.sink is None:
            return
        try:
            if self.is_async:
                await self.sink(update)
            else:
                self.sink(update)
        except Exception as e:
            logger.warning(
                "progress_sink_failed",
                percentage=percentage,
                error=str(e),
            )
