"""BaseReporter ABC — report generation interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from alwayson.core.models import ScriptResult


class BaseReporter(ABC):
    """Report generation abstract interface."""

    @abstractmethod
    async def generate(
        self,
        results: list[ScriptResult],
        output_dir: Path,
    ) -> Path:
        """Generate report file from script results.

        Args:
            results: One ScriptResult per executed script.
            output_dir: Output directory for the report.

        Returns:
            Path to the generated report file.
        """
        ...

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Report format name: 'markdown'."""
        ...
