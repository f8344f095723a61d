"""Base class for dashboard renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List


class BaseRenderer(ABC):
    """Shared interface for any dashboard renderer."""

    name: str = "base"
    filename: str = ""

    def output_path(self, output_dir: str) -> Path:
        return Path(output_dir) / self.filename

    @abstractmethod
    def render(self, context: Dict[str, Any], output_dir: str) -> List[str]:
        """Render the dashboard context and return the written file paths."""
