import json
import logging
from typing import Dict, Any, Optional
from pathlib import Path

from .models import RenderDocument, COMPONENT_REGISTRY

logger = logging.getLogger(__name__)


class DocumentParser:
    """Parser for render-job documents"""
    def __init__(self, data_path: str):
        self.data_path = Path(data_path)
        self.document: Optional[RenderDocument] = None

    def parse(self) -> RenderDocument:
        """Parse the data file and return the render document"""
        if not self.data_path.is_file():
            raise FileNotFoundError(f"Render document not found: {self.data_path}")

        with open(self.data_path, 'r', encoding='utf-8') as f:
            try:
                raw_data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {self.data_path}: {e}") from e

        self.document = self.parse_data(raw_data)
        logger.info("Loaded render document with %d component assignment(s)",
                    len(self.document.components))
        return self.document

    @staticmethod
    def parse_data(raw_data: Dict[str, Any]) -> RenderDocument:
        """Build a render document from already-decoded JSON"""
        document = RenderDocument.from_data(raw_data)

        assignments = []
        for assignment in document.components:
            if not assignment.blocks:
                logger.warning("Skipping %s assignment with no blocks", assignment.component)
                continue
            if assignment.component not in COMPONENT_REGISTRY:
                logger.warning("Unknown component %s, its blocks will render unchanged",
                               assignment.component)
            assignments.append(assignment)

        document.components = assignments
        return document
