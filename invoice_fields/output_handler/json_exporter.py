"""
JSON Exporter Module.

Writes extraction results as one JSON document: a ``documents`` list
with each document's field map and assembled invoice.

Author: ML Engineering Team
"""

import json
from pathlib import Path
from typing import Sequence, Union

from config import get_config
from invoice_fields.utils.exceptions import ExportError
from invoice_fields.utils.helpers import ensure_directory, generate_timestamp
from invoice_fields.utils.logger import get_logger
from .results import DocumentResult

logger = get_logger(__name__)


class JSONExporter:
    """
    Exports extraction results to a JSON file.

    Example:
        >>> JSONExporter().export(results, "outputs/fields.json")
    """

    def __init__(self) -> None:
        self.indent = get_config("output.json.indent", 2)

    def export(
        self,
        results: Sequence[DocumentResult],
        filepath: Union[str, Path]
    ) -> str:
        """
        Write results to a JSON file.

        Raises:
            ExportError: If the file cannot be written.
        """
        filepath = Path(filepath)
        document = {
            'generated_at': generate_timestamp("%Y-%m-%dT%H:%M:%S"),
            'documents': [result.to_dict() for result in results],
        }

        try:
            ensure_directory(filepath.parent)
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=self.indent, ensure_ascii=False)
        except OSError as e:
            logger.error(f"JSON export failed: {e}")
            raise ExportError(str(filepath), str(e))

        logger.info(f"JSON file saved: {filepath} ({len(results)} documents)")
        return str(filepath)
