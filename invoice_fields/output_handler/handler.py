"""
Main Output Handler Module.

This module provides the unified OutputHandler class that picks the
output sink from the destination's file extension.

Author: ML Engineering Team
"""

from pathlib import Path
from typing import Sequence, Union

from config import get_config_path
from invoice_fields.utils.exceptions import ExportError
from invoice_fields.utils.helpers import get_file_extension
from invoice_fields.utils.logger import get_logger
from .excel_exporter import ExcelExporter
from .json_exporter import JSONExporter
from .results import DocumentResult

# Initialize module logger
logger = get_logger(__name__)


class OutputHandler:
    """
    Unified output handler for extraction results.

    Attributes:
        exporters: Mapping of file extension to exporter
        output_dir: Directory for destinations given as a bare file name

    Example:
        >>> handler = OutputHandler()
        >>> handler.save(results, "outputs/fields.json")
        >>> handler.save(results, "outputs/fields.xlsx")
    """

    def __init__(self) -> None:
        self.output_dir = get_config_path("paths.output_dir", "outputs")
        self.exporters = {
            '.json': JSONExporter(),
            '.xlsx': ExcelExporter(),
        }

    @property
    def supported_extensions(self):
        return sorted(self.exporters)

    def save(
        self,
        results: Union[DocumentResult, Sequence[DocumentResult]],
        filepath: Union[str, Path]
    ) -> str:
        """
        Save results to the sink matching the file extension.

        Args:
            results: Single result or list of results
            filepath: Destination ending in .json or .xlsx; a bare file
                name is placed in the configured output directory

        Returns:
            Path of the written file.

        Raises:
            ExportError: For an unsupported extension or a failed write.
        """
        if isinstance(results, DocumentResult):
            results = [results]

        filepath = Path(filepath)
        if not filepath.is_absolute() and filepath.parent == Path('.'):
            filepath = self.output_dir / filepath

        extension = get_file_extension(filepath)
        exporter = self.exporters.get(extension)
        if exporter is None:
            raise ExportError(
                str(filepath),
                f"Unsupported output format '{extension}', use one of {self.supported_extensions}"
            )

        logger.debug(f"Saving {len(results)} result(s) with {type(exporter).__name__}")
        return exporter.export(list(results), filepath)
