"""
Fragment Loader Module.

This module provides the FragmentLoader class that reads OCR output
saved as JSON and turns it into TextFragment objects for the engine.

Accepted document shapes:
    - A list of fragment records
    - An object with a ``fragments`` list (and optional ``document_type``)
    - A Tesseract ``image_to_data`` dictionary of columns
      (``text``, ``left``, ``top``, ``width``, ``height``)

Accepted geometry per record:
    - ``bbox`` / ``bounding_box`` / ``boundingBox`` as ``[l, t, r, b]``
    - the same keys as ``{left, top, right, bottom}``
    - the same keys as a 4-point polygon ``[[x, y], ...]``
    - flat ``left``/``top``/``width``/``height`` keys on the record

Usage:
    from invoice_fields.input_handler import FragmentLoader

    loader = FragmentLoader()
    fragments = loader.load("invoice_ocr.json")

Author: ML Engineering Team
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from config import get_config
from invoice_fields.extraction.field_result import DocumentType
from invoice_fields.layout.fragment import BoundingBox, TextFragment
from invoice_fields.utils.exceptions import (
    FragmentFormatError,
    InputError,
    UnsupportedFileTypeError,
)
from invoice_fields.utils.helpers import get_file_extension
from invoice_fields.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

GEOMETRY_KEYS = ('bbox', 'bounding_box', 'boundingBox')
ID_KEYS = ('id', 'fragment_id', 'fragmentId')
TESSERACT_COLUMNS = ('text', 'left', 'top', 'width', 'height')


@dataclass
class FragmentDocument:
    """
    Result of loading one fragment file.

    Attributes:
        filepath: Original file path
        filename: Original filename
        fragments: Decoded fragments in file order
        document_type: Type declared in the file, else the default
        success: Whether loading succeeded
        error: Error message if loading failed
    """
    filepath: str
    filename: str
    fragments: List[TextFragment] = field(default_factory=list)
    document_type: DocumentType = DocumentType.INVOICE
    success: bool = True
    error: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"FragmentDocument(filename='{self.filename}', "
            f"fragments={len(self.fragments)}, "
            f"type='{self.document_type.value}', "
            f"success={self.success})"
        )


def parse_bounding_box(value: Any) -> Optional[BoundingBox]:
    """
    Decode a geometry value in any accepted shape.

    Returns:
        BoundingBox, or None when the value is missing or unusable.

    Example:
        >>> parse_bounding_box([10, 20, 110, 40])
        BoundingBox(left=10, top=20, right=110, bottom=40)
        >>> parse_bounding_box([[10, 20], [110, 20], [110, 40], [10, 40]])
        BoundingBox(left=10, top=20, right=110, bottom=40)
    """
    try:
        if isinstance(value, Mapping):
            return BoundingBox(
                float(value['left']), float(value['top']),
                float(value['right']), float(value['bottom'])
            )

        if isinstance(value, (list, tuple)):
            if len(value) == 4 and all(isinstance(p, (list, tuple)) for p in value):
                xs = [float(p[0]) for p in value]
                ys = [float(p[1]) for p in value]
                return BoundingBox(min(xs), min(ys), max(xs), max(ys))
            if len(value) == 4:
                return BoundingBox(*(float(v) for v in value))
    except (KeyError, TypeError, ValueError, IndexError):
        return None

    return None


def _record_geometry(record: Mapping) -> Optional[BoundingBox]:
    for key in GEOMETRY_KEYS:
        if record.get(key) is not None:
            return parse_bounding_box(record[key])

    if all(key in record for key in ('left', 'top', 'width', 'height')):
        try:
            left, top = float(record['left']), float(record['top'])
            return BoundingBox(
                left, top, left + float(record['width']), top + float(record['height'])
            )
        except (TypeError, ValueError):
            return None
    return None


def fragment_from_record(record: Mapping, index: int) -> Optional[TextFragment]:
    """
    Build a fragment from one decoded record.

    Returns:
        TextFragment, or None for records without text.
    """
    text = record.get('text')
    if not isinstance(text, str) or not text.strip():
        return None

    fragment_id = next(
        (str(record[key]) for key in ID_KEYS if record.get(key) is not None),
        f"f{index}"
    )
    return TextFragment(
        text=text.strip(),
        bounding_box=_record_geometry(record),
        fragment_id=fragment_id,
    )


def fragments_from_tesseract_data(data: Mapping[str, List]) -> List[TextFragment]:
    """
    Convert Tesseract ``image_to_data`` output into fragments.

    Empty words and non-positive boxes are skipped, as Tesseract reports
    one entry per page, block, paragraph and line as well as per word.
    """
    fragments = []
    for i in range(len(data['text'])):
        text = data['text'][i]
        if not text or not str(text).strip():
            continue

        width, height = data['width'][i], data['height'][i]
        if width <= 0 or height <= 0:
            continue

        left, top = data['left'][i], data['top'][i]
        fragments.append(TextFragment(
            text=str(text).strip(),
            bounding_box=BoundingBox(left, top, left + width, top + height),
            fragment_id=f"w{len(fragments)}",
        ))
    return fragments


class FragmentLoader:
    """
    Loads OCR fragment documents from JSON files.

    Attributes:
        supported_extensions: Set of accepted file extensions
        default_document_type: Used when a file declares no type

    Example:
        >>> loader = FragmentLoader()
        >>> fragments = loader.load("invoice_ocr.json")
        >>> documents = loader.load_batch("./ocr_output/")
    """

    DEFAULT_EXTENSIONS = ['.json']

    def __init__(
        self,
        supported_extensions: Optional[List[str]] = None,
        default_document_type: Optional[DocumentType] = None
    ) -> None:
        extensions = supported_extensions or get_config(
            "input.supported_extensions", self.DEFAULT_EXTENSIONS
        )
        self.supported_extensions = {ext.lower() for ext in extensions}
        self.default_document_type = default_document_type or DocumentType.parse(
            get_config("input.default_document_type", DocumentType.INVOICE.value)
        )

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Check that a file exists and has a supported extension.

        Raises:
            InputError: If the path does not exist or is not a file.
            UnsupportedFileTypeError: If the extension is not supported.
        """
        path = Path(filepath)
        if not path.exists():
            raise InputError(f"File not found: {filepath}", {"filepath": str(filepath)})
        if not path.is_file():
            raise InputError(f"Path is not a file: {filepath}", {"filepath": str(filepath)})

        extension = get_file_extension(path)
        if extension not in self.supported_extensions:
            raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))
        return path

    def parse(self, payload: Any, source: str = "<memory>") -> FragmentDocument:
        """
        Decode an already-parsed JSON payload.

        Raises:
            FragmentFormatError: If the payload has no recognizable shape.
        """
        document_type = self.default_document_type

        if isinstance(payload, Mapping) and all(col in payload for col in TESSERACT_COLUMNS):
            fragments = fragments_from_tesseract_data(payload)
            return FragmentDocument(source, Path(source).name, fragments, document_type)

        if isinstance(payload, Mapping):
            if payload.get('document_type'):
                try:
                    document_type = DocumentType.parse(payload['document_type'])
                except ValueError:
                    raise FragmentFormatError(
                        source, f"unknown document_type '{payload['document_type']}'"
                    )
            records = payload.get('fragments')
        else:
            records = payload

        if not isinstance(records, list):
            raise FragmentFormatError(source, "expected a list of fragment records")

        fragments = []
        for index, record in enumerate(records):
            if not isinstance(record, Mapping):
                raise FragmentFormatError(source, f"record {index} is not an object")
            fragment = fragment_from_record(record, index)
            if fragment is None:
                logger.debug(f"Skipping record {index} without text")
                continue
            fragments.append(fragment)

        missing = sum(1 for f in fragments if f.bounding_box is None)
        if missing:
            logger.warning(f"{missing} fragment(s) in {source} have no usable geometry")

        return FragmentDocument(source, Path(source).name, fragments, document_type)

    def load_document(self, filepath: Union[str, Path]) -> FragmentDocument:
        """
        Load a fragment file with its declared document type.

        Raises:
            InputError: If the file is missing.
            UnsupportedFileTypeError: If the extension is not supported.
            FragmentFormatError: If the file is not valid UTF-8 fragment JSON.
        """
        path = self.validate_file(filepath)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FragmentFormatError(str(filepath), str(e))

        document = self.parse(payload, str(filepath))
        logger.info(f"Loaded {len(document.fragments)} fragments from {path.name}")
        return document

    def load(self, filepath: Union[str, Path]) -> List[TextFragment]:
        """Load only the fragments of a file."""
        return self.load_document(filepath).fragments

    def load_batch(self, directory: Union[str, Path]) -> List[FragmentDocument]:
        """
        Load every supported file in a directory.

        Files that fail to load are returned with ``success=False`` and
        the error message instead of aborting the batch.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise InputError(f"Path is not a directory: {directory}", {"path": str(directory)})

        files = sorted(
            path for path in directory.iterdir()
            if path.is_file() and get_file_extension(path) in self.supported_extensions
        )
        logger.info(f"Found {len(files)} files to process in {directory}")

        documents = []
        for filepath in files:
            try:
                documents.append(self.load_document(filepath))
            except InputError as e:
                logger.error(f"Input error for {filepath}: {e}")
                documents.append(FragmentDocument(
                    str(filepath), filepath.name, success=False, error=str(e)
                ))

        successful = sum(1 for d in documents if d.success)
        logger.info(f"Batch loading complete: {successful} successful, {len(documents) - successful} failed")
        return documents
