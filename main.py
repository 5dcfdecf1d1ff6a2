#!/usr/bin/env python3
"""
Invoice Field Extraction Engine - Main Entry Point.

Reads OCR fragment files (JSON), extracts invoice fields with the
rule-based engine, logs a summary per document and writes the results
as JSON or Excel.

Usage:
    Command Line:
        python main.py --input invoice_ocr.json --output results.json
        python main.py --input ./ocr_output/ --output results.xlsx --debug

    Python:
        from main import run_extraction
        results = run_extraction("invoice_ocr.json")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import project modules
from config import ConfigurationManager
from invoice_fields.extraction.settings import default_settings
from invoice_fields.utils.exceptions import InvoiceFieldsError
from invoice_fields.utils.logger import ROOT_LOGGER_NAME, get_logger, setup_logger_from_config


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Invoice Field Extraction Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process one fragment file:
        python main.py --input invoice_ocr.json --output results.json

    Process a directory into a workbook:
        python main.py --input ./ocr_output/ --output results.xlsx
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Fragment JSON file or directory of fragment files"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file ending in .json or .xlsx (default: log summary only)"
    )

    parser.add_argument(
        "--document-type", "-t",
        type=str,
        choices=["invoice", "receipt", "other"],
        default=None,
        help="Override the document type declared in the input files"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Returns:
        Initialized configuration manager.
    """
    if args.config:
        ConfigurationManager.reset()
        default_settings.cache_clear()
    config = ConfigurationManager(args.config)
    logger = setup_logger_from_config()

    if args.debug:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = None

    if level is not None:
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    logger.info("=" * 60)
    logger.info("INVOICE FIELD EXTRACTION ENGINE")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")
    logger.info(f"Output: {args.output or '-'}")

    return config


def run_extraction(
    input_path: str,
    output_path: Optional[str] = None,
    document_type: Optional[str] = None
):
    """
    Run the extraction pipeline over a file or directory.

    Args:
        input_path: Fragment JSON file or directory.
        output_path: Optional .json or .xlsx destination.
        document_type: Overrides the type declared in each file.

    Returns:
        List of DocumentResult objects, one per loaded document.

    Raises:
        InputError: If the input path cannot be read.
        ExportError: If the output cannot be written.

    Example:
        >>> results = run_extraction("ocr_output/")
        >>> for r in results:
        ...     print(r.record.invoice_number)
    """
    from invoice_fields.extraction import DocumentType, FieldExtractor
    from invoice_fields.input_handler import FragmentLoader
    from invoice_fields.output_handler import DocumentResult, OutputHandler
    from invoice_fields.postprocessor import InvoiceAssembler

    logger = get_logger(__name__)

    loader = FragmentLoader()
    extractor = FieldExtractor()
    assembler = InvoiceAssembler()

    path = Path(input_path)
    if path.is_dir():
        documents = loader.load_batch(path)
    else:
        documents = [loader.load_document(path)]

    override = DocumentType.parse(document_type) if document_type else None

    results = []
    for document in documents:
        if not document.success:
            logger.warning(f"Skipping {document.filename}: {document.error}")
            continue

        doc_type = override or document.document_type
        field_map = extractor.extract_fields(document.fragments, doc_type)
        record = assembler.assemble(field_map, source_file=document.filename)

        logger.info(f"  {document.filename}: {assembler.summary(record)}")
        for warning in record.warnings:
            logger.warning(f"  {document.filename}: {warning}")

        results.append(DocumentResult(document.filename, doc_type, field_map, record))

    if output_path and results:
        saved = OutputHandler().save(results, output_path)
        logger.info(f"Results written to {saved}")
    elif output_path:
        logger.warning("No documents extracted, nothing written")

    return results


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)
        logger = get_logger(__name__)

        results = run_extraction(
            input_path=args.input,
            output_path=args.output,
            document_type=args.document_type
        )

        logger.info("=" * 60)
        logger.info(f"Extraction complete. Processed {len(results)} document(s).")
        logger.info("=" * 60)

        return 0 if results else 1

    except InvoiceFieldsError as e:
        logging.getLogger(ROOT_LOGGER_NAME).error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
