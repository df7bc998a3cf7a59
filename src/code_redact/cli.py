"""
Command-line interface for the code redaction tool.

This module provides the CLI for replacing identifiers in JavaScript and
TypeScript source files with readable substitutes.
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from code_redact import __version__
from code_redact.config.config_manager import ConfigManager
from code_redact.exceptions import BadRequestError, CodeRedactError
from code_redact.processors.file_processor import FileProcessor
from code_redact.utils import format_mapping

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_REQUEST = 2
EXIT_INTERRUPTED = 130

MAPPING_PREVIEW_LIMIT = 10


def setup_logging(config: dict) -> None:
    """
    Setup logging configuration.

    Args:
        config: Logging configuration dictionary
    """
    log_level = config.get('level') or 'INFO'
    log_format = config.get('format') or '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    log_file = config.get('file') or None

    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format=log_format,
        filename=log_file
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv)

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog='code-redact',
        description='Code Redaction Tool - Replace identifiers in source code with readable substitutes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Redact a single file
  code-redact app.js -o app_redacted.js

  # Parse with TypeScript and JSX enabled
  code-redact component.tsx --language javascript

  # Redact every source file in a directory tree
  code-redact src/ -o redacted/ --dir -r

  # Read from stdin, write to stdout, print the mapping to stderr
  cat app.js | code-redact - --mapping

  # Reproducible substitutes
  code-redact app.js --seed 42
        '''
    )

    parser.add_argument(
        'input',
        help="Input file or directory path ('-' for stdin)"
    )

    parser.add_argument(
        '-o', '--output',
        help='Output file or directory path (auto-generated if not specified)',
        default=None
    )

    parser.add_argument(
        '--dir',
        action='store_true',
        help='Process directory instead of single file'
    )

    parser.add_argument(
        '-r', '--recursive',
        action='store_true',
        help='Process directories recursively (only with --dir)'
    )

    parser.add_argument(
        '-c', '--config',
        help='Path to custom configuration file (YAML)',
        default=None
    )

    parser.add_argument(
        '-l', '--language',
        help='Language hint selecting the grammar profile (e.g. javascript, module, script)',
        default=None
    )

    mapping_group = parser.add_mutually_exclusive_group()
    mapping_group.add_argument(
        '--mapping',
        dest='mapping',
        action='store_true',
        default=None,
        help='Write the identifier mapping (stderr in stdin mode, JSON side-car otherwise)'
    )
    mapping_group.add_argument(
        '--no-mapping',
        dest='mapping',
        action='store_false',
        help='Do not write the identifier mapping'
    )

    parser.add_argument(
        '--seed',
        type=int,
        help='Seed for substitute generation',
        default=None
    )

    parser.add_argument(
        '--backup',
        action='store_true',
        help='Create backup of original file before redaction'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Code Redaction Tool v{__version__}'
    )

    return parser.parse_args(argv)


def build_cli_overrides(args: argparse.Namespace) -> dict:
    """
    Build configuration overrides from CLI arguments.

    Args:
        args: Parsed command-line arguments

    Returns:
        Dictionary of configuration overrides
    """
    overrides = {}

    if args.seed is not None:
        overrides['substitutes'] = {'seed': args.seed}

    processing_overrides = {}

    if args.mapping is not None:
        processing_overrides['write_mapping'] = args.mapping

    if args.backup:
        processing_overrides['backup_original'] = True

    if processing_overrides:
        overrides['processing'] = processing_overrides

    if args.verbose:
        overrides['logging'] = {'level': 'DEBUG'}

    return overrides


def validate_input(args: argparse.Namespace) -> bool:
    """
    Validate input arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if valid, False otherwise
    """
    if args.input == '-':
        if args.dir:
            print("Error: --dir cannot be used with stdin input", file=sys.stderr)
            return False
        return True

    if not os.path.exists(args.input):
        print(f"Error: Input path does not exist: {args.input}", file=sys.stderr)
        return False

    if args.dir:
        if not os.path.isdir(args.input):
            print(f"Error: --dir specified but input is not a directory: {args.input}", file=sys.stderr)
            return False
    else:
        if not os.path.isfile(args.input):
            print(f"Error: Input is not a file: {args.input}", file=sys.stderr)
            return False

    if args.recursive and not args.dir:
        print("Warning: --recursive ignored (only applies to --dir mode)")

    return True


def print_results(results) -> None:
    """
    Print processing results summary.

    Args:
        results: ProcessResult or list of ProcessResult objects
    """
    if isinstance(results, list):
        print("\n" + "=" * 70)
        print("PROCESSING SUMMARY")
        print("=" * 70)

        total = len(results)
        successful = sum(1 for r in results if r.success)
        total_replaced = sum(r.identifiers_replaced for r in results)
        total_time = sum(r.processing_time for r in results)

        print(f"Files processed: {successful}/{total}")
        print(f"Total identifiers replaced: {total_replaced}")
        print(f"Total processing time: {total_time:.2f}s")

        errors = [r for r in results if not r.success]
        if errors:
            print(f"\nErrors ({len(errors)} files):")
            for result in errors[:5]:
                print(f"  - {result.input_path}: {result.errors[0] if result.errors else 'Unknown error'}")
            if len(errors) > 5:
                print(f"  ... and {len(errors) - 5} more errors")

        print("=" * 70)
    else:
        result = results
        print("\n" + "=" * 70)
        print("PROCESSING RESULT")
        print("=" * 70)
        print(f"Input: {result.input_path}")
        print(f"Output: {result.output_path}")
        print(f"Language: {result.language or 'default'}")
        print(f"Status: {'SUCCESS' if result.success else 'FAILED'}")
        print(f"Identifiers replaced: {result.identifiers_replaced}")
        print(f"Distinct identifiers: {result.identifiers_distinct}")
        if result.mapping_path:
            print(f"Mapping: {result.mapping_path}")
        print(f"Processing time: {result.processing_time:.2f}s")

        if result.errors:
            print("\nErrors:")
            for error in result.errors:
                print(f"  - {error}")

        if result.warnings:
            print("\nWarnings:")
            for warning in result.warnings:
                print(f"  - {warning}")

        print("=" * 70)


def run_stdin(processor: FileProcessor, args: argparse.Namespace) -> int:
    """
    Redact code read from stdin and write it to stdout.

    Args:
        processor: Configured file processor
        args: Parsed arguments

    Returns:
        Exit code
    """
    text = sys.stdin.read()

    try:
        result = processor.process_text(text, args.language)
    except BadRequestError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_REQUEST
    except CodeRedactError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    sys.stdout.write(result.redacted_code)
    if args.mapping:
        print(json.dumps(result.mapping_dict(), indent=2, ensure_ascii=False), file=sys.stderr)
    elif args.verbose and result.mapping:
        print(format_mapping(result.mapping, MAPPING_PREVIEW_LIMIT), file=sys.stderr)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = parse_args(argv)

    if not validate_input(args):
        return EXIT_BAD_REQUEST

    try:
        config_manager = ConfigManager.load(
            user_path=args.config,
            cli_overrides=build_cli_overrides(args)
        )

        setup_logging(config_manager.get_logging_config())

        processor = FileProcessor(config_manager.config_data)

        if args.language is not None:
            try:
                processor.redactor.resolver.resolve(args.language)
            except BadRequestError as e:
                print(f"Error: {e}: {args.language}", file=sys.stderr)
                return EXIT_BAD_REQUEST

        if args.input == '-':
            return run_stdin(processor, args)

        if args.dir:
            results = processor.process_directory(
                input_dir=args.input,
                output_dir=args.output,
                recursive=args.recursive,
                language=args.language
            )
        else:
            results = processor.process_file(
                input_path=args.input,
                output_path=args.output,
                language=args.language
            )

        print_results(results)

        if isinstance(results, list):
            return EXIT_OK if all(r.success for r in results) else EXIT_FAILURE
        return EXIT_OK if results.success else EXIT_FAILURE

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED

    except ValueError as e:
        # Invalid configuration values (profiles, number range, policies)
        print(f"\nConfiguration error: {e}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == '__main__':
    sys.exit(main())
