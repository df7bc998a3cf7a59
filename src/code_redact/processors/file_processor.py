"""
File processor for redacting identifiers in source files.

This module coordinates reading source files, redacting them and writing the
redacted output plus an optional mapping report.
"""

import json
import os
import shutil
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from code_redact.exceptions import CodeRedactError
from code_redact.models import MappingReport, ProcessResult, RedactionResult
from code_redact.redactor import CodeRedactor
from code_redact.utils import format_file_size, get_timestamp, hint_for_path

DEFAULT_FILE_PATTERNS = ["*.js", "*.mjs", "*.cjs", "*.jsx", "*.ts", "*.tsx"]


class FileProcessor:
    """
    Processor for redacting identifiers in source files.

    This class orchestrates the per-file pipeline:
    1. Read input file
    2. Pick a language hint (explicit, or from the file extension)
    3. Redact identifiers
    4. Write output file
    5. Write mapping report (optional)
    """

    def __init__(self, config: Dict[str, Any], redactor: Optional[CodeRedactor] = None):
        """
        Initialize file processor.

        Args:
            config: Configuration dictionary
            redactor: Optional pre-built redactor (built from config if None)
        """
        self.config = config
        self.processing_config = config.get('processing', {})

        self.redactor = redactor or CodeRedactor(config)

        # Processing options
        self.write_mapping = self.processing_config.get('write_mapping', True)
        self.backup_original = self.processing_config.get('backup_original', False)
        self.encoding = self.processing_config.get('encoding', 'utf-8')
        self.output_suffix = self.processing_config.get('output_suffix', '_redacted')
        self.file_patterns = self.processing_config.get('file_patterns') or DEFAULT_FILE_PATTERNS
        self.extension_hints = self.processing_config.get('extension_hints') or {}

    def process_text(self, text: str, language: Optional[str] = None) -> RedactionResult:
        """
        Redact source text, always collecting the mapping.

        Args:
            text: Source code
            language: Optional language hint

        Returns:
            RedactionResult including the mapping
        """
        return self.redactor.redact_source(text, language, include_mapping=True)

    def process_file(
        self,
        input_path: str,
        output_path: Optional[str] = None,
        language: Optional[str] = None,
    ) -> ProcessResult:
        """
        Redact a single source file.

        Args:
            input_path: Path to input file
            output_path: Path to output file (auto-generated if None)
            language: Language hint (inferred from the extension if None)

        Returns:
            ProcessResult object with processing details
        """
        start_time = time.time()
        result = ProcessResult(success=False, input_path=input_path)

        try:
            if not os.path.exists(input_path):
                result.add_error(f"Input file not found: {input_path}")
                return result

            if not os.path.isfile(input_path):
                result.add_error(f"Input path is not a file: {input_path}")
                return result

            if output_path is None:
                output_path = self._generate_output_path(input_path)

            if language is None:
                language = hint_for_path(input_path, self.extension_hints)
            result.language = language

            if self.backup_original:
                self._backup_file(input_path)

            print(f"Reading file: {input_path} ({format_file_size(os.path.getsize(input_path))})")
            text = self._read_file(input_path)

            redaction = self.process_text(text, language)
            mapping = redaction.mapping or []
            result.identifiers_replaced = redaction.replaced
            result.identifiers_distinct = len(mapping)
            print(f"Replaced {redaction.replaced} identifier occurrences ({len(mapping)} distinct)")
            if not redaction.replaced:
                result.add_warning("No identifiers found")

            print(f"Writing output: {output_path}")
            self._write_file(output_path, redaction.redacted_code)
            result.output_path = output_path

            if self.write_mapping:
                mapping_path = self._generate_mapping_path(output_path)
                self._write_mapping_report(mapping_path, input_path, redaction)
                result.mapping_path = mapping_path
                print(f"Mapping written: {mapping_path}")

            result.success = True

        except CodeRedactError as e:
            result.add_error(str(e))
            print(f"Error: {e}")

        except (OSError, UnicodeError) as e:
            result.add_error(f"Error processing file: {e}")
            print(f"Error: {e}")

        finally:
            result.processing_time = time.time() - start_time

        return result

    def process_directory(
        self,
        input_dir: str,
        output_dir: Optional[str] = None,
        recursive: bool = False,
        language: Optional[str] = None,
    ) -> List[ProcessResult]:
        """
        Redact all matching source files in a directory.

        Args:
            input_dir: Path to input directory
            output_dir: Path to output directory (auto-generated if None)
            recursive: Whether to process subdirectories recursively
            language: Language hint applied to every file (per-extension if None)

        Returns:
            List of ProcessResult objects, one per file
        """
        if output_dir is None:
            output_dir = input_dir.rstrip(os.sep) + "_redacted"

        os.makedirs(output_dir, exist_ok=True)

        files = self._find_files(input_dir, recursive)
        print(f"Found {len(files)} files to process")

        results = []
        for file_path in files:
            rel_path = file_path.relative_to(input_dir)
            output_path = os.path.join(output_dir, str(rel_path))

            results.append(self.process_file(str(file_path), output_path, language))

        successful = sum(1 for r in results if r.success)
        print(f"\nProcessing complete: {successful}/{len(results)} files successful")

        return results

    def _find_files(self, input_dir: str, recursive: bool) -> List[Path]:
        """List files matching the configured patterns, sorted and de-duplicated."""
        root = Path(input_dir)
        found = set()
        for pattern in self.file_patterns:
            matches = root.rglob(pattern) if recursive else root.glob(pattern)
            found.update(p for p in matches if p.is_file())
        return sorted(found)

    def _read_file(self, path: str) -> str:
        with open(path, 'r', encoding=self.encoding) as f:
            return f.read()

    def _write_file(self, path: str, content: str) -> None:
        """
        Write content to file.

        Args:
            path: File path
            content: Content to write
        """
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(path, 'w', encoding=self.encoding) as f:
            f.write(content)

    def _generate_output_path(self, input_path: str) -> str:
        path = Path(input_path)
        return str(path.parent / f"{path.stem}{self.output_suffix}{path.suffix}")

    def _generate_mapping_path(self, output_path: str) -> str:
        path = Path(output_path)
        return str(path.parent / f"{path.name}.mapping.json")

    def _backup_file(self, path: str) -> None:
        """
        Create backup of file.

        Args:
            path: File path to backup
        """
        backup_path = f"{path}.backup"
        shutil.copy2(path, backup_path)
        print(f"Backup created: {backup_path}")

    def _write_mapping_report(self, path: str, source_path: str, redaction: RedactionResult) -> None:
        """
        Write the identifier mapping used for a file.

        Args:
            path: Mapping report path
            source_path: File the mapping belongs to
            redaction: Redaction result carrying the mapping
        """
        report = MappingReport(
            source_path=source_path,
            profile=redaction.profile,
            strategy=self.redactor.get_strategy_name(),
            timestamp=get_timestamp(),
            mapping=redaction.mapping or [],
        )

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
