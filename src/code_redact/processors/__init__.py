"""File processing for code_redact."""

from code_redact.processors.file_processor import FileProcessor

__all__ = ['FileProcessor']
