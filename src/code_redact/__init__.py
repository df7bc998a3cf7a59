"""Source code identifier redaction tool."""

__version__ = "1.0.0"
__description__ = "Replace identifiers in JavaScript and TypeScript source with readable substitutes"

from code_redact.models import RedactionResult, ProcessResult, GrammarProfile, NodeKind
from code_redact.exceptions import (
    CodeRedactError,
    BadRequestError,
    EmptyInputError,
    InvalidGrammarHintError,
    RedactionFailedError,
)
from code_redact.redactor import CodeRedactor, redact_source
from code_redact.processors import FileProcessor
from code_redact.config import ConfigManager

__all__ = [
    'RedactionResult',
    'ProcessResult',
    'GrammarProfile',
    'NodeKind',
    'CodeRedactError',
    'BadRequestError',
    'EmptyInputError',
    'InvalidGrammarHintError',
    'RedactionFailedError',
    'CodeRedactor',
    'redact_source',
    'FileProcessor',
    'ConfigManager',
]
