"""
Substitute generators for identifier redaction.

This package contains the strategies that produce replacement names for
original identifiers.
"""

from code_redact.substitutes.base_generator import BaseSubstituteGenerator
from code_redact.substitutes.faker_generator import FakerSubstituteGenerator

__all__ = ['BaseSubstituteGenerator', 'FakerSubstituteGenerator']
