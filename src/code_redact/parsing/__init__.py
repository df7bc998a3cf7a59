"""
Parsing package: grammar profile resolution and the tree-sitter adapter.
"""

from code_redact.parsing.adapter import ParseAdapter
from code_redact.parsing.grammar import GrammarProfileResolver

__all__ = ['ParseAdapter', 'GrammarProfileResolver']
