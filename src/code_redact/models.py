"""
Data models for the code redaction tool.

This module defines the core data structures used throughout the application:
the syntax tree the walker mutates, grammar profiles, and result objects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple, Any


class NodeKind(Enum):
    """Closed set of syntax node kinds produced by the parse adapter."""

    IDENTIFIER = "identifier"
    PROPERTY_IDENTIFIER = "property_identifier"
    SHORTHAND_PROPERTY = "shorthand_property"
    PRIVATE_PROPERTY = "private_property"
    TYPE_IDENTIFIER = "type_identifier"
    LABEL = "label"
    JSX_NAME = "jsx_name"
    COMMENT = "comment"
    TOKEN = "token"
    SYNTAX = "syntax"


# Kinds reached through the identifier production; only these are renamed
REDACTABLE_KINDS: FrozenSet[NodeKind] = frozenset({
    NodeKind.IDENTIFIER,
    NodeKind.PROPERTY_IDENTIFIER,
    NodeKind.SHORTHAND_PROPERTY,
    NodeKind.PRIVATE_PROPERTY,
    NodeKind.TYPE_IDENTIFIER,
    NodeKind.LABEL,
})


class SourceType(Enum):
    """Source kind a grammar profile parses as."""

    MODULE = "module"
    SCRIPT = "script"


class GrammarPlugin(Enum):
    """Syntax extensions a grammar profile may enable."""

    TYPESCRIPT = "typescript"
    JSX = "jsx"


@dataclass(frozen=True)
class GrammarProfile:
    """
    Parser configuration selected from a language hint.

    Attributes:
        name: Profile name (the hint it was registered under)
        source_type: Module or script source kind
        plugins: Enabled syntax extensions
    """

    name: str
    source_type: SourceType = SourceType.MODULE
    plugins: FrozenSet[GrammarPlugin] = frozenset()

    @property
    def allows_jsx(self) -> bool:
        return GrammarPlugin.JSX in self.plugins

    @property
    def allows_typescript(self) -> bool:
        return GrammarPlugin.TYPESCRIPT in self.plugins

    @property
    def grammar(self) -> str:
        """Name of the tree-sitter grammar that implements this profile."""
        if self.allows_typescript:
            return "tsx" if self.allows_jsx else "typescript"
        return "javascript"

    @property
    def is_extended(self) -> bool:
        return bool(self.plugins)


@dataclass
class SyntaxNode:
    """
    A mutable node of the parsed syntax tree.

    Attributes:
        kind: Classification the walker dispatches on
        type: Grammar node type as reported by the parser
        start_byte: Start offset in the UTF-8 source
        end_byte: End offset in the UTF-8 source
        children: Child nodes in document order
        name: Identifier name (redactable leaves only)
        prefix: Text printed before the name (``#`` for private names)
    """

    kind: NodeKind
    type: str
    start_byte: int
    end_byte: int
    children: List["SyntaxNode"] = field(default_factory=list)
    name: Optional[str] = None
    prefix: str = ""

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_redactable(self) -> bool:
        return self.kind in REDACTABLE_KINDS

    def iter_preorder(self) -> Iterator["SyntaxNode"]:
        """Yield this node and its descendants depth-first, parents first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass
class SyntaxTree:
    """
    Parsed document owned by a single redaction request.

    Attributes:
        root: Root node
        source: Original source as UTF-8 bytes
        profile: Grammar profile the source was parsed with
    """

    root: SyntaxNode
    source: bytes
    profile: GrammarProfile

    def iter_nodes(self) -> Iterator[SyntaxNode]:
        return self.root.iter_preorder()

    def identifiers(self) -> List[SyntaxNode]:
        """Return redactable leaves in document order."""
        return [node for node in self.iter_nodes() if node.is_redactable]

    def node_count(self) -> int:
        return sum(1 for _ in self.iter_nodes())


@dataclass
class RedactionResult:
    """
    Result of redacting one source document.

    Attributes:
        redacted_code: Source text with every identifier replaced
        profile: Name of the grammar profile used
        replaced: Number of identifier occurrences replaced
        mapping: Original/substitute pairs in first-seen order (optional)
    """

    redacted_code: str
    profile: str
    replaced: int = 0
    mapping: Optional[List[Tuple[str, str]]] = None

    def mapping_dict(self) -> Dict[str, str]:
        return dict(self.mapping or [])

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for serialization."""
        data: Dict[str, Any] = {"redacted_code": self.redacted_code}
        if self.mapping is not None:
            data["mapping"] = self.mapping_dict()
        return data


@dataclass
class ProcessResult:
    """
    Result of processing a single file.

    Attributes:
        success: Whether processing was successful
        input_path: Path to the input file
        output_path: Path to the output file (if successful)
        mapping_path: Path to the mapping report (if written)
        language: Language hint the file was redacted with
        identifiers_replaced: Number of identifier occurrences replaced
        identifiers_distinct: Number of distinct identifier names
        errors: List of error messages encountered
        warnings: List of warning messages
        processing_time: Time taken to process (in seconds)
    """

    success: bool
    input_path: str
    output_path: Optional[str] = None
    mapping_path: Optional[str] = None
    language: Optional[str] = None
    identifiers_replaced: int = 0
    identifiers_distinct: int = 0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    processing_time: float = 0.0

    def add_error(self, error: str) -> None:
        """Add an error message to the result."""
        self.errors.append(error)
        self.success = False

    def add_warning(self, warning: str) -> None:
        """Add a warning message to the result."""
        self.warnings.append(warning)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return {
            "success": self.success,
            "input_path": self.input_path,
            "output_path": self.output_path,
            "mapping_path": self.mapping_path,
            "language": self.language,
            "identifiers_replaced": self.identifiers_replaced,
            "identifiers_distinct": self.identifiers_distinct,
            "errors": self.errors,
            "warnings": self.warnings,
            "processing_time": self.processing_time,
        }


@dataclass
class MappingReport:
    """
    Side-car report of the identifier mapping used for one file.

    Attributes:
        source_path: File the mapping belongs to
        profile: Grammar profile used
        strategy: Substitute generation strategy
        timestamp: ISO format timestamp of the redaction
        mapping: Original/substitute pairs in first-seen order
    """

    source_path: str
    profile: str
    strategy: str
    timestamp: str
    mapping: List[Tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for serialization."""
        return {
            "source": self.source_path,
            "profile": self.profile,
            "strategy": self.strategy,
            "timestamp": self.timestamp,
            "total_identifiers": len(self.mapping),
            "mapping": dict(self.mapping),
        }
