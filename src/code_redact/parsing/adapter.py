"""
Parse/print adapter around tree-sitter.

``parse`` turns source text into a mutable ``SyntaxTree`` whose nodes carry a
closed ``NodeKind`` tag. ``print`` reassembles the original bytes, emitting
the (possibly renamed) identifier leaves in place of the originals. Every
other byte of the input, whitespace and comments included, is reproduced
verbatim.
"""

import logging
import re
from typing import Any, Dict, List, NamedTuple, Set, Tuple

from tree_sitter_language_pack import get_parser

from code_redact.exceptions import ParseError
from code_redact.models import GrammarProfile, NodeKind, SourceType, SyntaxNode, SyntaxTree

logger = logging.getLogger(__name__)

# tree-sitter leaf types reached through the identifier production
IDENTIFIER_TYPES: Dict[str, NodeKind] = {
    "identifier": NodeKind.IDENTIFIER,
    "property_identifier": NodeKind.PROPERTY_IDENTIFIER,
    "shorthand_property_identifier": NodeKind.SHORTHAND_PROPERTY,
    "shorthand_property_identifier_pattern": NodeKind.SHORTHAND_PROPERTY,
    "private_property_identifier": NodeKind.PRIVATE_PROPERTY,
    "type_identifier": NodeKind.TYPE_IDENTIFIER,
    "statement_identifier": NodeKind.LABEL,
}

COMMENT_TYPES = frozenset({"comment", "html_comment"})

# Tag and attribute nodes whose name children are JSX names, not identifiers
JSX_TAG_TYPES = frozenset({
    "jsx_opening_element",
    "jsx_closing_element",
    "jsx_self_closing_element",
    "jsx_attribute",
})
JSX_NAME_TYPES = frozenset({
    "identifier",
    "property_identifier",
    "member_expression",
    "nested_identifier",
    "jsx_namespace_name",
})

MODULE_ONLY_TYPES = frozenset({"import_statement", "export_statement"})
SLOPPY_ONLY_TYPES = frozenset({"with_statement"})

# Reserved in strict mode code, which module source always is
STRICT_RESERVED_WORDS = frozenset({
    "await", "implements", "interface", "let", "package",
    "private", "protected", "public", "static", "yield",
})
BINDING_TYPES = frozenset({
    "identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
})
LEGACY_OCTAL = re.compile(r"^0[0-9]")

FUNCTION_TYPES = frozenset({
    "function_declaration",
    "function_expression",
    "function",
    "generator_function_declaration",
    "generator_function",
    "arrow_function",
    "method_definition",
})
LOOP_TYPES = frozenset({"for_statement", "for_in_statement", "while_statement", "do_statement"})

# Nodes whose direct statements share one lexical scope
BLOCK_SCOPE_TYPES = frozenset({"program", "statement_block", "class_static_block"})

ERROR_SNIPPET_LENGTH = 20


class _Context(NamedTuple):
    """Enclosing constructs that decide where jump statements are legal."""

    in_function: bool = False
    breakable: bool = False
    in_loop: bool = False
    labelled: bool = False


class ParseAdapter:
    """Converts between source text and ``SyntaxTree`` for a grammar profile."""

    def parse(self, text: str, profile: GrammarProfile) -> SyntaxTree:
        """
        Parse source text under a grammar profile.

        Args:
            text: Source code
            profile: Grammar profile selecting the syntax accepted

        Returns:
            SyntaxTree owning the converted nodes

        Raises:
            ParseError: If the text is not valid under the profile
        """
        source = text.encode('utf-8')
        parser = get_parser(profile.grammar)
        ts_tree = parser.parse(source)

        root = self._convert(ts_tree.root_node, source, profile)
        logger.debug("Parsed %d bytes with '%s' profile (%s grammar)", len(source), profile.name, profile.grammar)
        return SyntaxTree(root=root, source=source, profile=profile)

    def print(self, tree: SyntaxTree) -> str:
        """
        Print a syntax tree back to source text.

        Args:
            tree: Tree produced by ``parse``, possibly with renamed identifiers

        Returns:
            Source text
        """
        source = tree.source
        chunks: List[bytes] = []
        cursor = 0

        for node in tree.iter_nodes():
            if not node.is_leaf or node.start_byte < cursor:
                continue

            chunks.append(source[cursor:node.start_byte])
            if node.is_redactable and node.name:
                chunks.append(f"{node.prefix}{node.name}".encode('utf-8'))
            else:
                chunks.append(source[node.start_byte:node.end_byte])
            cursor = node.end_byte

        chunks.append(source[cursor:])
        return b''.join(chunks).decode('utf-8')

    def _convert(self, ts_root: Any, source: bytes, profile: GrammarProfile) -> SyntaxNode:
        """Copy a tree-sitter tree into SyntaxNodes, validating it on the way."""
        root = None
        # (tree-sitter node, parent's child list, inside a JSX name, enclosing context)
        stack: List[Tuple[Any, List[SyntaxNode], bool, _Context]] = [(ts_root, [], False, _Context())]

        while stack:
            ts_node, siblings, in_jsx_name, context = stack.pop()
            self._check_node(ts_node, source, profile, context)

            node = self._make_node(ts_node, source, in_jsx_name)
            siblings.append(node)
            if root is None:
                root = node

            children = ts_node.children
            jsx_tag = ts_node.type in JSX_TAG_TYPES
            child_context = _child_context(ts_node.type, context)
            for child in reversed(children):
                child_in_jsx_name = in_jsx_name or (jsx_tag and child.type in JSX_NAME_TYPES)
                stack.append((child, node.children, child_in_jsx_name, child_context))

        return root

    def _check_node(self, ts_node: Any, source: bytes, profile: GrammarProfile, context: _Context) -> None:
        """Raise ParseError for nodes the profile does not accept."""
        node_type = ts_node.type
        strict = profile.source_type is SourceType.MODULE

        if node_type == "ERROR":
            snippet = source[ts_node.start_byte:ts_node.end_byte][:ERROR_SNIPPET_LENGTH]
            raise ParseError(
                f"Unexpected syntax near {snippet.decode('utf-8', errors='replace')!r}",
                *_position(ts_node),
            )

        if ts_node.is_missing:
            raise ParseError(f"Missing {node_type!r}", *_position(ts_node))

        if node_type.startswith("jsx_") and not profile.allows_jsx:
            raise ParseError(
                f"JSX syntax is not enabled in the '{profile.name}' profile",
                *_position(ts_node),
            )

        if node_type in MODULE_ONLY_TYPES and profile.source_type is SourceType.SCRIPT:
            raise ParseError(
                "'import' and 'export' may appear only in module source",
                *_position(ts_node),
            )

        if strict:
            self._check_strict(ts_node, source)

        if node_type == "return_statement" and not context.in_function:
            raise ParseError("'return' outside of function", *_position(ts_node))

        if node_type in ("break_statement", "continue_statement"):
            keyword = node_type.split('_')[0]
            labelled = any(child.type == "statement_identifier" for child in ts_node.children)
            if labelled:
                allowed = context.labelled and (keyword == "break" or context.in_loop)
            else:
                allowed = context.breakable if keyword == "break" else context.in_loop
            if not allowed:
                raise ParseError(f"Unsyntactic '{keyword}'", *_position(ts_node))

        if node_type in BLOCK_SCOPE_TYPES:
            self._check_declarations(ts_node, source)

    def _check_strict(self, ts_node: Any, source: bytes) -> None:
        """Reject constructs that strict mode code forbids."""
        node_type = ts_node.type

        if node_type in SLOPPY_ONLY_TYPES:
            raise ParseError("'with' is not allowed in strict mode", *_position(ts_node))

        if ts_node.child_count:
            return

        if node_type in BINDING_TYPES:
            text = _text(ts_node, source)
            if text in STRICT_RESERVED_WORDS:
                raise ParseError(f"Unexpected reserved word {text!r} in strict mode", *_position(ts_node))

        if node_type == "number" and LEGACY_OCTAL.match(_text(ts_node, source)):
            raise ParseError("Legacy octal literals are not allowed in strict mode", *_position(ts_node))

    def _check_declarations(self, ts_block: Any, source: bytes) -> None:
        """Reject a let/const/class name declared twice in one block."""
        lexical: Set[str] = set()
        hoisted: Set[str] = set()

        for statement in ts_block.named_children:
            if statement.type == "export_statement":
                statement = statement.child_by_field_name("declaration")
                if statement is None:
                    continue

            is_lexical = statement.type in ("lexical_declaration", "class_declaration")
            for name_node in _declared_names(statement):
                name = _text(name_node, source)
                if name in lexical or (is_lexical and name in hoisted):
                    raise ParseError(f"Identifier {name!r} has already been declared", *_position(name_node))
                (lexical if is_lexical else hoisted).add(name)

    def _make_node(self, ts_node: Any, source: bytes, in_jsx_name: bool) -> SyntaxNode:
        node_type = ts_node.type
        start, end = ts_node.start_byte, ts_node.end_byte

        if node_type in COMMENT_TYPES:
            return SyntaxNode(NodeKind.COMMENT, node_type, start, end)

        if ts_node.child_count:
            kind = NodeKind.JSX_NAME if in_jsx_name else NodeKind.SYNTAX
            return SyntaxNode(kind, node_type, start, end)

        kind = IDENTIFIER_TYPES.get(node_type)
        if kind is None:
            return SyntaxNode(NodeKind.TOKEN, node_type, start, end)
        if in_jsx_name:
            return SyntaxNode(NodeKind.JSX_NAME, node_type, start, end)

        text = source[start:end].decode('utf-8')
        prefix = ""
        if kind is NodeKind.PRIVATE_PROPERTY and text.startswith('#'):
            prefix, text = '#', text[1:]
        return SyntaxNode(kind, node_type, start, end, name=text or None, prefix=prefix)


def _position(ts_node: Any) -> Tuple[int, int]:
    """Return a 1-based line and 0-based column for a tree-sitter node."""
    row, column = ts_node.start_point
    return row + 1, column


def _text(ts_node: Any, source: bytes) -> str:
    return source[ts_node.start_byte:ts_node.end_byte].decode('utf-8')


def _child_context(node_type: str, context: _Context) -> _Context:
    """Return the context the children of a node are parsed in."""
    if node_type in FUNCTION_TYPES:
        return _Context(in_function=True)
    if node_type == "class_static_block":
        return _Context()
    if node_type in LOOP_TYPES:
        return context._replace(breakable=True, in_loop=True)
    if node_type == "switch_statement":
        return context._replace(breakable=True)
    if node_type == "labeled_statement":
        return context._replace(labelled=True)
    return context


def _declared_names(ts_statement: Any) -> List[Any]:
    """Return the simple name nodes a declaration statement binds."""
    if ts_statement.type in ("lexical_declaration", "variable_declaration"):
        names = [
            declarator.child_by_field_name("name")
            for declarator in ts_statement.named_children
            if declarator.type == "variable_declarator"
        ]
    elif ts_statement.type in ("class_declaration", "function_declaration", "generator_function_declaration"):
        names = [ts_statement.child_by_field_name("name")]
    else:
        return []
    return [name for name in names if name is not None and name.type in ("identifier", "type_identifier")]
