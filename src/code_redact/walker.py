"""
Tree walker that swaps identifier names for substitutes.

The walk is depth-first and pre-order, which for a parsed document is the
order identifiers appear in the source. That order decides the order in
which substitutes are generated and therefore the order of the mapping.
"""

import logging

from code_redact.models import REDACTABLE_KINDS, SyntaxTree
from code_redact.registry import IdentifierRegistry

logger = logging.getLogger(__name__)


class TreeWalker:
    """
    Rewrites every redactable leaf of a syntax tree in place.

    Lexical scope is not tracked: a name used in two unrelated scopes is one
    logical identifier and receives one substitute. Only ``name`` fields are
    changed; no node is added, removed or moved.
    """

    def redact(self, tree: SyntaxTree, registry: IdentifierRegistry) -> int:
        """
        Replace identifier names in the tree with registry substitutes.

        Args:
            tree: Parsed tree to mutate
            registry: Request-scoped identifier registry

        Returns:
            Number of identifier occurrences replaced
        """
        replaced = 0

        for node in tree.iter_nodes():
            if node.kind not in REDACTABLE_KINDS:
                continue

            name = node.name
            if not isinstance(name, str) or not name:
                logger.debug("Skipping %s node at byte %d with no usable name", node.type, node.start_byte)
                continue

            node.name = registry.resolve(name)
            replaced += 1

        logger.debug("Replaced %d identifier occurrences (%d distinct)", replaced, len(registry))
        return replaced
