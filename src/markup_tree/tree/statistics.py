"""Tree-wide statistics for diagnostics."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from markup_tree.tree.element import Element
from markup_tree.tree.node import Node
from markup_tree.tree.text import TextNode


@dataclass
class TreeStatistics:
    """Counts gathered by a single walk over a tree, root included."""

    total_nodes: int = 0
    element_count: int = 0
    text_node_count: int = 0
    max_depth: int = 0
    tag_distribution: Dict[str, int] = field(default_factory=dict)
    max_tree_depth: Optional[int] = None

    @property
    def exceeds_max_depth(self) -> bool:
        """Check whether the tree is deeper than the configured maximum."""
        if self.max_tree_depth is None:
            return False
        return self.max_depth > self.max_tree_depth

    def add_tag(self, tag_name: str) -> None:
        """Count one more node with ``tag_name``."""
        self.tag_distribution[tag_name] = self.tag_distribution.get(tag_name, 0) + 1

    @classmethod
    def collect(cls, root: Node) -> "TreeStatistics":
        """Walk ``root`` in document order and count its nodes.

        Depth is measured from ``root`` (depth 0). Duplicate child entries are
        counted once per entry.
        """
        stats = cls()
        if isinstance(root, Element):
            stats.max_tree_depth = root.context.config.tree.max_tree_depth

        # Explicit stack so deep trees do not hit the recursion limit
        stack: List[Tuple[Node, int]] = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            stats.total_nodes += 1
            stats.max_depth = max(stats.max_depth, depth)
            stats.add_tag(node.tag_name)

            if isinstance(node, TextNode):
                stats.text_node_count += 1
            elif isinstance(node, Element):
                stats.element_count += 1
                if node.has_children:
                    stack.extend(
                        (child, depth + 1) for child in reversed(node.children)
                    )

        return stats

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary representation."""
        return {
            "total_nodes": self.total_nodes,
            "element_count": self.element_count,
            "text_node_count": self.text_node_count,
            "max_depth": self.max_depth,
            "exceeds_max_depth": self.exceeds_max_depth,
            "tag_distribution": dict(self.tag_distribution),
        }
