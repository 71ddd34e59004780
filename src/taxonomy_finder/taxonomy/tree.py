"""Merge species lineages into a single taxonomic tree.

Lineages are inserted into a trie keyed by (name, rank): species sharing an
ancestor at the same position share the node. TaxIDs are carried on nodes
for display but never used for matching.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from taxonomy_finder.taxonomy.models import MergedTreeNode, Species

# Characters that force a Newick label to be quoted
NEWICK_SPECIAL_CHARS = re.compile(r"[\s(),:;'\[\]]")


def merge_lineages(species: Iterable[Species]) -> MergedTreeNode:
    """Build one tree from the lineages of several species.

    Args:
        species: Species in insertion order; sibling order follows first appearance

    Returns:
        Synthetic root (empty name) whose descendants are the merged lineages.
        Nodes without children have children=None.
    """
    root = MergedTreeNode(name="")

    for sp in species:
        cursor = root
        last_index = len(sp.lineage) - 1
        for index, entry in enumerate(sp.lineage):
            existing = cursor.find_child(entry.name, entry.rank)
            if existing is not None:
                cursor = existing
                continue
            node = MergedTreeNode(
                name=entry.name,
                rank=entry.rank,
                tax_id=entry.tax_id,
                is_leaf_species=index == last_index,
            )
            if cursor.children is None:
                cursor.children = []
            cursor.children.append(node)
            cursor = node

    return _prune(root)


def _prune(node: MergedTreeNode) -> MergedTreeNode:
    """Replace empty child lists with None, recursively."""
    if not node.children:
        node.children = None
    else:
        node.children = [_prune(child) for child in node.children]
    return node


def count_leaves(node: MergedTreeNode) -> int:
    """Number of leaves below (or at) a node."""
    if not node.children:
        return 1
    return sum(count_leaves(child) for child in node.children)


def tree_depth(node: MergedTreeNode) -> int:
    """Number of levels from a node down to its deepest leaf, inclusive."""
    if not node.children:
        return 1
    return 1 + max(tree_depth(child) for child in node.children)


def to_nested_dict(node: MergedTreeNode) -> dict[str, Any]:
    """Convert a tree into nested dicts (children omitted on leaves)."""
    data: dict[str, Any] = {"name": node.name}
    if node.rank is not None:
        data["rank"] = node.rank
    if node.tax_id is not None:
        data["taxId"] = node.tax_id
    if node.is_leaf_species:
        data["isSpecies"] = True
    if node.children is not None:
        data["children"] = [to_nested_dict(child) for child in node.children]
    return data


def _newick_label(name: str) -> str:
    if not name:
        return ""
    if NEWICK_SPECIAL_CHARS.search(name):
        escaped = name.replace("'", "''")
        return f"'{escaped}'"
    return name


def to_newick(node: MergedTreeNode) -> str:
    """Serialize a tree in Newick format.

    Example:
        >>> to_newick(merge_lineages([ecoli, lacto]))
        "((('Escherichia coli')Proteobacteria,('Lactobacillus acidophilus')Firmicutes)Bacteria);"
    """

    def render(current: MergedTreeNode) -> str:
        label = _newick_label(current.name)
        if not current.children:
            return label
        inner = ",".join(render(child) for child in current.children)
        return f"({inner}){label}"

    return f"{render(node)};"


def render_text(node: MergedTreeNode) -> str:
    """Render a tree as indented text with box-drawing connectors.

    Species leaves are marked with "*"; intermediate nodes show their rank.
    """
    lines: list[str] = []

    def label(current: MergedTreeNode) -> str:
        if current.is_leaf_species:
            return f"{current.name} *"
        if current.rank:
            return f"{current.name} ({current.rank})"
        return current.name

    def walk(current: MergedTreeNode, prefix: str, is_last: bool) -> None:
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{label(current)}")
        children = current.children or []
        child_prefix = prefix + ("    " if is_last else "│   ")
        for i, child in enumerate(children):
            walk(child, child_prefix, i == len(children) - 1)

    # Top-level nodes print flush left
    top_level = (node.children or []) if node.is_root else [node]
    for child in top_level:
        lines.append(label(child))
        grandchildren = child.children or []
        for j, grandchild in enumerate(grandchildren):
            walk(grandchild, "", j == len(grandchildren) - 1)

    return "\n".join(lines)
