"""Build the session lineage forest and flatten it for display.

Structure: root sessions (no resolvable parent) -> sessions branched from them,
nested to any depth.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from sessiontree.constants import (
    CONNECTOR_BLANK,
    CONNECTOR_BRANCH,
    CONNECTOR_CONTINUATION,
    CONNECTOR_LAST,
)
from sessiontree.models import SessionNode

logger = logging.getLogger(__name__)


@dataclass
class TreeNode:
    session: SessionNode
    depth: int
    children: list["TreeNode"] = field(default_factory=list)


@dataclass(frozen=True)
class FlatEntry:
    """One display row: a session plus its precomputed tree prefix."""

    session: SessionNode
    depth: int
    prefix: str
    is_last: bool
    has_children: bool


def _index_by_path(nodes: Iterable[SessionNode]) -> dict[str, SessionNode]:
    """Index nodes by path; a later node replaces an earlier one with the same path."""
    by_path: dict[str, SessionNode] = {}
    for node in nodes:
        if node.path in by_path:
            logger.warning("Duplicate session path %s; keeping the later record", node.path)
        by_path[node.path] = node
    return by_path


def _cycle_members(parent_of: dict[str, str]) -> set[str]:
    """Return paths that lie on a parent-reference cycle.

    `parent_of` maps a path to its resolved parent path. Each chain is walked
    once; a chain that runs back into itself marks the loop part as cyclic.
    """
    cyclic: set[str] = set()
    done: set[str] = set()

    for start in parent_of:
        if start in done:
            continue
        chain: list[str] = []
        position: dict[str, int] = {}
        current: str | None = start
        while current is not None and current not in done:
            if current in position:
                cyclic.update(chain[position[current] :])
                break
            position[current] = len(chain)
            chain.append(current)
            current = parent_of.get(current)
        done.update(chain)

    return cyclic


def build_session_tree(nodes: Sequence[SessionNode]) -> list[TreeNode]:
    """Build the lineage forest.

    Args:
        nodes: Sessions with their resolved parent references

    Returns:
        Root tree nodes, newest modification first. Children are ordered
        oldest creation first. Every distinct input path appears exactly once.
    """
    by_path = _index_by_path(nodes)

    parent_of = {
        path: node.parent_session
        for path, node in by_path.items()
        if node.parent_session and node.parent_session in by_path
    }
    cyclic = _cycle_members(parent_of)
    if cyclic:
        logger.warning("Parent references form a cycle among %d sessions; treating them as roots", len(cyclic))

    roots: list[SessionNode] = []
    children_of: dict[str, list[SessionNode]] = {}
    for path, node in by_path.items():
        parent = parent_of.get(path)
        if parent is None or path in cyclic:
            roots.append(node)
        else:
            children_of.setdefault(parent, []).append(node)

    roots.sort(key=lambda n: n.modified_at, reverse=True)

    visited: set[str] = set()
    tree = [_materialize(root, children_of, visited) for root in roots]
    logger.debug("Built session tree: %d roots, %d sessions", len(tree), len(visited))
    return tree


def _materialize(
    root: SessionNode,
    children_of: dict[str, list[SessionNode]],
    visited: set[str],
) -> TreeNode:
    """Materialize one root and its descendants with an explicit stack."""
    root_node = TreeNode(session=root, depth=0)
    visited.add(root.path)
    stack = [root_node]

    while stack:
        tree_node = stack.pop()
        children = sorted(children_of.get(tree_node.session.path, []), key=lambda n: n.created_at)
        for child in children:
            if child.path in visited:
                continue
            visited.add(child.path)
            child_node = TreeNode(session=child, depth=tree_node.depth + 1)
            tree_node.children.append(child_node)
            stack.append(child_node)

    return root_node


def flatten_tree(roots: Sequence[TreeNode]) -> list[FlatEntry]:
    """Flatten the forest in pre-order with connector prefixes.

    Prefix = one fragment per non-root ancestor ("│  " under an ancestor with
    later siblings, blanks otherwise) + own connector ("└─ " for the final
    sibling, "├─ " otherwise). Roots get an empty prefix.
    """
    result: list[FlatEntry] = []
    # (node, ancestor fragments, is_last)
    stack: list[tuple[TreeNode, tuple[str, ...], bool]] = [
        (root, (), idx == len(roots) - 1) for idx, root in reversed(list(enumerate(roots)))
    ]

    while stack:
        node, fragments, is_last = stack.pop()
        if node.depth > 0:
            prefix = "".join(fragments) + (CONNECTOR_LAST if is_last else CONNECTOR_BRANCH)
        else:
            prefix = ""

        result.append(
            FlatEntry(
                session=node.session,
                depth=node.depth,
                prefix=prefix,
                is_last=is_last,
                has_children=bool(node.children),
            )
        )

        child_fragments = fragments
        if node.depth > 0:
            child_fragments = fragments + (CONNECTOR_BLANK if is_last else CONNECTOR_CONTINUATION,)

        last_idx = len(node.children) - 1
        for idx in range(last_idx, -1, -1):
            stack.append((node.children[idx], child_fragments, idx == last_idx))

    return result
