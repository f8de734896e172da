"""Bookmark tree construction and editing."""

import dataclasses
from collections.abc import Callable, Iterable, Sequence
from typing import Literal

from pdfmark.models import BookmarkNode, HeadingMatch

DEFAULT_TITLE = "New bookmark"


def create_bookmark_node(title: str = DEFAULT_TITLE, page_number: int = 1) -> BookmarkNode:
    """Create an empty bookmark node with a fresh id."""
    return BookmarkNode(title=title, page_number=page_number)


def build_bookmark_tree(headings: Iterable[HeadingMatch]) -> list[BookmarkNode]:
    """
    Build a bookmark forest from headings in document order.

    A stack of (level, node) tracks the open nesting scopes. A heading at the
    same or a shallower level than the top of the stack closes that scope; a
    deeper heading becomes a child of the top node.
    """
    roots: list[BookmarkNode] = []
    stack: list[tuple[int, BookmarkNode]] = []

    for heading in headings:
        node = create_bookmark_node(heading.title, heading.page_number)

        while stack and stack[-1][0] >= heading.level:
            stack.pop()

        if stack:
            stack[-1][1].children.append(node)
        else:
            roots.append(node)

        stack.append((heading.level, node))

    return roots


def count_nodes(tree: Sequence[BookmarkNode]) -> int:
    """Count all nodes in a forest."""
    return sum(1 + count_nodes(node.children) for node in tree)


# Editing helpers. These never mutate their input: they return a new forest
# and reuse every subtree that did not change. When the target id is not
# found the original list object is returned.


def add_sibling(tree: list[BookmarkNode], target_id: str) -> list[BookmarkNode]:
    """Insert a new node right after the node `target_id`."""
    result: list[BookmarkNode] = []
    changed = False
    for node in tree:
        if node.id == target_id:
            result.append(node)
            result.append(create_bookmark_node())
            changed = True
            continue
        children = add_sibling(node.children, target_id)
        if children is not node.children:
            node = dataclasses.replace(node, children=children)
            changed = True
        result.append(node)
    return result if changed else tree


def add_child(tree: list[BookmarkNode], parent_id: str) -> list[BookmarkNode]:
    """Append a new node to the children of `parent_id`."""

    def edit(node: BookmarkNode) -> BookmarkNode:
        return dataclasses.replace(
            node, children=[*node.children, create_bookmark_node()]
        )

    return _map_target(tree, parent_id, edit)


def remove_node(tree: list[BookmarkNode], target_id: str) -> list[BookmarkNode]:
    """Remove the node `target_id` together with its subtree."""
    result: list[BookmarkNode] = []
    changed = False
    for node in tree:
        if node.id == target_id:
            changed = True
            continue
        children = remove_node(node.children, target_id)
        if children is not node.children:
            node = dataclasses.replace(node, children=children)
            changed = True
        result.append(node)
    return result if changed else tree


def update_title(
    tree: list[BookmarkNode], target_id: str, title: str
) -> list[BookmarkNode]:
    return _map_target(
        tree, target_id, lambda node: dataclasses.replace(node, title=title)
    )


def update_page_number(
    tree: list[BookmarkNode], target_id: str, page_number: int
) -> list[BookmarkNode]:
    return _map_target(
        tree,
        target_id,
        lambda node: dataclasses.replace(node, page_number=page_number),
    )


def move_node(
    tree: list[BookmarkNode], target_id: str, direction: Literal["up", "down"]
) -> list[BookmarkNode]:
    """Swap a node with its previous or next sibling."""
    for idx, node in enumerate(tree):
        if node.id == target_id:
            other = idx - 1 if direction == "up" else idx + 1
            if other < 0 or other >= len(tree):
                return tree
            result = list(tree)
            result[idx], result[other] = result[other], result[idx]
            return result

    result = []
    changed = False
    for node in tree:
        children = move_node(node.children, target_id, direction)
        if children is not node.children:
            node = dataclasses.replace(node, children=children)
            changed = True
        result.append(node)
    return result if changed else tree


def _map_target(
    tree: list[BookmarkNode],
    target_id: str,
    edit: Callable[[BookmarkNode], BookmarkNode],
) -> list[BookmarkNode]:
    result: list[BookmarkNode] = []
    changed = False
    for node in tree:
        if node.id == target_id:
            node = edit(node)
            changed = True
        else:
            children = _map_target(node.children, target_id, edit)
            if children is not node.children:
                node = dataclasses.replace(node, children=children)
                changed = True
        result.append(node)
    return result if changed else tree


# Conversion to and from PyMuPDF's flat outline format: [level, title, page]


def flatten_tree(
    tree: Sequence[BookmarkNode], level: int = 1
) -> list[list[int | str]]:
    """Flatten a forest into [level, title, page] rows, depth first."""
    rows: list[list[int | str]] = []
    for node in tree:
        rows.append([level, node.title, node.page_number])
        rows.extend(flatten_tree(node.children, level + 1))
    return rows


def tree_from_toc(toc: Iterable[Sequence]) -> list[BookmarkNode]:
    """Rebuild a forest from [level, title, page, ...] rows."""
    headings = [
        HeadingMatch(title=str(row[1]), level=int(row[0]), page_number=int(row[2]))
        for row in toc
    ]
    return build_bookmark_tree(headings)
