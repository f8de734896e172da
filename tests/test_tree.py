"""Tests for bookmark tree building and editing."""

from pdfmark.models import BookmarkNode, HeadingMatch
from pdfmark.tree import (
    add_child,
    add_sibling,
    build_bookmark_tree,
    count_nodes,
    create_bookmark_node,
    flatten_tree,
    move_node,
    remove_node,
    tree_from_toc,
    update_page_number,
    update_title,
)


def _shape(tree: list[BookmarkNode]) -> list:
    """Titles, pages and nesting without ids."""
    return [(n.title, n.page_number, _shape(n.children)) for n in tree]


def _sample_tree() -> list[BookmarkNode]:
    return build_bookmark_tree(
        [
            HeadingMatch("Ch1", 1, 1),
            HeadingMatch("1.1", 2, 2),
            HeadingMatch("1.2", 2, 3),
            HeadingMatch("Ch2", 1, 4),
        ]
    )


class TestBuildBookmarkTree:
    """Tests for build_bookmark_tree."""

    def test_nesting(self) -> None:
        tree = _sample_tree()
        assert _shape(tree) == [
            ("Ch1", 1, [("1.1", 2, []), ("1.2", 3, [])]),
            ("Ch2", 4, []),
        ]

    def test_empty(self) -> None:
        assert build_bookmark_tree([]) == []

    def test_shallower_heading_closes_deeper_scopes(self) -> None:
        tree = build_bookmark_tree(
            [
                HeadingMatch("Ch1", 1, 1),
                HeadingMatch("1.1", 2, 1),
                HeadingMatch("1.1.1", 3, 2),
                HeadingMatch("1.2", 2, 3),
                HeadingMatch("1.2.1", 3, 3),
            ]
        )
        assert _shape(tree) == [
            (
                "Ch1",
                1,
                [("1.1", 1, [("1.1.1", 2, [])]), ("1.2", 3, [("1.2.1", 3, [])])],
            )
        ]

    def test_leading_deep_headings_become_roots(self) -> None:
        tree = build_bookmark_tree(
            [
                HeadingMatch("2.3", 2, 1),
                HeadingMatch("2.3.1", 3, 1),
                HeadingMatch("Ch3", 1, 2),
                HeadingMatch("3.1.1", 3, 3),
            ]
        )
        assert _shape(tree) == [
            ("2.3", 1, [("2.3.1", 1, [])]),
            ("Ch3", 2, [("3.1.1", 3, [])]),
        ]

    def test_unique_ids(self) -> None:
        tree = _sample_tree()
        ids = _all_ids(tree)
        assert len(ids) == len(set(ids)) == 4

    def test_identical_input_identical_shape(self) -> None:
        assert _shape(_sample_tree()) == _shape(_sample_tree())


def _all_ids(tree: list[BookmarkNode]) -> list[str]:
    ids = []
    for node in tree:
        ids.append(node.id)
        ids.extend(_all_ids(node.children))
    return ids


class TestCountNodes:
    def test_counts_all_levels(self) -> None:
        assert count_nodes(_sample_tree()) == 4
        assert count_nodes([]) == 0


class TestEditing:
    """Tests for the structural editing helpers."""

    def test_add_sibling(self) -> None:
        tree = _sample_tree()
        target = tree[0].children[0]
        updated = add_sibling(tree, target.id)
        assert [c.title for c in updated[0].children] == ["1.1", "New bookmark", "1.2"]
        # Input untouched, unaffected subtree shared
        assert len(tree[0].children) == 2
        assert updated[1] is tree[1]

    def test_add_child(self) -> None:
        tree = _sample_tree()
        updated = add_child(tree, tree[1].id)
        assert [c.title for c in updated[1].children] == ["New bookmark"]
        assert tree[1].children == []
        assert updated[1].id == tree[1].id

    def test_remove_node_with_subtree(self) -> None:
        tree = _sample_tree()
        updated = remove_node(tree, tree[0].id)
        assert _shape(updated) == [("Ch2", 4, [])]
        assert count_nodes(tree) == 4

    def test_remove_nested(self) -> None:
        tree = _sample_tree()
        updated = remove_node(tree, tree[0].children[1].id)
        assert [c.title for c in updated[0].children] == ["1.1"]

    def test_update_title_and_page(self) -> None:
        tree = _sample_tree()
        target_id = tree[0].children[1].id
        updated = update_page_number(update_title(tree, target_id, "Scope"), target_id, 9)
        assert updated[0].children[1].title == "Scope"
        assert updated[0].children[1].page_number == 9
        assert tree[0].children[1].title == "1.2"

    def test_move_node(self) -> None:
        tree = _sample_tree()
        down = move_node(tree, tree[0].children[0].id, "down")
        assert [c.title for c in down[0].children] == ["1.2", "1.1"]
        up = move_node(tree, tree[1].id, "up")
        assert [n.title for n in up] == ["Ch2", "Ch1"]

    def test_move_past_edge_is_noop(self) -> None:
        tree = _sample_tree()
        assert move_node(tree, tree[0].id, "up") is tree
        assert move_node(tree, tree[1].id, "down") is tree

    def test_unknown_id_returns_same_tree(self) -> None:
        tree = _sample_tree()
        assert add_sibling(tree, "missing") is tree
        assert add_child(tree, "missing") is tree
        assert remove_node(tree, "missing") is tree
        assert update_title(tree, "missing", "x") is tree
        assert move_node(tree, "missing", "up") is tree

    def test_create_bookmark_node(self) -> None:
        node = create_bookmark_node()
        assert node.title == "New bookmark"
        assert node.page_number == 1
        assert node.children == []
        assert create_bookmark_node().id != node.id


class TestTocConversion:
    """Tests for conversion to and from PyMuPDF's outline rows."""

    def test_flatten(self) -> None:
        assert flatten_tree(_sample_tree()) == [
            [1, "Ch1", 1],
            [2, "1.1", 2],
            [2, "1.2", 3],
            [1, "Ch2", 4],
        ]

    def test_tree_from_toc(self) -> None:
        rows = flatten_tree(_sample_tree())
        assert _shape(tree_from_toc(rows)) == _shape(_sample_tree())
