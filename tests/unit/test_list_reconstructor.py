#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for nested list reconstruction."""
import pytest

from md2inline.ast import List, Paragraph, Text, extract_text
from md2inline.options import MarkdownParserOptions
from md2inline.parsers.lists import ListEntry, ListReconstructor
from md2inline.parsers.markdown import MarkdownParser


def entry(level: int, text: str, ordered: bool = False, **kwargs) -> ListEntry:
    return ListEntry(level=level, ordered=ordered, content=[Text(content=text)], **kwargs)


def item_texts(lst: List) -> list[str]:
    return [extract_text(item.children[0].content) for item in lst.items]


@pytest.mark.unit
class TestListReconstructor:
    """Test building nested lists from flat entries."""

    def test_flat_list(self) -> None:
        """Test siblings at one level share a list."""
        [lst] = ListReconstructor().build([entry(0, "a"), entry(0, "b"), entry(0, "c")])

        assert item_texts(lst) == ["a", "b", "c"]

    def test_child_attaches_to_previous_item(self) -> None:
        """Test a deeper entry nests under the preceding shallower one."""
        [lst] = ListReconstructor().build([entry(0, "a"), entry(1, "a.1"), entry(0, "b")])

        assert len(lst.items) == 2
        first = lst.items[0]
        assert isinstance(first.children[0], Paragraph)
        assert isinstance(first.children[1], List)
        assert item_texts(first.children[1]) == ["a.1"]
        assert len(lst.items[1].children) == 1

    def test_level_jump(self) -> None:
        """Test skipping levels attaches to the nearest shallower item."""
        [lst] = ListReconstructor().build([entry(0, "a"), entry(5, "deep"), entry(2, "mid")])

        nested = lst.items[0].children[1]
        assert item_texts(nested) == ["deep", "mid"]

    def test_depth_is_capped(self) -> None:
        """Test entries deeper than max_depth attach at the deepest level."""
        entries = [entry(level, f"l{level}") for level in range(2000)]
        [lst] = ListReconstructor(max_depth=3).build(entries)

        second = lst.items[0].children[1]
        third = second.items[0].children[1]
        assert item_texts(lst) == ["l0"]
        assert item_texts(second) == ["l1"]
        assert len(third.items) == 1998
        assert all(len(item.children) == 1 for item in third.items)

    def test_orphan_indented_first_item(self) -> None:
        """Test an indented first entry becomes a root item."""
        [lst] = ListReconstructor().build([entry(3, "x"), entry(0, "y")])

        assert item_texts(lst) == ["x", "y"]

    def test_kind_change_splits_lists(self) -> None:
        """Test ordered and unordered siblings form separate lists."""
        lists = ListReconstructor().build([entry(0, "a"), entry(0, "1", ordered=True, number=4)])

        assert [lst.ordered for lst in lists] == [False, True]
        assert lists[1].start == 4

    def test_checked_state_kept(self) -> None:
        """Test task state flows onto list items."""
        [lst] = ListReconstructor().build([entry(0, "done", checked=True), entry(0, "todo", checked=False)])

        assert [item.checked for item in lst.items] == [True, False]

    def test_empty_entries(self) -> None:
        """Test no entries give no lists."""
        assert ListReconstructor().build([]) == []


@pytest.mark.unit
class TestListParsing:
    """Test list recognition in the block parser."""

    def test_nested_markdown_list(self) -> None:
        """Test two root items, the first with one child."""
        doc = MarkdownParser().parse("- a\n  - b\n- c")

        [lst] = doc.children
        assert len(lst.items) == 2
        nested = lst.items[0].children[1]
        assert isinstance(nested, List)
        assert len(nested.items) == 1

    def test_custom_indent_width(self) -> None:
        """Test the indent width decides nesting."""
        parser = MarkdownParser(MarkdownParserOptions(list_indent_width=4))
        doc = parser.parse("- a\n  - same level\n    - nested")

        [lst] = doc.children
        assert item_texts(lst) == ["a", "same level"]
        assert isinstance(lst.items[1].children[1], List)

    def test_ordered_start(self) -> None:
        """Test the first number becomes the list start."""
        [lst] = MarkdownParser().parse("3. three\n4. four").children

        assert lst.ordered
        assert lst.start == 3

    def test_task_items(self) -> None:
        """Test - [x] and - [ ] items."""
        [lst] = MarkdownParser().parse("- [x] done\n- [ ] todo\n- plain").children

        assert [item.checked for item in lst.items] == [True, False, None]
        assert item_texts(lst) == ["done", "todo", "plain"]

    def test_blank_line_ends_list(self) -> None:
        """Test a blank line closes the list."""
        doc = MarkdownParser().parse("- a\n\n- b")

        assert len(doc.children) == 2

    def test_text_line_ends_list(self) -> None:
        """Test a non-item line closes the list and starts a paragraph."""
        doc = MarkdownParser().parse("- a\ntext")

        assert isinstance(doc.children[0], List)
        assert isinstance(doc.children[1], Paragraph)
