"""Tests for grouping tokens into visual rows."""

from conftest import make_token

from scoresheet_extractor.rows import cluster_rows
from scoresheet_extractor.structures import Token


def test_empty_input_gives_no_rows():
    assert cluster_rows([]) == []


def test_tokens_without_box_are_dropped():
    assert cluster_rows([Token("ghost"), Token("boo", None)]) == []


def test_tops_within_tolerance_share_a_row():
    tokens = [
        make_token("c", 100, 50),
        make_token("a", 0, 10),
        make_token("d", 0, 52),
        make_token("b", 100, 12),
    ]
    rows = cluster_rows(tokens, tolerance=15)

    assert len(rows) == 2
    assert [t.box.top for t in rows[0]] == [10, 12]
    assert [t.box.top for t in rows[1]] == [52, 50]
    assert [t.text for t in rows[0]] == ["a", "b"]
    assert [t.text for t in rows[1]] == ["d", "c"]


def test_tolerance_is_anchored_to_first_member():
    # 0 -> 10 joins (|10-0| <= 15); 20 is 20 away from the anchor, so a new row
    tokens = [make_token("a", 0, 0), make_token("b", 50, 10), make_token("c", 100, 20)]
    rows = cluster_rows(tokens, tolerance=15)

    assert [[t.text for t in row] for row in rows] == [["a", "b"], ["c"]]


def test_rows_are_ordered_top_to_bottom_and_left_to_right():
    tokens = [
        make_token("z", 300, 200),
        make_token("y", 10, 100),
        make_token("x", 200, 100),
        make_token("w", 5, 200),
    ]
    rows = cluster_rows(tokens)

    assert [[t.text for t in row] for row in rows] == [["y", "x"], ["w", "z"]]


def test_custom_tolerance():
    tokens = [make_token("a", 0, 0), make_token("b", 50, 25)]
    assert len(cluster_rows(tokens, tolerance=15)) == 2
    assert len(cluster_rows(tokens, tolerance=30)) == 1
