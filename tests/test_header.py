import random

import pytest
from conftest import data_tokens, header_tokens, make_token

from scoresheet_extractor.config import KNOWN_HEADERS
from scoresheet_extractor.header import locate_header_row, merge_header_columns, player_column_boundary
from scoresheet_extractor.rows import cluster_rows
from scoresheet_extractor.structures import LogicalColumn


def test_header_found_below_title_noise():
    tokens = [make_token("Friday", 10, 0), make_token("Night", 60, 0), make_token("League", 110, 0)]
    tokens += header_tokens(top=40)
    tokens += data_tokens(["Ann"], ["150", "160", "170", "480", "30", "510"], top=80)
    rows = cluster_rows(tokens)

    assert locate_header_row(rows, KNOWN_HEADERS) == 1


def test_header_needs_distinct_labels():
    # three tokens but all the same label
    rows = cluster_rows([make_token("Total", 0, 0), make_token("Tota1", 100, 0), make_token("TOTAL", 200, 0)])
    assert locate_header_row(rows, KNOWN_HEADERS) is None


def test_no_header_row():
    rows = cluster_rows(data_tokens(["Ann"], ["150", "160"], top=0))
    assert locate_header_row(rows, KNOWN_HEADERS) is None


def test_min_labels_is_configurable():
    rows = cluster_rows([make_token("Player", 0, 0), make_token("Total", 300, 0)])
    assert locate_header_row(rows, KNOWN_HEADERS) is None
    assert locate_header_row(rows, KNOWN_HEADERS, min_labels=2) == 0


def test_header_index_independent_of_input_order():
    tokens = [make_token("Week", 10, 0), make_token("12", 80, 0)]
    tokens += header_tokens(top=40)
    tokens += data_tokens(["Bo", "Lee"], ["200", "201", "202", "603", "10", "613"], top=80)
    expected = locate_header_row(cluster_rows(tokens), KNOWN_HEADERS)

    rng = random.Random(7)
    for _ in range(5):
        shuffled = tokens[:]
        rng.shuffle(shuffled)
        assert locate_header_row(cluster_rows(shuffled), KNOWN_HEADERS) == expected == 1


def test_game_and_digit_merge_into_one_column():
    row = [make_token("Game", 100, 0, width=40), make_token("1", 145, 0, width=10), make_token("Scratch", 200, 0, width=60)]
    columns = merge_header_columns(row)

    assert len(columns) == 2
    assert [c.label for c in columns] == ["Game 1", "Scratch"]
    assert columns[0].center_x == (100 + 155) // 2
    assert columns[1].center_x == 230


def test_game_without_digit_stays_single_column():
    row = [make_token("Game", 100, 0), make_token("Total", 200, 0)]
    assert [c.label for c in merge_header_columns(row)] == ["Game", "Total"]


def test_trailing_game_token():
    row = [make_token("Player", 0, 0), make_token("game", 100, 0)]
    assert [c.label for c in merge_header_columns(row)] == ["Player", "game"]


def test_duplicate_labels_keep_first_occurrence():
    row = [
        make_token("Player", 0, 0),
        make_token("Total", 100, 0),
        make_token("Game", 200, 0, width=40), make_token("1", 245, 0, width=10),
        make_token("Total", 300, 0),
    ]
    columns = merge_header_columns(row)

    assert [c.label for c in columns] == ["Player", "Total", "Game 1"]
    assert columns[1].center_x == 115


def test_full_header_columns():
    columns = merge_header_columns(header_tokens())
    assert columns == [
        LogicalColumn("Player", 40),
        LogicalColumn("Game 1", 200),
        LogicalColumn("Game 2", 300),
        LogicalColumn("Game 3", 400),
        LogicalColumn("Scratch", 500),
        LogicalColumn("Hdcp", 600),
        LogicalColumn("Total", 700),
    ]


def test_player_boundary_midpoint():
    columns = [LogicalColumn("Player", 40), LogicalColumn("Game 1", 201)]
    assert player_column_boundary(columns) == 120


def test_player_boundary_fallback_offset():
    assert player_column_boundary([LogicalColumn("Player", 40)]) == 240
    assert player_column_boundary([LogicalColumn("Player", 40)], fallback_offset=50) == 90


def test_player_boundary_requires_columns():
    with pytest.raises(ValueError):
        player_column_boundary([])


def test_non_ascii_digit_does_not_merge():
    row = [make_token("Game", 100, 0, width=40), make_token("١", 145, 0, width=10), make_token("Total", 200, 0)]
    assert [c.label for c in merge_header_columns(row)] == ["Game", "١", "Total"]
