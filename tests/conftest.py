"""Shared fixtures: a synthetic score sheet laid out on a 100px column grid."""

import pytest

from scoresheet_extractor.structures import BBox, Token


def make_token(text, left, top, width=30, height=20):
    return Token(text=text, box=BBox(left, top, left + width, top + height))


def header_tokens(top=0):
    """Player | Game 1 | Game 2 | Game 3 | Scratch | Hdcp | Total, centered at 40, 200, ..., 700."""
    return [
        make_token("Player", 10, top, width=60),
        make_token("Game", 170, top, width=45), make_token("1", 220, top, width=10),
        make_token("Game", 270, top, width=45), make_token("2", 320, top, width=10),
        make_token("Game", 370, top, width=45), make_token("3", 420, top, width=10),
        make_token("Scratch", 465, top, width=70),
        make_token("Hdcp", 580, top, width=40),
        make_token("Total", 680, top, width=40),
    ]


def data_tokens(name_parts, values, top):
    """One player row; values are placed under the column centers 200..700."""
    tokens = []
    left = 10
    for part in name_parts:
        tokens.append(make_token(part, left, top, width=30))
        left += 35
    for center, value in zip((200, 300, 400, 500, 600, 700), values):
        if value:
            tokens.append(make_token(value, center - 15, top, width=30))
    return tokens


@pytest.fixture
def sheet_tokens():
    return header_tokens(0) + data_tokens(["J.", "Smith"], ["180", "210", "190", "580", "20", "600"], 30)
