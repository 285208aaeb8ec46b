from ngupdate.tool.line_mappings import (
    LineAndCharacter,
    compute_line_starts_map,
    get_line_and_character_from_position,
)


def test_line_starts_handle_every_line_break_kind():
    assert compute_line_starts_map("a\nb\r\nc\rd\u2028e\u2029f") == [
        0,
        2,
        5,
        7,
        9,
        11,
        12,
    ]


def test_line_starts_of_empty_text():
    assert compute_line_starts_map("") == [0, 0]


def test_position_after_mixed_line_breaks():
    text = "a\nb\r\nc"
    line_starts = compute_line_starts_map(text)

    position = get_line_and_character_from_position(line_starts, text.index("c"))

    assert position == LineAndCharacter(line=2, character=0)


def test_position_inside_a_line():
    text = "first line\nsecond line"
    line_starts = compute_line_starts_map(text)

    position = get_line_and_character_from_position(
        line_starts, text.index("line", 11)
    )

    assert position == LineAndCharacter(line=1, character=7)


def test_position_at_start_of_text():
    line_starts = compute_line_starts_map("abc\ndef")
    assert get_line_and_character_from_position(line_starts, 0) == LineAndCharacter(
        0, 0
    )


def test_end_of_text_stays_on_last_line():
    line_starts = compute_line_starts_map("ab")

    assert get_line_and_character_from_position(line_starts, 2) == LineAndCharacter(
        line=0, character=2
    )


def test_end_of_text_after_trailing_newline_is_an_empty_line():
    line_starts = compute_line_starts_map("ab\n")

    assert get_line_and_character_from_position(line_starts, 3) == LineAndCharacter(
        line=1, character=0
    )
