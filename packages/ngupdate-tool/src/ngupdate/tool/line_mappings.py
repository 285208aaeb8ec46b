from dataclasses import dataclass
from typing import List

LF = "\n"
CR = "\r"
LINE_SEPARATOR = "\u2028"
PARAGRAPH_SEPARATOR = "\u2029"


@dataclass(frozen=True)
class LineAndCharacter:
    """Zero-based line and character of a position."""

    line: int
    character: int


def compute_line_starts_map(text: str) -> List[int]:
    """
    Returns the offset each line starts at. CR, LF, CRLF, U+2028 and U+2029
    all break lines; the text length is appended as a closing entry.
    """
    result = [0]
    pos = 0
    length = len(text)
    while pos < length:
        char = text[pos]
        pos += 1
        if char == CR:
            if pos < length and text[pos] == LF:
                pos += 1
            result.append(pos)
        elif char in (LF, LINE_SEPARATOR, PARAGRAPH_SEPARATOR):
            result.append(pos)
    result.append(pos)
    return result


def get_line_and_character_from_position(
    line_starts: List[int], position: int
) -> LineAndCharacter:
    """
    Maps an offset to a line and character. The closing entry of
    ``line_starts`` is never a line of its own, so the end of text without a
    trailing line break stays on the last line.
    """
    line = _find_closest_line_start(position, line_starts)
    return LineAndCharacter(line=line, character=position - line_starts[line])


def _find_closest_line_start(position: int, line_starts: List[int]) -> int:
    # Greatest index whose start is <= position, ignoring the closing entry.
    low = 0
    high = max(len(line_starts) - 2, 0)
    while low <= high:
        mid = (low + high) // 2
        value = line_starts[mid]
        if value == position:
            return mid
        if position > value:
            low = mid + 1
        else:
            high = mid - 1
    return max(low - 1, 0)
