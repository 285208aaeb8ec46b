from typing import List


def find_all_substring_indices(text: str, search: str) -> List[int]:
    """Start offsets of every occurrence of ``search``, overlapping ones included."""
    result = []
    if not search:
        return result
    index = text.find(search)
    while index != -1:
        result.append(index)
        index = text.find(search, index + 1)
    return result
