import json

import pytest

from ngupdate.tool.utils import jsonc


def test_loads_strips_comments_and_trailing_commas():
    text = """\ufeff{
      // line comment
      "a": "http://not-a-comment", /* block */
      "b": [1, 2,],
      "c": {"d": "x,}",},
    }"""

    assert jsonc.loads(text) == {"a": "http://not-a-comment", "b": [1, 2], "c": {"d": "x,}"}}


def test_loads_keeps_escaped_quotes():
    assert jsonc.loads('{"a": "say \\"hi\\" // ok"}') == {"a": 'say "hi" // ok'}


def test_loads_raises_on_invalid_json():
    with pytest.raises(json.JSONDecodeError):
        jsonc.loads("{not json}")
