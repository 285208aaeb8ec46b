from ngupdate.migrations.html import (
    find_inputs_on_element_with_attr,
    find_inputs_on_element_with_tag,
    find_outputs_on_element_with_attr,
    find_outputs_on_element_with_tag,
)
from ngupdate.migrations.html.elements import (
    find_attribute_on_element_with_attrs,
    find_attribute_on_element_with_tag,
    parse_elements,
)
from ngupdate.migrations.literal import find_all_substring_indices


def test_parse_elements_records_attribute_offsets():
    html = '<div class="a">\n  <span [cdkFoo]="x" (bar)="y()" baz></span>\n</div>'

    div, span = parse_elements(html)

    assert div.tag_name == "div"
    assert div.attrs == {"class": html.index("class")}
    assert span.attrs == {
        "[cdkfoo]": html.index("[cdkFoo]"),
        "(bar)": html.index("(bar)"),
        "baz": html.index("baz"),
    }


def test_attribute_values_with_angle_brackets():
    html = '<p [hidden]="a > b" title=\'x\' data-y=z></p>'

    [p] = parse_elements(html)

    assert list(p.attrs) == ["[hidden]", "title", "data-y"]
    assert p.attrs["data-y"] == html.index("data-y")


def test_find_attribute_on_element_with_tag_is_case_insensitive():
    html = '<MAT-ICON color="a"></MAT-ICON><b color="c"></b>'

    assert find_attribute_on_element_with_tag(html, "color", ["mat-icon"]) == [
        html.index("color")
    ]


def test_find_attribute_on_element_with_attrs():
    html = '<div cdkConnectedOverlay origin="a"></div><div origin="b"></div>'

    assert find_attribute_on_element_with_attrs(
        html, "origin", ["cdkConnectedOverlay"]
    ) == [html.index("origin")]


def test_inputs_cover_plain_and_bound_forms():
    html = (
        '<ng-template cdkConnectedOverlay origin="a" [positions]="p"></ng-template>'
        '<x-panel [origin]="b"></x-panel>'
    )

    by_attr = find_inputs_on_element_with_attr(
        html, "positions", ["cdkConnectedOverlay"]
    )
    by_tag = find_inputs_on_element_with_tag(html, "origin", ["x-panel"])

    assert by_attr == [html.index("positions")]
    assert by_tag == [html.index("origin", html.index("<x-panel"))]


def test_outputs_point_at_the_name():
    html = '<button cdkCopyToClipboard (copied)="done()"></button><x-a (copied)="b"></x-a>'

    assert find_outputs_on_element_with_attr(html, "copied", ["cdkCopyToClipboard"]) == [
        html.index("copied")
    ]
    assert find_outputs_on_element_with_tag(html, "copied", ["x-a"]) == [
        html.index("copied", html.index("<x-a"))
    ]


def test_find_all_substring_indices_includes_overlaps():
    assert find_all_substring_indices("aaaa", "aa") == [0, 1, 2]
    assert find_all_substring_indices("abc", "") == []
    assert find_all_substring_indices("abc", "x") == []
