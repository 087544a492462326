import json

from inline_snapshot import snapshot

from jsondoc import StyleLookup, html_from_document, render

from . import resources
from .helpers import object_schema

_BARE = StyleLookup.from_theme({"plain": {}, "styles": []})


def _person_html(**kwargs: object) -> str:
    document = render(json.loads(resources.PERSON_SCHEMA.read_text()), active_id="role")
    return html_from_document(document, **kwargs)  # type: ignore[arg-type]


def test_documented_section_markup() -> None:
    schema = object_schema(a={"type": "string", "title": "A & B", "default": "<x>"})
    assert html_from_document(render(schema), styles=_BARE) == snapshot("""\
<div class="rjd-container" style="padding: 1rem 2rem; padding-top: 2rem; white-space: pre">
<div style="margin-top: -1rem; margin-left: 0px">
<div style="margin-left: 0px; white-space: nowrap; text-overflow: ellipsis; overflow: hidden"></div>
</div>
<div style="margin-top: -1rem; margin-left: 0px">
<div style="position: relative; margin: 1rem -1rem; padding: 1rem">
<h3 id="a" style="position: absolute; display: block; margin-top: -2rem; width: 100%; font-size: 0px; user-select: none">a</h3>
<div class="rjd-annotation" style="margin-bottom: 1rem; border-radius: var(--ifm-pre-background, 0.25rem); padding: 1rem; white-space: normal"><div style="margin-top: 0">A &amp; B</div></div>
<div style="margin-left: 0px; white-space: nowrap; text-overflow: ellipsis; overflow: hidden"><a href="#a"><span>a</span></a><span>:</span> <span>&quot;&lt;x&gt;&quot;</span><span>,</span></div>
<div style="margin-left: 0px; white-space: nowrap; text-overflow: ellipsis; overflow: hidden"></div>
</div>
</div>
</div>\
""")


def test_default_theme_styles() -> None:
    output = _person_html()
    assert output.startswith(
        '<div class="rjd-container" style="padding: 1rem 2rem; padding-top: 2rem;'
        ' white-space: pre; color: #d4d4d4; background-color: #1e1e1e">'
    )
    assert '<a href="#name"><span style="color: #9cdcfe">name</span></a>' in output
    assert '<span style="color: #b5cea8">36</span>' in output
    assert (
        '<span style="color: #ffffff">See</span>'
        ' <a href="#address.zip"><span style="color: #9cdcfe">address.zip</span></a>'
    ) in output


def test_anchors_and_active_header() -> None:
    output = _person_html()
    for anchor in ("name", "role", "address", "address.zip"):
        assert f'<h3 id="{anchor}"' in output
    assert output.count('class="rjd-annotation"') == 4
    active = (
        "position: relative; margin: 1rem -1rem; padding: 1rem;"
        " background-color: #264f78"
    )
    assert output.count(active) == 1


def test_nested_section_offset() -> None:
    output = _person_html(indent_size=10)
    assert '<div style="margin-top: -1rem; margin-left: 10px">' in output


def test_custom_link_and_description() -> None:
    output = _person_html(
        link=lambda href, inner: f'<Link to="{href}">{inner}</Link>',
        describe=str.upper,
    )
    assert '<Link to="#name">' in output
    assert "<a href" not in output
    assert "FULL NAME\n\nAS WRITTEN ON THE PASSPORT." in output


def test_theme_extras() -> None:
    styles = StyleLookup.from_theme(
        {
            "plain": {},
            "styles": [{"types": ["attr-name"], "style": {"color": "red"}}],
            "extra": {
                "identifier": {"fontWeight": 700},
                "section": {"lineHeight": 1.5},
                "container": {"padding": 0},
            },
        }
    )
    output = html_from_document(
        render(object_schema(a={"type": "boolean", "default": False})), styles=styles
    )
    assert '<span style="color: red; font-weight: 700">a</span>' in output
    assert "overflow: hidden; line-height: 1.5" in output
    assert 'style="padding: 0px; padding-top: 2rem; white-space: pre"' in output


def test_repeated_sections_have_a_single_anchor() -> None:
    schema = object_schema(
        people={
            "type": "array",
            "items": object_schema(name={"type": "string", "title": "Name"}),
            "exampleItems": [{"name": "a"}, {"name": "b"}],
        }
    )
    output = html_from_document(render(schema), styles=_BARE)
    assert output.count('id="people.name"') == 1
    assert output.count("<h3") == 1
    assert output.count('class="rjd-annotation"') == 2
