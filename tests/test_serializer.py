"""Tests for stss.serializer."""

from stss.document import Comment, Document, Rule
from stss.serializer import render_body, render_value, serialize
from stss.values import VBool, VDict, VList, VLocale, VNumber, VRef, VText


def _squash(text):
    return "".join(text.split())


# ---------------------------------------------------------------------------
# render_value
# ---------------------------------------------------------------------------

def test_scalars():
    assert render_value(VNumber(10), 0) == "10"
    assert render_value(VNumber(1.5), 0) == "1.5"
    assert render_value(VBool(True), 0) == "true"
    assert render_value(VText("red"), 0) == '"red"'
    assert render_value(VRef("Ti.UI.FILL"), 0) == "Ti.UI.FILL"

def test_text_escaping():
    assert render_value(VText('say "hi"'), 0) == '"say \\"hi\\""'

def test_bare_text():
    assert render_value(VText("red"), 0, bare=True) == "red"

def test_array_inline():
    assert render_value(VList([VNumber(1), VNumber(2), VText("red")]), 0) == '[1,2,"red"]'

def test_array_of_objects():
    value = VList([VDict({"title": VText("One"), "icon": VRef("Alloy.Globals.icon")}, ["icon"])])
    assert _squash(render_value(value, 0)) == '[{title:"One",icon:Alloy.Globals.icon}]'

def test_locale_unescaped():
    assert render_value(VLocale('L(\\"title\\")'), 0) == 'L("title")'
    assert render_value(VLocale("L('title')"), 0) == "L('title')"


# ---------------------------------------------------------------------------
# render_body
# ---------------------------------------------------------------------------

def test_body_layout():
    body = {"width": VNumber(10), "color": VText("red")}
    assert render_body(body) == '{\n\twidth: 10,\n\tcolor: "red"\n}'

def test_nested_body_indentation():
    body = {"border": {"radius": VNumber(4)}}
    assert render_body(body) == "{\n\tborder: {\n\t\tradius: 4\n\t}\n}"

def test_empty_body():
    assert render_body({}) == "{}"

def test_unquote_only_top_level():
    body = {"name": VText("top"), "inner": {"name": VText("nested")}}
    out = render_body(body, 0, ["name"])
    assert "\tname: top," in out
    assert 'name: "nested"' in out


# ---------------------------------------------------------------------------
# serialize
# ---------------------------------------------------------------------------

def test_serialize_rules():
    doc = Document([
        Rule("Label", {"width": VNumber(10)}, ["width"]),
        Rule("Button", {"enabled": VBool(True)}, ["enabled"]),
    ])
    assert serialize(doc) == '"Label": {\n\twidth: 10\n},\n"Button": {\n\tenabled: true\n}'

def test_serialize_comment():
    doc = Document([Comment(" header "), Rule("A", {"top": VNumber(0)})])
    assert serialize(doc) == '/* header */\n"A": {\n\ttop: 0\n}'

def test_serialize_reference_and_array():
    doc = Document([Rule("A", {
        "fontFamily": VRef("Alloy.Globals.Foo"),
        "shadow": VList([VNumber(1), VNumber(2), VText("red")]),
    }, ["fontFamily", "shadow"])])
    out = serialize(doc)
    assert "fontFamily: Alloy.Globals.Foo," in out
    assert 'shadow: [1,2,"red"]' in out

def test_serialize_empty_document():
    assert serialize(Document()) == ""
