"""Tests for stss.values and stss.document."""

from stss.document import Comment, Document, Rule
from stss.values import VBool, VDict, VList, VLocale, VNumber, VRef, VText, to_data


class TestValues:
    def test_number_str_int(self):
        assert str(VNumber(10.0)) == "10"

    def test_number_str_float(self):
        assert str(VNumber(1.5)) == "1.5"

    def test_bool_str(self):
        assert str(VBool(True)) == "true"
        assert str(VBool(False)) == "false"

    def test_quoting(self):
        assert VText("red").quoted is True
        for v in (VNumber(1), VBool(True), VRef("Ti.UI.FILL"), VLocale('L("x")'), VList(), VDict()):
            assert v.quoted is False

    def test_to_data(self):
        value = VList([VNumber(1), VText("red"), VDict({"a": VBool(False)})])
        assert to_data(value) == [1, "red", {"a": False}]

    def test_to_data_nested_body(self):
        assert to_data({"font": {"fontSize": VNumber(12)}}) == {"font": {"fontSize": 12}}


class TestRule:
    def test_copy_is_independent(self):
        rule = Rule("A", {"items": VList([VNumber(1)])}, ["items"])
        dup = rule.copy(selector="B")
        dup.body["items"].items.append(VNumber(2))
        dup.unquote.append("x")
        assert dup.selector == "B"
        assert rule.body["items"].items == [VNumber(1)]
        assert rule.unquote == ["items"]

    def test_copy_keeps_selector(self):
        assert Rule("A").copy().selector == "A"


class TestDocument:
    def test_iteration_and_rules(self):
        doc = Document([Comment(" hi "), Rule("A")])
        assert len(doc) == 2
        assert [type(e) for e in doc] == [Comment, Rule]
        assert [r.selector for r in doc.rules] == ["A"]

    def test_to_data(self):
        doc = Document([
            Comment(" c "),
            Rule("A", {"width": VNumber(10)}, ["width"]),
            Rule("B", {"color": VText("red")}),
        ])
        assert doc.to_data() == [
            {"comment": " c "},
            {"selector": "A", "body": {"width": 10}, "unquote": ["width"]},
            {"selector": "B", "body": {"color": "red"}},
        ]
