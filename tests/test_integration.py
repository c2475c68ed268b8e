"""End-to-end conversion tests (STSS -> TSS)."""

import pytest

from stss import (
    STAGES,
    CompileError,
    ImportNotFoundError,
    InputError,
    ShorthandFileMissingError,
    convert,
    render,
    render_many,
)


BASIC = """\
Label {
	width: 10;
	enabled: true;
	font-family: Alloy.Globals.Foo;
	size: 12dp;
}
"""


# ---------------------------------------------------------------------------
# convert
# ---------------------------------------------------------------------------

def test_basic_values():
    tss = convert(BASIC)
    assert tss.startswith('"Label": {')
    assert "\twidth: 10," in tss
    assert "\tenabled: true," in tss
    assert "\tfontFamily: Alloy.Globals.Foo," in tss
    assert '\tsize: "12dp"' in tss
    assert not tss.endswith(",\n")

def test_nested_properties():
    tss = convert("Label {\n\tfont: {\n\t\tsize: 12dp;\n\t\tweight: bold;\n\t}\n}")
    assert '\tfont: {\n\t\tfontSize: "12dp",\n\t\tfontWeight: "bold"\n\t}' in tss

def test_shorthand_values():
    tss = convert("View {\n\twidth: fill;\n\ttext-align: center;\n}")
    assert "\twidth: Ti.UI.FILL," in tss
    assert "\ttextAlign: Ti.UI.TEXT_ALIGNMENT_CENTER" in tss

def test_hex_color_with_alpha():
    tss = convert("View { background-color: #ff00ff00; }")
    assert 'backgroundColor: "#ff00ff00"' in tss

def test_locale_call():
    tss = convert('Label { text: L("title"); }')
    assert 'text: L("title")' in tss

def test_multiple_selectors():
    tss = convert("A, B { top: 0; }")
    assert '"A": {' in tss
    assert '"B": {' in tss

def test_media_query():
    tss = convert("@media ios {\n\tLabel { top: 0; }\n}")
    assert '"Label[platform=ios]": {' in tss

def test_nested_selectors():
    tss = convert("Window {\n\tLabel { top: 0; }\n}")
    assert '"Window Label": {' in tss

def test_selector_condition_colon_form():
    tss = convert("Label[platform:ios] { width: 10; }")
    assert tss == '"Label[platform=ios]": {\n\twidth: 10\n}'

def test_selector_conditions_split():
    tss = convert("Label[platform=ios formFactor=tablet] { width: 10; }")
    assert '"Label[platform=ios][formFactor=tablet]": {' in tss

def test_overwritten_value_requoted():
    tss = convert("Label { color: Ti.UI.FILL; color: 'red'; }")
    assert '\tcolor: "red"' in tss

def test_dotted_words_single_string():
    tss = convert("Label { x: a.b c.d; }")
    assert '\tx: "a.b c.d"' in tss

def test_array_value():
    tss = convert("Label { shadow: [1, 2, red]; }")
    assert 'shadow: [1,2,"red"]' in tss
    assert "stss-array" not in tss

def test_stage_notifications():
    seen = []
    convert(BASIC, on_stage=lambda stage, text: seen.append(stage))
    assert seen == list(STAGES)

def test_imports_inlined_before_encoding(tmp_path):
    (tmp_path / "base.stss").write_text("$main: red;\nButton { background-color: $main; }\n", encoding="utf-8")
    main = tmp_path / "app.stss"
    main.write_text('@import "base";\nLabel { color: $main; }\n', encoding="utf-8")
    tss = convert(file=str(main))
    assert 'backgroundColor: "red"' in tss
    assert 'color: "red"' in tss

def test_missing_import():
    with pytest.raises(ImportNotFoundError) as info:
        convert('@import "nothere";')
    assert info.value.filename == "nothere"

def test_no_input():
    with pytest.raises(InputError):
        convert()

def test_missing_input_file(tmp_path):
    with pytest.raises(InputError):
        convert(file=str(tmp_path / "nope.stss"))

def test_missing_shorthand_file(tmp_path):
    with pytest.raises(ShorthandFileMissingError):
        convert(BASIC, shorthand_file=str(tmp_path / "nope.json"))

def test_user_shorthand_file(tmp_path):
    sh = tmp_path / "sh.json"
    sh.write_text('{"propertyValues": {"width": {"fill": "Alloy.Globals.full"}}}', encoding="utf-8")
    tss = convert("View { width: fill; }", shorthand_file=str(sh))
    assert "width: Alloy.Globals.full" in tss

def test_compile_error():
    with pytest.raises(CompileError):
        convert("Label { width: $undefined; }")


# ---------------------------------------------------------------------------
# render (callback interface)
# ---------------------------------------------------------------------------

def test_render_success_returns_text():
    results = []
    render(data=BASIC, success=results.append, error=pytest.fail)
    assert results[0].startswith('"Label"')

def test_render_writes_out_file(tmp_path):
    out = tmp_path / "app.tss"
    results = []
    render(data=BASIC, out_file=str(out), success=results.append, error=pytest.fail)
    assert results == [str(out)]
    assert out.read_text(encoding="utf-8").startswith('"Label"')

def test_render_error_no_partial_write(tmp_path):
    out = tmp_path / "app.tss"
    errors = []
    render(data='@import "nothere";', out_file=str(out), success=pytest.fail, error=errors.append)
    assert isinstance(errors[0], ImportNotFoundError)
    assert not out.exists()

def test_render_without_error_callback_raises():
    with pytest.raises(InputError):
        render()


# ---------------------------------------------------------------------------
# render_many
# ---------------------------------------------------------------------------

def test_render_many(tmp_path):
    files = []
    for i in range(4):
        path = tmp_path / f"f{i}.stss"
        path.write_text(f"L{i} {{ shadow: [{i}, {i + 1}]; }}\n", encoding="utf-8")
        files.append(str(path))
    results = render_many(files)
    for i, f in enumerate(files):
        assert f'"L{i}": {{' in results[f]
        assert f"shadow: [{i},{i + 1}]" in results[f]
