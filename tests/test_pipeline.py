from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

import attrgen

INPUT_ELEMENT_LISTING = """\
public external interface HTMLElement { }
public external abstract class HTMLInputElement : HTMLElement {
    var value: String
    var checked: Boolean
    var className: String
}
"""


def _make_generate_config(
    input_path: Path,
    *,
    output_path: Path | None = None,
    root_type: str = "HTMLElement",
    html_only: bool = False,
) -> attrgen.GenerateConfig:
    return attrgen.GenerateConfig(
        input_path=input_path,
        output_path=output_path,
        root_type=root_type,
        html_only=html_only,
    )


def test_t_01_run_generate_end_to_end_to_stdout(
    write_listing: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    config = _make_generate_config(write_listing(INPUT_ELEMENT_LISTING))

    result = attrgen.run_generate(config)

    captured = capsys.readouterr()
    assert captured.out == result.text
    assert " * HTMLInputElement attributes" in captured.out
    assert "domNode.value = value" in captured.out
    assert "domNode.defaultValue = value" in captured.out
    assert "domNode.checked = value" in captured.out
    assert "domNode.defaultChecked = value" in captured.out
    assert "className" not in captured.out
    assert "HTMLElement attributes" not in captured.out.replace(
        "HTMLInputElement attributes", ""
    )
    assert result.section_count == 1
    assert "Parsing:" in captured.err
    assert "Tag attribute accessors generated:" in captured.err


def test_t_02_run_generate_writes_output_file(
    write_listing: Callable[..., Path],
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    output = tmp_path / "generated" / "HtmlTagAttributes.kt"
    config = _make_generate_config(write_listing(INPUT_ELEMENT_LISTING), output_path=output)

    result = attrgen.run_generate(config)

    assert output.read_text(encoding="utf-8") == result.text
    assert capsys.readouterr().out == ""


def test_t_03_run_generate_executes_stages_in_order(
    write_listing: Callable[..., Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    config = _make_generate_config(write_listing(INPUT_ELEMENT_LISTING))
    calls: list[str] = []
    stats = attrgen.ResolveStats(0, 0, 0, 0)

    monkeypatch.setattr(
        attrgen,
        "read_input_lines",
        lambda _path: calls.append("read_input_lines") or [],
    )
    monkeypatch.setattr(
        attrgen,
        "extract_tags",
        lambda _lines, html_only: calls.append("extract_tags") or [],
    )
    monkeypatch.setattr(
        attrgen,
        "resolve_tags",
        lambda _tags, root_type: calls.append("resolve_tags") or ([], stats),
    )
    monkeypatch.setattr(
        attrgen, "emit", lambda _tags: calls.append("emit") or "text\n"
    )
    monkeypatch.setattr(
        attrgen,
        "write_output",
        lambda _text, _path: calls.append("write_output"),
    )

    result = attrgen.run_generate(config)

    assert calls == [
        "read_input_lines",
        "extract_tags",
        "resolve_tags",
        "emit",
        "write_output",
    ]
    assert result.text == "text\n"
    assert result.stats is stats


def test_t_04_run_generate_passes_config_options_through(
    write_listing: Callable[..., Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    config = _make_generate_config(
        write_listing(INPUT_ELEMENT_LISTING), root_type="SVGElement", html_only=True
    )
    seen: dict[str, object] = {}

    def _extract(lines: list[str], html_only: bool) -> list[attrgen.HtmlTag]:
        seen["html_only"] = html_only
        return []

    def _resolve(
        tags: list[attrgen.HtmlTag], root_type: str
    ) -> tuple[list[attrgen.HtmlTag], attrgen.ResolveStats]:
        seen["root_type"] = root_type
        return [], attrgen.ResolveStats(0, 0, 0, 0)

    monkeypatch.setattr(attrgen, "extract_tags", _extract)
    monkeypatch.setattr(attrgen, "resolve_tags", _resolve)
    monkeypatch.setattr(attrgen, "write_output", lambda _text, _path: None)

    attrgen.run_generate(config)

    assert seen == {"html_only": True, "root_type": "SVGElement"}


def test_t_05_run_generate_propagates_extraction_error(
    write_listing: Callable[..., Path],
) -> None:
    config = _make_generate_config(
        write_listing("public external interface HTMLElement {\n    var id: String\n")
    )

    with pytest.raises(attrgen.ExtractionError):
        attrgen.run_generate(config)


def test_t_06_fixture_listing_output(
    fixture_listing: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    result = attrgen.run_generate(_make_generate_config(fixture_listing))
    out = capsys.readouterr().out

    assert result.section_count == 6
    assert "HTMLSpanElement" not in out
    assert "// inherited attributes from supertype HTMLHyperlinkElementUtils" in out
    assert 'fun Tag<HTMLAnchorElement>.href(value: String) = attr("href", value)' in out
    assert 'fun Tag<HTMLAnchorElement>.`as`(value: String) = attr("as", value)' in out
    assert 'fun Tag<HTMLObjectElement>.`object`(value: String) = attr("object", value)' in out
    assert (
        'fun Tag<HTMLElement>.hidden(value: Boolean, trueValue: String = "") '
        '= attr("hidden", value, trueValue)'
    ) in out
    assert (
        'fun Tag<HTMLElement>.textContent(value: String?) = attr("textcontent", value)'
    ) in out
    assert "domNode.defaultValue = value" in out
    assert "className" not in out


def test_t_07_main_generate_path_succeeds(
    fixture_listing: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    output = tmp_path / "out.kt"

    attrgen.main([str(fixture_listing), "--output", str(output)])

    assert output.read_text(encoding="utf-8").startswith("/*\n")
    assert "Total:" in capsys.readouterr().err


def test_t_08_main_reports_malformed_input(
    write_listing: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_listing("public external interface HTMLElement {\n")

    with pytest.raises(SystemExit) as exc_info:
        attrgen.main([str(path)])

    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert "Input error [UNTERMINATED_BLOCK]" in err
    assert "line 1" in err


@pytest.mark.parametrize(
    ("error", "prefix"),
    [
        (OSError("disk full"), "Error: disk full"),
        (RuntimeError("safety limit"), "Internal error: safety limit"),
    ],
)
def test_t_09_main_maps_pipeline_errors_to_exit_1(
    fixture_listing: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    error: Exception,
    prefix: str,
) -> None:
    def _raise(_config: attrgen.GenerateConfig) -> attrgen.GenerationResult:
        raise error

    monkeypatch.setattr(attrgen, "run_generate", _raise)

    with pytest.raises(SystemExit) as exc_info:
        attrgen.main([str(fixture_listing)])

    assert exc_info.value.code == 1
    assert prefix in capsys.readouterr().err
