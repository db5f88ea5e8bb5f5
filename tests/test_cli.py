from pathlib import Path

import pytest

from NoteMark import ConfigError
from NoteMark.cli import main


def test_cli_writes_html_next_to_input(tmp_path: Path):
    source = tmp_path / "notes.md"
    source.write_text("# Title\n\nBody *text*\n", encoding="utf-8")
    main([str(source)])
    output = tmp_path / "notes.html"
    assert output.read_text(encoding="utf-8") == "<h1>Title</h1><p>Body <i>text</i></p>"


def test_cli_output_directory(tmp_path: Path):
    source = tmp_path / "notes.md"
    source.write_text("text", encoding="utf-8")
    out_dir = tmp_path / "site"
    out_dir.mkdir()
    main([str(source), "-o", str(out_dir)])
    assert (out_dir / "notes.html").read_text(encoding="utf-8") == "<p>text</p>"


def test_cli_creates_missing_parent_dirs(tmp_path: Path):
    source = tmp_path / "notes.md"
    source.write_text("text", encoding="utf-8")
    target = tmp_path / "a" / "b" / "page.html"
    main([str(source), "--output", str(target)])
    assert target.exists()


def test_cli_toc_and_config(tmp_path: Path):
    source = tmp_path / "doc.md"
    source.write_text("# One\n## Two\n", encoding="utf-8")
    config = tmp_path / "options.yaml"
    config.write_text("pretty: true\n", encoding="utf-8")
    main([str(source), "--toc", "--config", str(config)])
    html = (tmp_path / "doc.html").read_text(encoding="utf-8")
    assert html == (
        '<ul><li><a href="#One">One</a><ul><li><a href="#Two">Two</a></li></ul></li></ul>\n'
        '<h1 id="One">One</h1>\n<h2 id="Two">Two</h2>'
    )


def test_cli_missing_input(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        main([str(tmp_path / "missing.md")])


def test_cli_bad_config(tmp_path: Path):
    source = tmp_path / "doc.md"
    source.write_text("x", encoding="utf-8")
    config = tmp_path / "options.yaml"
    config.write_text("colour: red\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        main([str(source), "-c", str(config)])
