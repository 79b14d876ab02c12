"""Tests for the generate CLI."""

import json
from unittest.mock import patch

import pytest

from conftest import FakeGemini
from generate import main, render_text
from gist.models import ContentType, Framework, GistResult
from gist.schemas import ArgumentStructure, StoryStructure, SummaryLayer


def _make_gist(structure=None, framework=Framework.ARGUMENT) -> GistResult:
    if structure is None:
        structure = ArgumentStructure(
            thesis="Bikes beat cars downtown.",
            evidence=["Less congestion", "Cheaper infrastructure"],
            counterArgument="Winters are hard.",
            synthesis="Build covered lanes.",
        )
    return GistResult(
        source_type=ContentType.ARTICLE,
        source_url="https://example.com/bikes",
        title="Bikes Downtown",
        framework=framework,
        core="Bikes move more people per lane than cars.",
        layers=tuple(SummaryLayer(depth=i, title=f"Layer {i}", content=f"Detail {i}") for i in range(4)),
        structure=structure,
        counter_argument="Cars carry goods.",
        steelman="Every lane of bikes frees road for deliveries.",
        word_count=1234,
    )


def test_render_text_argument():
    text = render_text(_make_gist())
    assert "Bikes Downtown" in text
    assert "article · 1,234 words · argument format" in text
    assert "https://example.com/bikes" in text
    assert "ARGUMENT" in text
    assert "- Less congestion" in text
    assert "Winters are hard." in text
    assert "COUNTER-ARGUMENT" in text
    assert "Cars carry goods." in text
    assert "STEELMAN" in text
    for i in range(4):
        assert f"[{i}] LAYER {i}" in text


def test_render_text_story():
    story = StoryStructure(situation="Before.", complication="Trouble.", question="Now what?", resolution="After.")
    text = render_text(_make_gist(structure=story, framework=Framework.STORY))
    assert "STORY" in text
    assert "Situation:" in text
    assert "Now what?" in text
    assert "ARGUMENT" not in text.replace("COUNTER-ARGUMENT", "")


def test_main_text_prints_json(capsys):
    fake = FakeGemini()
    with patch("gist.summarizer.get_client", return_value=fake):
        main(["--text", "Some essay about bikes and cars.", "--json"])

    data = json.loads(capsys.readouterr().out)
    assert data["sourceType"] == "text"
    assert len(data["layers"]) == 4


def test_main_reads_file(tmp_path, capsys):
    path = tmp_path / "essay.txt"
    path.write_text("An essay stored on disk.", encoding="utf-8")
    fake = FakeGemini()
    with patch("gist.summarizer.get_client", return_value=fake):
        main(["--file", str(path)])

    out = capsys.readouterr().out
    assert "Pasted Text" in out
    assert "STEELMAN" in out
    assert "An essay stored on disk." in fake.prompt_for("core")


def test_main_missing_file_exits_1(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main(["--file", str(tmp_path / "missing.txt")])
    assert exc_info.value.code == 1


def test_main_generation_failure_exits_1():
    fake = FakeGemini(fail_on={"core"})
    with patch("gist.summarizer.get_client", return_value=fake):
        with pytest.raises(SystemExit) as exc_info:
            main(["--text", "Some essay."])
    assert exc_info.value.code == 1


def test_main_requires_a_source():
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2
