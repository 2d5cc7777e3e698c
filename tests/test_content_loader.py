"""Tests for loading learn lines and translations from YAML."""

import pytest

from maia.classroom import build_learn_graph
from maia.content_loader import load_learn_lines, load_learn_lines_file, load_translations
from maia.schemas import MathProblemContent, NextAction, VisualizationContent

LINE_YAML = """
- id: one
  title: One
  tags: [a]
  steps:
    - id: s1
      content:
        - id: c1
          content_type: text
          text: Hello
          next_action: continue_button
"""


class TestBundledContent:

    def test_algebra_lines(self):
        lines = load_learn_lines()
        ids = [line.id for line in lines]
        assert "learnline:alg:ekv-losning-ensteg-addsub" in ids
        graph = build_learn_graph(lines)
        muldiv = graph.get("learnline:alg:ekv-losning-ensteg-muldiv")
        assert muldiv.prerequisites == ["learnline:alg:ekv-losning-ensteg-addsub"]
        assert graph.dangling_prerequisites(muldiv) == []

    def test_content_kinds(self):
        line = load_learn_lines()[0]
        first_step = line.steps[0]
        viz = first_step.content[1]
        assert isinstance(viz, VisualizationContent)
        assert viz.config.left_side == "10"
        assert viz.next_action is None
        assert first_step.content[0].next_action == NextAction.CONTINUE_BUTTON
        problems = [item for step in line.steps for item in step.content if isinstance(item, MathProblemContent)]
        assert problems
        assert line.translations["sv"].title.startswith("Lösning")

    def test_translations(self):
        tables = load_translations()
        assert tables["sv"]["lgm"]["close"] == "Stäng"


class TestLoaderEdges:

    def test_list_form(self, tmp_path):
        (tmp_path / "lines.yaml").write_text(LINE_YAML, encoding="utf-8")
        lines = load_learn_lines(tmp_path)
        assert [line.id for line in lines] == ["one"]

    def test_files_in_name_order(self, tmp_path):
        (tmp_path / "b.yaml").write_text(LINE_YAML.replace("one", "two"), encoding="utf-8")
        (tmp_path / "a.yaml").write_text(LINE_YAML, encoding="utf-8")
        assert [line.id for line in load_learn_lines(tmp_path)] == ["one", "two"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_learn_lines_file(path) == []

    def test_invalid_line_names_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- id: x\n  steps: []\n", encoding="utf-8")
        with pytest.raises(ValueError, match="bad.yaml"):
            load_learn_lines_file(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "scalar.yaml"
        path.write_text("just text\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_learn_lines_file(path)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_learn_lines(tmp_path / "nope")

    def test_missing_translations_directory(self, tmp_path):
        assert load_translations(tmp_path / "nope") == {}
