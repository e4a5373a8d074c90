from pathlib import Path

import pytest

from agenda_insights.extraction.exceptions import ExtractionError
from agenda_insights.extraction.prompt_loader import load_prompt_template


class TestLoadPromptTemplate:
    def test_loads_bundled_template(self) -> None:
        template = load_prompt_template()
        assert "{categories}" in template
        assert "{document_text}" in template
        assert "REGULAR AGENDA" in template

    def test_bundled_template_formats(self) -> None:
        prompt = load_prompt_template().format(categories="['Roadway']", document_text="TEXT")
        assert prompt.rstrip().endswith("TEXT")
        assert '"category": ["Roadway", "Traffic"]' in prompt

    def test_custom_path(self, tmp_path: Path) -> None:
        path = tmp_path / "p.txt"
        path.write_text("{categories} {document_text}", encoding="utf-8")
        assert load_prompt_template(path) == "{categories} {document_text}"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ExtractionError, match="Failed to load prompt template"):
            load_prompt_template(tmp_path / "missing.txt")

    def test_missing_placeholder_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "p.txt"
        path.write_text("Only {document_text}", encoding="utf-8")
        with pytest.raises(ExtractionError, match="categories"):
            load_prompt_template(path)
