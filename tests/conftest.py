from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Make package and api_server importable when running tests from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from glossary_tooltip.core.vocabulary import GlossaryTerm, Vocabulary  # noqa: E402

VOCABULARY_YAML = """
- name: Orbit
  description: "A curved path of an object around a star, planet, or moon."
  id: 7
- name: Gravity
  description: "The force that draws objects toward a body's center."
  url: https://example.org/glossary/gravity
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("GLOSSARY_TOOLTIP_"):
            monkeypatch.delenv(key)


@pytest.fixture
def orbit_vocabulary() -> Vocabulary:
    return Vocabulary([
        GlossaryTerm(name="Orbit", description="A curved path...", detail_url="/taxonomy/term/1"),
    ])


@pytest.fixture
def vocabulary_file(tmp_path: Path) -> Path:
    path = tmp_path / "glossary.yaml"
    path.write_text(VOCABULARY_YAML, encoding="utf-8")
    return path
