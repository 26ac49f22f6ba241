import pytest

from reroll_core import Panel, ScriptedRandomSource, SeededRandomSource


@pytest.fixture
def seeded_source():
    return SeededRandomSource(seed=1234)


@pytest.fixture
def scripted_panel():
    """Return a factory building a panel driven by scripted fractions."""

    def _build(fractions):
        source = ScriptedRandomSource(fractions)
        return Panel.from_source(source), source

    return _build
