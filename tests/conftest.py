"""Pytest configuration and fixtures."""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def sample_bem_valid():
    """Valid BEM text for testing."""
    return "media-player(dark)\nbutton(fast-forward|rewind)\ntimeline"


@pytest.fixture
def sample_bem_json():
    """JSON form of sample_bem_valid."""
    return (
        '{"name":"media-player","modifiers":["dark"],"elements":['
        '{"name":"button","modifiers":["fast-forward","rewind"]},'
        '{"name":"timeline","modifiers":[]}]}'
    )


@pytest.fixture
def sample_bem_syntax_error():
    """BEM with an empty modifier list."""
    return "block()"


@pytest.fixture
def sample_bem_file(tmp_path, sample_bem_valid):
    """sample_bem_valid written to a file."""
    path = tmp_path / "media-player.bem"
    path.write_text(sample_bem_valid, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers installed by setup_logging during a test."""
    root = logging.getLogger()
    before, level = set(root.handlers), root.level
    yield
    for handler in root.handlers[:]:
        if handler not in before:
            root.removeHandler(handler)
    root.setLevel(level)
