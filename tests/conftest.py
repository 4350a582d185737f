#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import pathlib
from typing import Callable

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest


# Classes --------------------------------------------------------------------------------------------------------------

class Spy:
    """User object counting calls to its own text conversions."""

    def __init__(self, text: str = "spy"):
        self.text = text
        self.calls = 0

    def __str__(self):
        self.calls += 1
        return self.text

    def __repr__(self):
        self.calls += 1
        return f"Spy({self.text!r})"


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def spy() -> Spy:
    """Object whose __str__/__repr__ calls are counted."""
    return Spy()


@pytest.fixture
def toml_file(tmp_path: pathlib.Path) -> Callable[[str], pathlib.Path]:
    """Factory writing TOML content into a temporary file."""

    def _create_file(content: str, name: str = "pyproject.toml") -> pathlib.Path:
        file_path = tmp_path / name
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _create_file
