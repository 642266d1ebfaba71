"""Shared pytest fixtures and sample commands for clinch tests."""

from __future__ import annotations

import importlib
import logging
import sys
import textwrap
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from clinch import Command, OptionSpec, Usage
from clinch.schema.cascade import ValidationState


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root and clinch logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    clinch_logger = logging.getLogger("clinch")
    clinch_level = clinch_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    clinch_logger.setLevel(clinch_level)


# ---------------------------------------------------------------------------
# Sample commands
# ---------------------------------------------------------------------------


class GreetCommand(Command):
    """Listed command with usage and options."""

    paths = [["greet"], ["hello"]]
    usage = Usage(category="Demo", description="Say hello")
    options = {
        "name": OptionSpec(name_set=("-n", "--name"), description="Who to greet", arity=1),
        "loud": OptionSpec(name_set=("--loud",)),
    }

    name: str | None = None
    loud: bool = False

    async def execute(self) -> int | None:
        return None


class ExitFiveCommand(Command):
    """Unlisted command returning a non-zero exit code."""

    async def execute(self) -> int | None:
        return 5


NOT_A_COMMAND = 42


def not_a_command() -> int:
    return 0


def failing(message: str) -> Callable[[object, ValidationState], bool]:
    """Predicate that always fails with *message*."""

    def check(candidate: object, state: ValidationState) -> bool:
        return state.push_error(message)

    return check


# ---------------------------------------------------------------------------
# Importable command modules
# ---------------------------------------------------------------------------

SAMPLE_MODULE = textwrap.dedent(
    """\
    from clinch import Command, Usage


    class BuildCommand(Command):
        paths = [["build"]]
        usage = Usage(category="Project", description="Build the project")

        async def execute(self):
            return 0


    class CleanCommand(Command):
        paths = [["clean"]]

        async def execute(self):
            return 0


    class InternalCommand(Command):
        async def execute(self):
            return 0


    VERSION = "1.0"
    """
)


@pytest.fixture
def module_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path]:
    """Directory on ``sys.path`` for throwaway command modules."""
    monkeypatch.syspath_prepend(str(tmp_path))
    before = set(sys.modules)
    yield tmp_path
    for name in set(sys.modules) - before:
        if name.startswith("clinch_sample"):
            del sys.modules[name]


@pytest.fixture
def sample_module(module_dir: Path) -> str:
    """Write the sample command module and return its dotted name."""
    (module_dir / "clinch_sample_commands.py").write_text(SAMPLE_MODULE, encoding="utf-8")
    importlib.invalidate_caches()
    return "clinch_sample_commands"
