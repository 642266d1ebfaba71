"""Unified settings — CLI flags, env vars, and pyproject.toml in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``CLINCH_*`` prefix
  3. TOML table   — ``[tool.clinch]`` of the nearest ``pyproject.toml``
  4. Code defaults

Uses Pydantic Settings v2 with a custom :class:`PyprojectSettingsSource`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

PYPROJECT_FILENAME = "pyproject.toml"
TOOL_TABLE = "clinch"


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) to the nearest ``pyproject.toml``."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT_FILENAME
        if candidate.is_file():
            return candidate
    return None


class PyprojectSettingsSource(PydanticBaseSettingsSource):
    """Read the ``[tool.clinch]`` table of a ``pyproject.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                document = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc
            self._data = document.get("tool", {}).get(TOOL_TABLE, {})

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the pyproject path during construction.
_tls = threading.local()


class ClinchSettings(BaseSettings):
    """Settings for the clinch developer CLI.

    Attributes:
        binary_name: Name substituted for ``$0`` in usage examples.
        modules: Dotted module names whose command classes are loaded.
        plugins: Whether ``clinch.plugins`` entry points are loaded.
        config_path: The ``pyproject.toml`` the settings were read from.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CLINCH_",
    }

    binary_name: str = "clinch"
    modules: list[str] = Field(default_factory=list)
    plugins: bool = True
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the pyproject source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            PyprojectSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(cls, *, start: Path | None = None, **cli_flags: Any) -> ClinchSettings:
        """Construct settings from a CLI invocation.

        Flags left at None are dropped so lower-priority sources apply.
        """
        toml_path = find_pyproject(start)
        flags = {key: value for key, value in cli_flags.items() if value is not None}
        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **flags)
        finally:
            _tls.toml_path = None
