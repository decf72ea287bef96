"""SgSettings: one frozen object for CLI flags, env vars, and TOML config.

Sources, strongest first:

1. keyword arguments (the CLI flags)
2. ``SUBJECTGRAPH_*`` environment variables (``__`` reaches into a section,
   e.g. ``SUBJECTGRAPH_QUERY__SEARCH_DEPTH=3``)
3. ``subjectgraph.toml``, found by :func:`~subjectgraph.config.discovery.find_config`
4. defaults from :mod:`subjectgraph.config.models`

pydantic-settings builds its sources inside ``__init__``, so the TOML path
chosen by :meth:`SgSettings.from_cli` reaches the source through a
ContextVar set for the duration of construction.
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from subjectgraph.config.discovery import find_config, read_toml
from subjectgraph.config.models import DataConfig, ExportConfig, QueryConfig

_toml_path: ContextVar[Path | None] = ContextVar("_toml_path", default=None)


@contextmanager
def _using_toml(path: Path | None) -> Iterator[None]:
    token = _toml_path.set(path)
    try:
        yield
    finally:
        _toml_path.reset(token)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by one ``subjectgraph.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            self._data = read_toml(toml_path)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc
        self._data.setdefault("data_root", toml_path.parent)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class SgSettings(BaseSettings):
    """Resolved settings, stored on the AppContext.

    Attributes:
        data_root: Directory holding the data files. Without
            ``--data-root`` or ``SUBJECTGRAPH_DATA_ROOT`` it is the config
            file's directory, else the working directory.
        config_path: The TOML file that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SUBJECTGRAPH_",
        "env_nested_delimiter": "__",
    }

    data_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    sync: bool = False

    data: DataConfig = Field(default_factory=DataConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    @property
    def edges_path(self) -> Path:
        return self.data_root / self.data.edges_file

    @property
    def nodes_path(self) -> Path:
        return self.data_root / self.data.nodes_file

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # No dotenv or secrets directory.
        return init_settings, env_settings, TomlSettingsSource(settings_cls, _toml_path.get())

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        data_root: Path | str | None = None,
        **cli_flags: Any,
    ) -> SgSettings:
        """Build settings for one CLI invocation.

        Only flags the user actually gave (not None, not False) become init
        kwargs, so an unset flag still lets its environment variable through.
        An explicit *config_path* that does not exist is ignored rather than
        falling back to discovery.
        """
        overrides = {k: v for k, v in cli_flags.items() if v is not None and v is not False}
        root = Path(data_root) if data_root is not None else None
        if root is not None:
            overrides["data_root"] = root

        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(root)

        with _using_toml(toml_path):
            return cls(config_path=toml_path, **overrides)
