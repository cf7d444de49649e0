# topmark:header:start
#
#   project      : GPP
#   file         : model.py
#   file_relpath : src/gpp/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot used to create processing contexts.
    - `MutableConfig`: a mutable builder used during discovery/merge; it can be
      frozen into `Config` and thawed back for edits.

Precedence, lowest first:
    1. Built-in defaults (`MutableConfig.from_defaults`).
    2. The discovered config file (``gpp.toml``, else ``[tool.gpp]`` in
       ``pyproject.toml``), or the file given explicitly with ``--config``.
    3. CLI overrides (`MutableConfig.apply_args`).

Path semantics:
    - ``output`` declared in a config file is resolved against that file's directory.
    - ``output`` given on the command line is resolved against the invocation CWD.
    - ``#include`` paths are never affected by configuration; they always
      resolve against the process working directory.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from gpp.config.io import (
    discover_config_file,
    extract_gpp_table,
    get_bool_value_or_none_checked,
    get_defines_checked,
    get_string_value_or_none_checked,
    load_toml_dict,
)
from gpp.config.keys import Toml
from gpp.config.logging import get_logger
from gpp.core.diagnostics import Diagnostic, DiagnosticLog

if TYPE_CHECKING:
    from gpp.config.io import TomlTable
    from gpp.config.logging import GppLogger
    from gpp.core.context import Context

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: GppLogger = get_logger(__name__)


def abs_path_from(base: Path, raw: str) -> Path:
    """Return an absolute Path for *raw* using *base* if *raw* is relative."""
    p = Path(raw)
    return (base / p).resolve() if not p.is_absolute() else p.resolve()


def parse_define(raw: str) -> tuple[str, str]:
    """Split a ``NAME[=VALUE]`` command-line definition; the value defaults to empty."""
    name, _, value = raw.partition("=")
    return name, value


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for GPP.

    Attributes:
        allow_exec (bool): Whether ``#exec``/``#in``/``#endin`` are enabled.
        output (Path | None): Output file, or ``None`` for STDOUT.
        defines (Mapping[str, str]): Macros seeded into every new context.
        config_files (tuple[Path, ...]): Config files that contributed to this snapshot.
        diagnostics (tuple[Diagnostic, ...]): Warnings collected while loading
            and merging configuration.
    """

    allow_exec: bool
    output: Path | None
    defines: Mapping[str, str]
    config_files: tuple[Path, ...]
    diagnostics: tuple[Diagnostic, ...]

    def new_context(self) -> Context:
        """Create a processing `Context` seeded from this configuration."""
        from gpp.core.context import Context

        return Context(macros=dict(self.defines), allow_exec=self.allow_exec)

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this configuration."""
        return MutableConfig(
            allow_exec=self.allow_exec,
            output=self.output,
            defines=dict(self.defines),
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog.from_iterable(self.diagnostics),
        )


# ------------------ Mutable builder ------------------


@dataclass
class MutableConfig:
    """Mutable configuration used while discovering and merging sources.

    ``None`` means "not set here" so that merging keeps the lower layer's value.
    """

    allow_exec: bool | None = None
    output: Path | None = None
    defines: dict[str, str] = field(default_factory=lambda: {})
    config_files: list[Path] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return the built-in defaults: no exec, STDOUT, no macros."""
        return cls(allow_exec=False)

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, config_file: Path | None = None) -> MutableConfig:
        """Build a draft from a GPP settings table.

        Args:
            data (TomlTable): The settings (top level of ``gpp.toml`` or ``[tool.gpp]``).
            config_file (Path | None): Source file, used to resolve relative paths
                and in diagnostics.

        Returns:
            MutableConfig: The draft; unset keys stay ``None``.
        """
        draft = cls()
        where: str = str(config_file) if config_file else "<config>"
        cfg_dir: Path = config_file.parent.resolve() if config_file else Path.cwd()

        draft.allow_exec = get_bool_value_or_none_checked(
            data, Toml.KEY_ALLOW_EXEC, where=where, diagnostics=draft.diagnostics
        )
        output: str | None = get_string_value_or_none_checked(
            data, Toml.KEY_OUTPUT, where=where, diagnostics=draft.diagnostics
        )
        if output:
            draft.output = abs_path_from(cfg_dir, output)
            logger.debug("Normalized config output against %s: %s", cfg_dir, draft.output)
        draft.defines = get_defines_checked(data, where=where, diagnostics=draft.diagnostics)
        if config_file is not None:
            draft.config_files.append(config_file)
        logger.trace("MutableConfig from %s: %s", where, draft)
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load a draft from a single TOML file.

        Returns:
            MutableConfig | None: The draft, or ``None`` when ``path`` is a
                ``pyproject.toml`` without a ``[tool.gpp]`` section.

        Raises:
            ConfigLoadError: If the file cannot be read or parsed.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        data: TomlTable | None = extract_gpp_table(path, load_toml_dict(path))
        if data is None:
            return None
        return cls.from_toml_dict(data, config_file=path)

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Overlay ``other`` on top of this draft (in place) and return ``self``.

        Scalars set in ``other`` win; ``defines`` are merged key by key.
        """
        if other.allow_exec is not None:
            self.allow_exec = other.allow_exec
        if other.output is not None:
            self.output = other.output
        self.defines.update(other.defines)
        self.config_files.extend(other.config_files)
        self.diagnostics.items.extend(other.diagnostics.items)
        return self

    def apply_args(self, args: ArgsLike) -> MutableConfig:
        """Apply CLI/API overrides (in place) and return ``self``.

        Recognized keys: ``allow_exec`` (bool; only ``True`` overrides),
        ``output`` (str, resolved against the CWD), ``defines``
        (iterable of ``NAME[=VALUE]`` strings).
        """
        if args.get(Toml.KEY_ALLOW_EXEC):
            self.allow_exec = True
        output: str | None = args.get(Toml.KEY_OUTPUT)
        if output:
            self.output = abs_path_from(Path.cwd(), output)
        for raw in args.get(Toml.SECTION_DEFINES) or ():
            name, value = parse_define(raw)
            if not name:
                self.diagnostics.add_warning(f"Ignoring definition with an empty name: {raw!r}")
                continue
            self.defines[name] = value
        return self

    @classmethod
    def load_merged(
        cls,
        *,
        config_path: Path | None = None,
        no_config: bool = False,
        cwd: Path | None = None,
    ) -> MutableConfig:
        """Build a draft from defaults and the applicable config file.

        Args:
            config_path (Path | None): Explicit config file; replaces discovery.
            no_config (bool): Skip discovery (an explicit ``config_path`` still applies).
            cwd (Path | None): Directory searched for config files (default: CWD).

        Returns:
            MutableConfig: The merged draft, ready for `apply_args` and `freeze`.

        Raises:
            ConfigLoadError: If a config file cannot be read or parsed.
        """
        draft: MutableConfig = cls.from_defaults()
        path: Path | None = config_path
        if path is None and not no_config:
            path = discover_config_file(cwd or Path.cwd())
        if path is not None:
            layer: MutableConfig | None = cls.from_toml_file(path)
            if layer is None:
                draft.diagnostics.add_warning(f"No [tool.gpp] section in {path}")
            else:
                draft.merge_with(layer)
        return draft

    def freeze(self) -> Config:
        """Return an immutable snapshot of this draft."""
        return Config(
            allow_exec=bool(self.allow_exec),
            output=self.output,
            defines=MappingProxyType(dict(self.defines)),
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics.items),
        )
