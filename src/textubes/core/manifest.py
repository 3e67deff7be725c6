import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError
from .layout import DEFAULT_HORIZONTAL_SPACING, DEFAULT_VERTICAL_SPACING, LayoutConfig

DEFAULT_CONFIG_FILE = "textubes.toml"


@dataclass
class CompilerConfig:
    """Grammar compiler defaults."""

    dark_mode: bool = False


@dataclass
class TextubesConfig:
    """
    Project configuration loaded from textubes.toml.

    Example:

        [compiler]
        dark_mode = true

        [layout]
        horizontal_spacing = 320
        vertical_spacing = 120
    """

    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    path: Path | None = None


def _spacing(section: dict[str, object], key: str, default: float) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"[layout] {key} must be a positive number, got {value!r}")
    return float(value)


def load_config(path: Path | None = None) -> TextubesConfig:
    """
    Load configuration, falling back to defaults when the file is absent.

    Args:
        path: Path to textubes.toml (default: ./textubes.toml)

    Raises:
        ConfigError: If the file is not valid TOML or has invalid values
    """
    path = path or Path(DEFAULT_CONFIG_FILE)
    if not path.exists():
        return TextubesConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    compiler_data = data.get("compiler", {})
    layout_data = data.get("layout", {})

    dark_mode = compiler_data.get("dark_mode", False)
    if not isinstance(dark_mode, bool):
        raise ConfigError(f"[compiler] dark_mode must be true or false, got {dark_mode!r}")

    return TextubesConfig(
        compiler=CompilerConfig(dark_mode=dark_mode),
        layout=LayoutConfig(
            horizontal_spacing=_spacing(
                layout_data, "horizontal_spacing", DEFAULT_HORIZONTAL_SPACING
            ),
            vertical_spacing=_spacing(layout_data, "vertical_spacing", DEFAULT_VERTICAL_SPACING),
        ),
        path=path,
    )
