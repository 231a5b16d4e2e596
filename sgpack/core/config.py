"""Typed packager configuration.

Defaults describe the SGLoader V2 release layout. A project may override
any of them with an `sgpack.toml` file at its root:

    [dist]
    product = "SGLoader"
    version = "V2"
    dir = "dist"

    [sources]
    submodule = "third_party/SGLoader-Rewrite"
    binary = "target/release/sgloader-v2.exe"
    symbols = "target/release/sgloader_v2.pdb"

    [loader]
    project = "third_party/SGLoader-Rewrite/SS14.Loader/SS14.Loader.csproj"
    signing_key = "third_party/SGLoader-Rewrite/SS14.Launcher/signing_key"
    runtime_id = "win-x64"

    [runtime]
    version = "10.0.0"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "PackagerConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "sgpack.toml"

DEFAULT_PRODUCT = "SGLoader"
DEFAULT_VERSION = "V2"
DEFAULT_DIST_DIR = "dist"
DEFAULT_SUBMODULE = "third_party/SGLoader-Rewrite"
DEFAULT_BINARY = "target/release/sgloader-v2.exe"
DEFAULT_SYMBOLS = "target/release/sgloader_v2.pdb"
DEFAULT_LOADER_PROJECT = f"{DEFAULT_SUBMODULE}/SS14.Loader/SS14.Loader.csproj"
DEFAULT_LOADER_API_PROJECT = (
    f"{DEFAULT_SUBMODULE}/Robust.LoaderApi/Robust.LoaderApi/Robust.LoaderApi.csproj"
)
DEFAULT_SIGNING_KEY = f"{DEFAULT_SUBMODULE}/SS14.Launcher/signing_key"
DEFAULT_RUNTIME_ID = "win-x64"
DEFAULT_CONFIGURATION = "Release"
DEFAULT_RUNTIME_VERSION = "10.0.0"
DEFAULT_RUNTIME_HOST = "builds.dotnet.microsoft.com"
DEFAULT_MAX_SUFFIX = 9999


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the config file cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PackagerConfig:
    """Everything the packager needs to know besides the project root.

    Paths are relative to the project root.
    """

    product: str = DEFAULT_PRODUCT
    version: str = DEFAULT_VERSION
    dist_dir: str = DEFAULT_DIST_DIR
    submodule: str = DEFAULT_SUBMODULE
    binary: str = DEFAULT_BINARY
    symbols: str = DEFAULT_SYMBOLS
    loader_project: str = DEFAULT_LOADER_PROJECT
    loader_api_project: str = DEFAULT_LOADER_API_PROJECT
    signing_key: str = DEFAULT_SIGNING_KEY
    runtime_id: str = DEFAULT_RUNTIME_ID
    configuration: str = DEFAULT_CONFIGURATION
    runtime_version: str = DEFAULT_RUNTIME_VERSION
    runtime_host: str = DEFAULT_RUNTIME_HOST
    max_suffix: int = DEFAULT_MAX_SUFFIX

    @property
    def dist_name(self) -> str:
        """Name shared by the staging root, the archive and the staged binary."""
        return f"{self.product}-{self.version}"

    @property
    def runtime_archive_name(self) -> str:
        return f"dotnet-runtime-{self.runtime_version}-{self.runtime_id}.zip"

    @property
    def runtime_url(self) -> str:
        return (
            f"https://{self.runtime_host}/dotnet/Runtime/{self.runtime_version}/"
            f"{self.runtime_archive_name}"
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> PackagerConfig:
        """Create a config from parsed TOML, falling back to defaults."""
        dist: StrDict = get_table(data, "dist") or {}
        sources: StrDict = get_table(data, "sources") or {}
        loader: StrDict = get_table(data, "loader") or {}
        runtime: StrDict = get_table(data, "runtime") or {}

        submodule = get_str(sources, "submodule") or DEFAULT_SUBMODULE
        max_suffix = get_int(dist, "max_suffix")
        if max_suffix is not None and max_suffix < 1:
            raise ValueError(f"dist.max_suffix must be >= 1, got {max_suffix}")

        return cls(
            product=get_str(dist, "product") or DEFAULT_PRODUCT,
            version=get_str(dist, "version") or DEFAULT_VERSION,
            dist_dir=get_str(dist, "dir") or DEFAULT_DIST_DIR,
            submodule=submodule,
            binary=get_str(sources, "binary") or DEFAULT_BINARY,
            symbols=get_str(sources, "symbols") or DEFAULT_SYMBOLS,
            loader_project=get_str(loader, "project")
            or f"{submodule}/SS14.Loader/SS14.Loader.csproj",
            loader_api_project=get_str(loader, "api_project")
            or f"{submodule}/Robust.LoaderApi/Robust.LoaderApi/Robust.LoaderApi.csproj",
            signing_key=get_str(loader, "signing_key")
            or f"{submodule}/SS14.Launcher/signing_key",
            runtime_id=get_str(loader, "runtime_id") or DEFAULT_RUNTIME_ID,
            configuration=get_str(loader, "configuration") or DEFAULT_CONFIGURATION,
            runtime_version=get_str(runtime, "version") or DEFAULT_RUNTIME_VERSION,
            runtime_host=get_str(runtime, "host") or DEFAULT_RUNTIME_HOST,
            max_suffix=max_suffix if max_suffix is not None else DEFAULT_MAX_SUFFIX,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[PackagerConfig, ConfigError]:
    """Load and validate a packager config file.

    Returns:
        Ok(PackagerConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(PackagerConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[PackagerConfig, ConfigError]:
    """Like load_config, but a missing file yields the defaults."""
    if not path.exists():
        return Ok(PackagerConfig())
    return load_config(path)
