"""odocgen configuration system.

Configuration is YAML-based with CLI overrides for the per-run values
(addons directories, --output, --branch, --strict). Supports environment
variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.odocgen/config.yaml
3. ./odocgen.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from odocgen.exceptions import ConfigError

DUPLICATE_ORIGINAL_POLICIES = {"ignore", "warn", "error"}

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class OutputConfig:
    """Output configuration.

    Attributes:
        path: Output directory (deleted and regenerated on every run)
        branch: Branch label shown on the landing page
    """

    path: str = "build/odocgen"
    branch: str = "master"


@dataclass
class SourceConfig:
    """Where to look for model files.

    Attributes:
        addons_dirs: Directories whose subdirectories are addons
        models_dir: Name of the per-addon subdirectory holding models
        extension: File extension of model files
    """

    addons_dirs: list[str] = field(default_factory=list)
    models_dir: str = "models"
    extension: str = ".py"


@dataclass
class MarkerConfig:
    """Reserved class attribute and decorator names.

    Attributes:
        name: Class attribute holding the canonical model name
        inherit: Class attributes marking the class as an extension
        api: Decorator namespace whose methods are not documented
        model: Decorator attribute whose methods are not documented
    """

    name: str = "_name"
    inherit: list[str] = field(default_factory=lambda: ["_inherit", "_inherits"])
    api: str = "api"
    model: str = "model"


@dataclass
class PolicyConfig:
    """Extraction policies for ambiguous source shapes.

    Attributes:
        inherit_lists: Treat each string in ``_inherit = [...]`` as a model
            the class extends (off: the list only flags the class as an
            extension)
        on_duplicate_original: What to do when two files declare the same
            model as original (ignore, warn, error). The later file wins
            unless this is "error".
    """

    inherit_lists: bool = False
    on_duplicate_original: str = "warn"

    def __post_init__(self) -> None:
        """Validate policy values."""
        if self.on_duplicate_original not in DUPLICATE_ORIGINAL_POLICIES:
            raise ConfigError(
                f"Invalid on_duplicate_original: {self.on_duplicate_original}. "
                f"Valid: {sorted(DUPLICATE_ORIGINAL_POLICIES)}"
            )


@dataclass
class OdocgenConfig:
    """Top-level odocgen configuration.

    Attributes:
        output: Output directory and branch label
        sources: Source discovery settings
        markers: Marker names recognised by the extractor
        policy: Extraction policies
    """

    output: OutputConfig = field(default_factory=OutputConfig)
    sources: SourceConfig = field(default_factory=SourceConfig)
    markers: MarkerConfig = field(default_factory=MarkerConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)

    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute ${VAR} references in config values.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ConfigError: If a referenced variable is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ConfigError(f"Environment variable not set: {var_name}")
            return env_value

        return _ENV_PATTERN.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.odocgen/config.yaml
    2. ./odocgen.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".odocgen" / "config.yaml",
        start_path / "odocgen.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _as_list(value: Any, key: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a string or a list of strings")
    return [str(v) for v in value]


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data[key] or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{key} must be a mapping, got {type(section).__name__}")
    return section


def load_config_from_dict(data: dict[str, Any]) -> OdocgenConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        OdocgenConfig instance

    Raises:
        ConfigError: If a section is not a mapping or a value is invalid
    """
    data = substitute_env_vars(data)

    config = OdocgenConfig()

    if "output" in data:
        output_data = _section(data, "output")
        config.output = OutputConfig(
            path=str(output_data.get("path", config.output.path)),
            branch=str(output_data.get("branch", config.output.branch)),
        )

    if "sources" in data:
        sources_data = _section(data, "sources")
        config.sources = SourceConfig(
            addons_dirs=_as_list(sources_data.get("addons_dirs", []), "sources.addons_dirs"),
            models_dir=sources_data.get("models_dir", config.sources.models_dir),
            extension=sources_data.get("extension", config.sources.extension),
        )

    if "markers" in data:
        markers_data = _section(data, "markers")
        defaults = MarkerConfig()
        config.markers = MarkerConfig(
            name=markers_data.get("name", defaults.name),
            inherit=_as_list(markers_data.get("inherit", defaults.inherit), "markers.inherit"),
            api=markers_data.get("api", defaults.api),
            model=markers_data.get("model", defaults.model),
        )

    if "policy" in data:
        policy_data = _section(data, "policy")
        config.policy = PolicyConfig(
            inherit_lists=bool(policy_data.get("inherit_lists", False)),
            on_duplicate_original=policy_data.get("on_duplicate_original", "warn"),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> OdocgenConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        OdocgenConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
        ConfigError: If the file is not valid YAML or has invalid values
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is None:
        return OdocgenConfig()

    try:
        with open(found_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {found_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {found_path}")

    config = load_config_from_dict(data)
    config._config_path = found_path
    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# odocgen configuration

# Output settings (the output directory is deleted on every run)
output:
  path: "build/odocgen"
  branch: "master"

# Source discovery: <addons_dir>/<addon>/<models_dir>/*<extension>
sources:
  addons_dirs: []
  # - "odoo/addons"
  # - "${ENTERPRISE_PATH}"
  models_dir: "models"
  extension: ".py"

# Reserved names recognised in model classes
markers:
  name: "_name"
  inherit: ["_inherit", "_inherits"]
  api: "api"
  model: "model"

policy:
  inherit_lists: false            # document _inherit = [...] under every listed model
  on_duplicate_original: "warn"   # ignore, warn, error
'''
