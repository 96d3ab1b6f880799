# config_utils.py - YAML Configuration System for LtiCart
"""
LtiCart configuration utilities with YAML file support.

Configuration Resolution Order (highest to lowest priority):
1. Environment variables (LTICART_ID_STRATEGY, LTICART_PACKAGE, etc.)
2. lticart.yaml in the project directory
3. ~/.lticart/config.yaml (global defaults)

Command-line flags override all of these.

Usage:
    from lticart.config_utils import get_config

    config = get_config()
    print(config.id_strategy)
    print(config.package)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from lticart.identifiers import STRATEGIES, strategy_names
from lticart.errors import unknown_strategy_error


log = logging.getLogger(__name__)

CONFIG_FILENAME = "lticart.yaml"
TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class LtiCartConfig:
    """Complete LtiCart configuration"""
    # Identifiers
    id_strategy: str = "monotonic"

    # Output
    output_dir: Path = Path("output")
    package: bool = True

    # Organization
    split_assessments: bool = True

    # Paths (resolved at load time)
    project_root: Optional[Path] = None

    # Extra settings from config file
    extra: Dict[str, Any] = field(default_factory=dict)

    # Track where values came from (for debugging)
    _sources: Dict[str, str] = field(default_factory=dict)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return bool(value)


class ConfigLoader:
    """Load configuration from multiple sources"""

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.config = LtiCartConfig(project_root=self.project_dir)

    def load(self) -> LtiCartConfig:
        """Load configuration from all sources in priority order"""
        # Load in reverse priority (lowest first, higher overwrites)
        self._load_global_config()
        self._load_yaml_config()
        self._load_env_vars()

        if self.config.id_strategy not in STRATEGIES:
            raise unknown_strategy_error(self.config.id_strategy, strategy_names())

        return self.config

    def _load_global_config(self):
        """Load ~/.lticart/config.yaml if it exists"""
        global_config = Path.home() / ".lticart" / "config.yaml"
        if global_config.exists():
            self._load_yaml_file(global_config, "global")

    def _load_yaml_config(self):
        """Load lticart.yaml from the project directory"""
        yaml_path = self.project_dir / CONFIG_FILENAME
        if yaml_path.exists():
            self._load_yaml_file(yaml_path, CONFIG_FILENAME)

    def _load_yaml_file(self, path: Path, source_name: str):
        """Load settings from a YAML file"""
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            log.warning("[config:warn] Failed to parse %s: %s", path, e)
            return

        if not isinstance(data, dict):
            log.warning("[config:warn] Ignoring %s: top level is not a mapping", path)
            return

        if "id_strategy" in data:
            self.config.id_strategy = str(data["id_strategy"])
            self.config._sources["id_strategy"] = source_name

        if "output_dir" in data:
            self.config.output_dir = Path(str(data["output_dir"])).expanduser()
            self.config._sources["output_dir"] = source_name

        if "package" in data:
            self.config.package = _as_bool(data["package"])
            self.config._sources["package"] = source_name

        if "split_assessments" in data:
            self.config.split_assessments = _as_bool(data["split_assessments"])
            self.config._sources["split_assessments"] = source_name

        # Store any extra settings
        known_keys = {"id_strategy", "output_dir", "package", "split_assessments"}
        for key, value in data.items():
            if key not in known_keys:
                self.config.extra[key] = value

    def _load_env_vars(self):
        """Load from environment variables (highest priority)"""
        if os.environ.get("LTICART_ID_STRATEGY"):
            self.config.id_strategy = os.environ["LTICART_ID_STRATEGY"]
            self.config._sources["id_strategy"] = "env:LTICART_ID_STRATEGY"

        if os.environ.get("LTICART_OUTPUT_DIR"):
            self.config.output_dir = Path(os.environ["LTICART_OUTPUT_DIR"]).expanduser()
            self.config._sources["output_dir"] = "env:LTICART_OUTPUT_DIR"

        package = os.environ.get("LTICART_PACKAGE")
        if package is not None:
            self.config.package = _as_bool(package)
            self.config._sources["package"] = "env:LTICART_PACKAGE"

        split = os.environ.get("LTICART_SPLIT_ASSESSMENTS")
        if split is not None:
            self.config.split_assessments = _as_bool(split)
            self.config._sources["split_assessments"] = "env:LTICART_SPLIT_ASSESSMENTS"


# ============================================================================
# Public API
# ============================================================================

def get_config(project_dir: Optional[Path] = None) -> LtiCartConfig:
    """
    Get complete LtiCart configuration.

    Args:
        project_dir: Project directory (defaults to cwd)

    Returns:
        LtiCartConfig with all settings resolved

    Raises:
        ConfigurationError: If id_strategy names an unknown strategy
    """
    loader = ConfigLoader(project_dir)
    return loader.load()


def create_config_template(include_comments: bool = True) -> str:
    """
    Generate an lticart.yaml template.

    Args:
        include_comments: Whether to include explanatory comments

    Returns:
        YAML string ready to write to file
    """
    if include_comments:
        return '''# LtiCart Configuration File

# Identifier strategy for manifest items and resources
#   monotonic: I_100, I_101, ... (same course -> same manifest)
#   random:    I_3F2A9C0D11B24E7A (unique across separate builds)
id_strategy: monotonic

# Where "lticart build" writes cartridges when --output is not given
output_dir: output

# Zip the cartridge folder into an .imscc file after writing
package: true

# Emit a separate assessment item after each item with an assessmentUrl
split_assessments: true
'''
    else:
        return '''id_strategy: monotonic
output_dir: output
package: true
split_assessments: true
'''
