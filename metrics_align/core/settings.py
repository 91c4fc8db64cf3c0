import logging
import os
from dataclasses import dataclass, field
from typing import Optional

import toml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config")


@dataclass
class Settings:
    """
    Runtime settings for the glossary services.

    config_dir holds the definition files:
      metrics_glossary.toml, translations.toml, misalignments.toml, relationship_graph.toml
    The two delays stand in for the latency of a real translation service
    and a real detection job.
    """
    config_dir: str = field(default=DEFAULT_CONFIG_DIR)
    translate_delay_seconds: float = 2.0
    scan_delay_seconds: float = 3.0
    log_level: str = "INFO"

    def definition_path(self, filename: str) -> str:
        return os.path.join(self.config_dir, filename)


_ENV_OVERRIDES = {
    "METRICS_ALIGN_CONFIG_DIR": ("config_dir", str),
    "METRICS_ALIGN_TRANSLATE_DELAY": ("translate_delay_seconds", float),
    "METRICS_ALIGN_SCAN_DELAY": ("scan_delay_seconds", float),
    "METRICS_ALIGN_LOG_LEVEL": ("log_level", str),
}


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Build Settings from defaults, an optional TOML file and the environment,
    in that order of precedence (environment wins).

    The TOML file is expected to hold a [settings] table, e.g.

    [settings]
    translate_delay_seconds = 0.5
    log_level = "DEBUG"
    """
    settings = Settings()

    if path:
        with open(path, "r") as f:
            data = toml.load(f)
        for key, value in data.get("settings", {}).items():
            if not hasattr(settings, key):
                raise ValueError(f"Unknown setting '{key}' in {path}")
            setattr(settings, key, value)

    for env_name, (attr, cast) in _ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is not None:
            setattr(settings, attr, cast(raw))
            logger.debug("Setting %s overridden from %s", attr, env_name)

    if settings.translate_delay_seconds < 0 or settings.scan_delay_seconds < 0:
        raise ValueError("Simulated delays must be non-negative.")
    settings.log_level = settings.log_level.upper()
    return settings
