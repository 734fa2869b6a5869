import os
import yaml
import json
import copy
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")

DEFAULT_CONFIG: Dict[str, Any] = {
    "runner": {
        "features_dir": "features",
        "output_dir": "test-results",
        "environments_dir": "config/environments",
        "step_timeout": 60000,
        "action_timeout": 30000,
        "viewport": {"width": 1920, "height": 1080},
    },
    "profiles": {
        "default": {
            "format": [
                "progress",
                "html:test-results/cucumber-report.html",
                "json:test-results/cucumber-report.json",
                "junit:test-results/cucumber-report.xml",
            ],
            "parallel": 2,
        },
        "chrome": {
            "browser": "chromium",
            "format": ["progress", "json:test-results/cucumber-report.json"],
            "parallel": 2,
        },
        "firefox": {
            "browser": "firefox",
            "format": ["progress", "json:test-results/cucumber-report.json"],
            "parallel": 2,
        },
        "webkit": {
            "browser": "webkit",
            "format": ["progress", "json:test-results/cucumber-report.json"],
            "parallel": 2,
        },
        "headed": {
            "format": ["progress"],
            "parallel": 1,
            "headless": False,
        },
    },
    "report": {
        "project": "Playwright BDD Framework",
        "release": "1.0.0",
    },
}


class ConfigManager:
    """Manages configuration for the suite"""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self._get_default_config_path()
        self._config = self._load_config()

    def _get_default_config_path(self) -> Path:
        """Get default configuration path"""
        # Check environment variable first
        if env_path := os.getenv("SWAGLABS_BDD_CONFIG"):
            return Path(env_path)

        locations = [
            Path.cwd() / "swaglabs-bdd.yaml",
            Path.cwd() / ".swaglabs-bdd" / "config.yaml",
        ]

        for location in locations:
            if location.exists():
                return location

        return Path.cwd() / "swaglabs-bdd.yaml"

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file, layered over the defaults"""
        config = copy.deepcopy(DEFAULT_CONFIG)
        if not self.config_path.exists():
            return config

        with open(self.config_path, 'r') as f:
            if self.config_path.suffix in ('.yaml', '.yml'):
                loaded = yaml.safe_load(f) or {}
            elif self.config_path.suffix == '.json':
                loaded = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported config format: {self.config_path.suffix}")

        logger.info(f"Loaded configuration from {self.config_path}")
        return _deep_merge(config, loaded)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation"""
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation"""
        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def save(self) -> None:
        """Save configuration to file"""
        if self.config_path.suffix not in ('.yaml', '.yml', '.json'):
            raise ConfigurationError(f"Unsupported config format: {self.config_path.suffix}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, 'w') as f:
            if self.config_path.suffix == '.json':
                json.dump(self._config, f, indent=2)
            else:
                yaml.dump(self._config, f, default_flow_style=False)

    def get_profile(self, name: str) -> Dict[str, Any]:
        """Get a named run profile"""
        profiles = self.get("profiles", {})
        if name not in profiles:
            raise ConfigurationError(
                f"Unknown profile '{name}'. Available: {', '.join(sorted(profiles))}"
            )
        return profiles[name]

    def list_profiles(self) -> List[str]:
        return sorted(self.get("profiles", {}))


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _env_flag(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    return value.strip().lower() == "true"


def _env_int(value: Optional[str], default: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer value '{value}', using {default}")
        return default


@dataclass
class RunnerConfig:
    """Resolved configuration for one test run"""
    browser: str = "chromium"
    headless: bool = False
    slow_mo: int = 0
    video: bool = False
    step_timeout: int = 60000
    action_timeout: int = 30000
    viewport: Dict[str, int] = field(default_factory=lambda: {"width": 1920, "height": 1080})
    base_url: Optional[str] = None
    environment: str = "QA"
    parallel: int = 1
    formats: List[str] = field(default_factory=lambda: ["progress"])
    features_dir: str = "features"
    output_dir: str = "test-results"
    environments_dir: str = "config/environments"
    tags: Optional[str] = None
    profile: str = "default"

    @classmethod
    def resolve(
            cls,
            manager: Optional[ConfigManager] = None,
            profile: str = "default",
            environ: Optional[Mapping[str, str]] = None,
            **overrides: Any
    ) -> "RunnerConfig":
        """
        Build the run configuration.

        Precedence (lowest first): built-in defaults, config file, profile,
        environment variables, explicit overrides (None values are ignored).
        """
        manager = manager or ConfigManager()
        environ = os.environ if environ is None else environ
        runner = manager.get("runner", {})
        profile_settings = manager.get_profile(profile)

        config = cls(
            step_timeout=runner.get("step_timeout", 60000),
            action_timeout=runner.get("action_timeout", 30000),
            viewport=dict(runner.get("viewport", {"width": 1920, "height": 1080})),
            features_dir=runner.get("features_dir", "features"),
            output_dir=runner.get("output_dir", "test-results"),
            environments_dir=runner.get("environments_dir", "config/environments"),
            profile=profile,
        )

        config.browser = profile_settings.get("browser", config.browser)
        config.headless = profile_settings.get("headless", config.headless)
        config.parallel = profile_settings.get("parallel", config.parallel)
        config.formats = list(profile_settings.get("format", config.formats))

        if environ.get("BROWSER"):
            config.browser = environ["BROWSER"].lower()
        headless = _env_flag(environ.get("HEADLESS"))
        if headless is not None:
            config.headless = headless
        config.slow_mo = _env_int(environ.get("SLOW_MO"), config.slow_mo)
        config.video = environ.get("VIDEO", "off").strip().lower() == "on"
        config.step_timeout = _env_int(environ.get("TIMEOUT"), config.step_timeout)
        config.base_url = environ.get("BASE_URL") or config.base_url
        config.environment = environ.get("ENV") or config.environment

        for key, value in overrides.items():
            if value is None:
                continue
            if not hasattr(config, key):
                raise ConfigurationError(f"Unknown runner option: {key}")
            setattr(config, key, value)

        return config

    def validate(self) -> None:
        """Raise ConfigurationError for settings the runner cannot honour"""
        if self.browser not in SUPPORTED_BROWSERS:
            raise ConfigurationError(
                f"Unsupported browser: {self.browser} (expected one of {', '.join(SUPPORTED_BROWSERS)})"
            )
        if self.parallel < 1:
            raise ConfigurationError(f"parallel must be at least 1, got {self.parallel}")

    def load_environment_config(self) -> Dict[str, Any]:
        """Load config/environments/<env>.yaml, if present"""
        config_path = Path(self.environments_dir) / f"{self.environment.lower()}.yaml"

        if config_path.exists():
            with open(config_path, 'r') as f:
                env_config = yaml.safe_load(f) or {}
            logger.info(f"Loaded environment config from {config_path}")
            return env_config

        logger.debug(f"Environment config not found: {config_path}")
        return {}
