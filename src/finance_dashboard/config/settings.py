from dataclasses import dataclass
from pathlib import Path
import json
from typing import Dict, Any, Optional

from finance_dashboard.domain.enums import PeriodToken
from finance_dashboard.periods.resolver import parse_period

# Package defaults (bundled with code)
PACKAGE_CONFIG_DIR = Path(__file__).parent / "defaults"

# User configs (in project root, gitignored)
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
USER_CONFIG_DIR = PROJECT_ROOT / "config"

DASHBOARD_CONFIG = "dashboard.json"


class ConfigLoader:
    """Load configuration with user overrides"""

    @staticmethod
    def load_config(config_name: str) -> Dict[str, Any]:
        """
        Load config with fallback: user config -> default config

        Args:
            config_name: Name of the config file (e.g., 'dashboard.json')

        Raises:
            FileNotFoundError: If no config file was found

        Returns:
            Parsed JSON configuration
        """
        user_config_path = USER_CONFIG_DIR / config_name
        if user_config_path.exists():
            with open(user_config_path) as f:
                return json.load(f)

        default_config_path = PACKAGE_CONFIG_DIR / config_name
        if default_config_path.exists():
            with open(default_config_path) as f:
                return json.load(f)

        raise FileNotFoundError(
            f"Config file '{config_name}' not found in:\n"
            f" - {user_config_path}\n"
            f" - {default_config_path}"
        )

    @staticmethod
    def load_dashboard_config() -> Dict[str, Any]:
        """Load dashboard defaults configuration"""
        return ConfigLoader.load_config(DASHBOARD_CONFIG)


@dataclass(frozen=True)
class DashboardSettings:
    """
    Defaults used when the caller doesn't ask for something explicitly.

    Usage:
        # Production - loads from ConfigLoader
        settings = DashboardSettings.load()

        # Testing - inject custom config
        settings = DashboardSettings.load({"trend_months": 12})
    """
    default_period: PeriodToken = PeriodToken.THIS_MONTH
    trend_months: int = 6
    recent_limit: int = 5
    db_path: str = "data/finance.db"

    def __post_init__(self):
        if self.trend_months < 1:
            raise ValueError(f"trend_months must be at least 1, got {self.trend_months}")
        if self.recent_limit < 1:
            raise ValueError(f"recent_limit must be at least 1, got {self.recent_limit}")

    @classmethod
    def load(cls, config: Optional[Dict[str, Any]] = None) -> "DashboardSettings":
        """
        Build settings from a config dict, or from the config files.

        Missing keys (or a missing config file) keep the built-in defaults.
        """
        if config is None:
            try:
                config = ConfigLoader.load_dashboard_config()
            except FileNotFoundError:
                config = {}

        defaults = cls()
        return cls(
            default_period=parse_period(config.get("default_period", defaults.default_period)),
            trend_months=int(config.get("trend_months", defaults.trend_months)),
            recent_limit=int(config.get("recent_limit", defaults.recent_limit)),
            db_path=str(config.get("db_path", defaults.db_path)),
        )
