# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Literal, Optional, TypedDict

import platformdirs

APP_NAME = "lifetrack"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

DEFAULT_DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)

BackendType = Literal["local", "postgrest"]


class Configuration(TypedDict):
    backend: BackendType
    backend_url: Optional[str]
    api_key: Optional[str]
    # Session handed over by the sign-in flow
    user_id: Optional[str]
    access_token: Optional[str]
    data_path: Optional[str]
    first_weekday: str
    day_badge_cap: int
    timeline_page_months: int
    timeline_max_years_back: int
    request_timeout: float
    log_level: str


def get_default_config() -> Configuration:
    return {
        "backend": "local",
        "backend_url": None,
        "api_key": None,
        "user_id": "local",
        "access_token": None,
        "data_path": None,
        "first_weekday": "sunday",
        "day_badge_cap": 5,
        "timeline_page_months": 12,
        "timeline_max_years_back": 100,
        "request_timeout": 30,
        "log_level": "WARNING",
    }


def resolve_data_path(config: Configuration) -> Path:
    if config["data_path"] is not None:
        return Path(config["data_path"]).expanduser()
    return DEFAULT_DATA_PATH
