# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from lifetrack import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        raw_config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)
        if raw_config is None:
            raw_config = {}

        # Fill in keys added after the file was written
        defaults = configuration.get_default_config()
        for key, value in defaults.items():
            if key not in raw_config:
                raw_config[key] = value

        self._config = cast(configuration.Configuration, raw_config)

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(
            dump(dict(config), Dumper=Dumper, sort_keys=False)
        )

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        backend: Optional[str] = None,
        backend_url: Optional[str] = None,
        api_key: Optional[str] = None,
        user_id: Optional[str] = None,
        access_token: Optional[str] = None,
        data_path: Optional[str] = None,
        first_weekday: Optional[str] = None,
        day_badge_cap: Optional[int] = None,
        timeline_page_months: Optional[int] = None,
        timeline_max_years_back: Optional[int] = None,
        request_timeout: Optional[float] = None,
        log_level: Optional[str] = None,
        remove_access_token: bool = False,
        remove_data_path: bool = False,
    ) -> None:
        self.is_dirty = True

        updates: dict[str, Any] = {
            "backend": backend,
            "backend_url": backend_url,
            "api_key": api_key,
            "user_id": user_id,
            "access_token": access_token,
            "data_path": data_path,
            "first_weekday": first_weekday,
            "day_badge_cap": day_badge_cap,
            "timeline_page_months": timeline_page_months,
            "timeline_max_years_back": timeline_max_years_back,
            "request_timeout": request_timeout,
            "log_level": log_level,
        }
        config = cast(dict[str, Any], self.config)
        for key, value in updates.items():
            if value is not None:
                config[key] = value

        if remove_access_token:
            self.config["access_token"] = None
        if remove_data_path:
            self.config["data_path"] = None


CONFIGURATION_REPO = ConfigurationRepository()
