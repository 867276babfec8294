# SPDX-License-Identifier: MIT

import logging

from rich.logging import RichHandler
from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from lifetrack import configuration
from lifetrack.repository.configuration import CONFIGURATION_REPO


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()

    config = CONFIGURATION_REPO.get_config()
    configuration.resolve_data_path(config).mkdir(parents=True, exist_ok=True)
    configure_logging(config["log_level"])


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # requests' connection pool is noisy at debug level
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_config()
        configuration.APP_CONFIG_PATH.write_text(
            dump(dict(config), Dumper=Dumper, sort_keys=False)
        )
