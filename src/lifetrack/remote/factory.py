# SPDX-License-Identifier: MIT

from typing import Optional

from lifetrack import configuration
from lifetrack.model.session import Session
from lifetrack.remote.base import StorageClient
from lifetrack.remote.local import LocalStorageClient
from lifetrack.remote.postgrest import PostgrestStorageClient

BACKENDS = ["local", "postgrest"]


def build_storage_client(config: configuration.Configuration) -> StorageClient:
    backend = config["backend"]
    if backend == "local":
        return LocalStorageClient(configuration.resolve_data_path(config))
    if backend == "postgrest":
        if not config["backend_url"] or not config["api_key"]:
            raise ValueError(
                "The postgrest backend needs backend_url and api_key in the configuration"
            )
        return PostgrestStorageClient(
            base_url=config["backend_url"],
            api_key=config["api_key"],
            access_token=config["access_token"],
            timeout=config["request_timeout"],
        )
    raise ValueError(f"Invalid backend: {backend}. Valid options: {', '.join(BACKENDS)}")


def build_session(config: configuration.Configuration) -> Optional[Session]:
    """The signed-in session recorded in the configuration, if any."""
    if not config["user_id"]:
        return None
    return {"user_id": config["user_id"], "access_token": config["access_token"]}
