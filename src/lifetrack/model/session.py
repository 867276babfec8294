# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict


class Session(TypedDict):
    user_id: str
    access_token: Optional[str]  # None for the local backend
