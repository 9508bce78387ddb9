from __future__ import annotations

from types import MappingProxyType

DEFAULT_GATEWAY = "https://platform.adobe.io"
DEFAULT_TIMEOUT_S = 15.0

BASE_NAME = "base"
BASE_ROOT_PATH = ""
BASE_HEADERS = MappingProxyType({"cache-control": "no-cache"})

USER_AGENT = "restbase-client/0.1.0"

JSON_CONTENT_TYPE = "application/json"
