import logging

from .client import BaseClient
from .config_types import AuthConfig, ClientConfig, ClientDefaults, ClientOptions
from .errors import (
    ConfigurationError,
    EmptyResponse,
    RequestError,
    RestClientError,
    TransportFailure,
    UnsuccessfulResponse,
)
from .headers import normalize_headers
from .transport import HttpxResponse, HttpxTransport, make_transport

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BaseClient",
    "AuthConfig",
    "ClientConfig",
    "ClientDefaults",
    "ClientOptions",
    "ConfigurationError",
    "EmptyResponse",
    "RequestError",
    "RestClientError",
    "TransportFailure",
    "UnsuccessfulResponse",
    "normalize_headers",
    "HttpxResponse",
    "HttpxTransport",
    "make_transport",
]
