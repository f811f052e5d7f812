from .config import Settings, load_settings
from .constants import (
    ASC,
    DESC,
    EQUAL,
    GREATER_THAN,
    GREATER_THAN_OR_EQUAL,
    LESS_THAN,
    LESS_THAN_OR_EQUAL,
    NOT_EQUAL,
)
from .database import Database, setup
from .exceptions import (
    APIError,
    BadRequestError,
    CloudantError,
    ConflictError,
    NotFoundError,
    ResponseDecodeError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from .query import Query, to_query_string

__all__ = [
    "ASC",
    "DESC",
    "EQUAL",
    "GREATER_THAN",
    "GREATER_THAN_OR_EQUAL",
    "LESS_THAN",
    "LESS_THAN_OR_EQUAL",
    "NOT_EQUAL",
    "APIError",
    "BadRequestError",
    "CloudantError",
    "ConflictError",
    "Database",
    "NotFoundError",
    "Query",
    "ResponseDecodeError",
    "ServerError",
    "Settings",
    "TransportError",
    "UnauthorizedError",
    "load_settings",
    "setup",
    "to_query_string",
]
