from importlib.metadata import version

__version__ = version('memql')

from .engine import MiddlewareParser
from .engine import ArgumentsContext, FilterInput, SortingInput
from .settings import ParserSettings
from .queryable import Queryable, SortKey
from .cursor import encode_cursor, decode_cursor
from .connection import build_connection, ConnectionDict
from .typing import AwareDatetime

from . import query_object
from . import operations
from . import exc
