""" Relay connections: the paginated response """

from __future__ import annotations

from collections import abc
from typing import Any, TypedDict

from memql.cursor import encode_cursor
from memql.operations.pager import PageWindow, PageInfoDict


def build_connection(collection: abc.Iterable[Any], window: PageWindow) -> ConnectionDict:
    """ Get results in Relay paginated format

    Every item gets a cursor that points at it: offsets are counted from the start of the window.

    Args:
        collection: The page of results. Any objects: e.g. your API types converted from the rows
        window: The page window that the results were cut out with
    """
    return {
        'edges': [
            {'node': node, 'cursor': encode_cursor(window.offset + i)}
            for i, node in enumerate(collection)
        ],
        'pageInfo': window.page_info.export(),
        'totalCount': window.total_count,
    }


class ConnectionDict(TypedDict):
    """ Relay Connection type: paginated list """
    edges: list[EdgeDict]
    pageInfo: PageInfoDict
    totalCount: int


class EdgeDict(TypedDict):
    """ Relay Edge type: paginated item """
    node: Any
    cursor: str
