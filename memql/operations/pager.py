from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, TypedDict, TYPE_CHECKING

from memql import exc
from memql.cursor import encode_cursor, decode_cursor
from memql.queryable import Queryable
from memql.query_object import PagingArgs

from .base import Operation


if TYPE_CHECKING:
    from memql.settings import ParserSettings


logger = logging.getLogger(__name__)


class PagerOperation(Operation):
    """ Pager operation: cut a page out of the sequence

    Handles: the "first", "after", "last" arguments
    When applied to a Queryable:
    * Counts the rows
    * Adds skip() and take() steps

    The window is always "skip `after`, take `limit`", even when paging with `last`:
    the direction is expressed by flipping the sort order. See SortOperation.
    """
    paging: PagingArgs

    # The window: becomes available after the operation is applied
    window: Optional[PageWindow]

    def __init__(self, paging: PagingArgs, settings: ParserSettings):
        super().__init__(settings)
        self.paging = paging
        self.window = None

    __slots__ = 'paging', 'window'

    def apply_to_queryable(self, data: Queryable) -> Queryable:
        """ Paginate the data: add skip() and take() steps """
        self.window = self.get_window(data)
        return data.skip(self.window.offset).take(self.window.limit)

    def get_window(self, data: Queryable) -> PageWindow:
        """ Compute the page window for the data """
        if self.paging.before is not None:
            logger.debug('The "before" cursor is not supported; ignored')

        # Offset: start right after the cursor
        after, ok = decode_cursor(self.paging.after)
        offset = after + 1 if ok else 0

        # Page size
        limit = self.settings.get_final_limit(self.paging.page_size)

        # Total count, before paging
        total_count = count_or_zero(data)

        return PageWindow(
            offset=offset,
            limit=limit,
            total_count=total_count,
            using_first=self.paging.using_first,
            page_info=PageInfo(
                has_next_page=total_count > limit + offset,
                has_previous_page=offset > 0,
                start_cursor=encode_cursor(offset),
                end_cursor=encode_cursor(offset + limit),
            ),
        )


@dataclass
class PageInfo:
    """ Relay page info """
    has_next_page: bool
    has_previous_page: bool
    start_cursor: Optional[str]
    end_cursor: Optional[str]

    def export(self) -> PageInfoDict:
        return {
            'hasNextPage': self.has_next_page,
            'hasPreviousPage': self.has_previous_page,
            'startCursor': self.start_cursor,
            'endCursor': self.end_cursor,
        }


@dataclass
class PageWindow:
    """ The page that was cut out of the sequence """
    # How many rows were skipped
    offset: int
    # How many rows were taken, at most
    limit: int
    # The number of rows before paging. 0 if the sequence can't be counted
    total_count: int
    # Paging forward?
    using_first: bool
    # Page info
    page_info: PageInfo


class PageInfoDict(TypedDict):
    """ Relay Page Info """
    hasPreviousPage: bool
    hasNextPage: bool
    startCursor: Optional[str]
    endCursor: Optional[str]


def count_or_zero(data: Queryable) -> int:
    """ Count the rows. Zero if the sequence can't be counted """
    try:
        return data.count()
    except exc.CountNotSupportedError as e:
        logger.debug('Total count unavailable: %s', e)
        return 0
