""" MiddlewareParser: filter, sort and paginate a data source that can't do it on its own

Overview:

1. Filter: compile the filter tree into a predicate
2. Sort: compile the sorting into keys. Flipped, if paging backward with `last`
3. Page: skip and take
4. When paging with `last`: load the page, sort it once again to restore the requested order
"""

from __future__ import annotations

import logging
from collections import abc
from typing import Any, Generic, Optional, TypeVar, Union

from memql.connection import ConnectionDict, build_connection
from memql.operations import FilterOperation, SortOperation, PagerOperation, PageWindow
from memql.operations.fields import FieldRegistry
from memql.query_object import FilterQuery, SortQuery, PagingArgs
from memql.queryable import Queryable
from memql.settings import ParserSettings

from .context import ResolverContext, FilterContext, SortingContext


logger = logging.getLogger(__name__)

T = TypeVar('T')


class MiddlewareParser(Generic[T]):
    """ A parser for filtering, sorting and paging arguments

    For when your data source is not SQL, and things need to be handled manually.

    Example:
        parser = MiddlewareParser(users, ArgumentsContext(first=10), FilterInput(where), SortingInput(order))
        page = parser.parse().to_list()
        return parser.build_connection(page)

    Every handler re-reads its arguments: nothing is computed in advance.
    """
    # The data. Every handler replaces it with a new Queryable
    data: Queryable[T]

    # Host contexts. Every one is optional: a missing context means "nothing to handle"
    resolver: Optional[ResolverContext]
    filter: Optional[FilterContext]
    sorting: Optional[SortingContext]

    # Settings: page size, property mapper, etc
    settings: ParserSettings

    # Fields of the model
    fields: FieldRegistry

    # The page window, when paging has been handled
    window: Optional[PageWindow]

    def __init__(self,
                 data: Union[Queryable[T], abc.Iterable[T], abc.Callable[[], abc.Iterable[T]], None],
                 resolver: Optional[ResolverContext] = None,
                 filter: Optional[FilterContext] = None,
                 sorting: Optional[SortingContext] = None,
                 default_page_size: int = 10,
                 property_mapper: Optional[dict[str, str]] = None,
                 *,
                 model: Optional[type] = None,
                 settings: Optional[ParserSettings] = None,
                 ):
        """

        Args:
            data: The data source. Any iterable, or a function that returns one
            resolver: Gives paging arguments
            filter: Gives the filter tree
            sorting: Gives sorting groups
            default_page_size: Page size to use when neither `first` nor `last` is given
            property_mapper: { API field name => internal field name }. Limits filtering and sorting to these fields
            model: The type of rows. Gives field types for value coercion, validates field names.
                If not provided, fields are looked up dynamically
            settings: Custom settings. When given, `default_page_size` and `property_mapper` are ignored
        """
        self.data = Queryable.ensure(data)
        self.resolver = resolver
        self.filter = filter
        self.sorting = sorting
        self.settings = settings or ParserSettings(
            default_page_size=default_page_size,
            property_mapper=property_mapper,
        )
        self.fields = FieldRegistry.for_model(model)
        self.window = None

    def paging_args(self) -> PagingArgs:
        """ Read paging arguments """
        if self.resolver is None:
            return PagingArgs()
        return PagingArgs.from_arguments(self.resolver)

    @property
    def using_first(self) -> bool:
        """ Paging forward? """
        return self.paging_args().using_first

    def parse(self) -> Queryable[T]:
        """ Filter, sort, paginate. Marks filtering and sorting as handled.

        Returns:
            The filtered, sorted and paged data (i.e. `self.data`)
        """
        using_first = self.using_first

        self.handle_filter()
        self.handle_sort()
        self.handle_page()

        # When paging with `last`, the ordering was flipped: restore it.
        # Load the page first: many sources can't be sorted after paging
        if not using_first:
            self.data = self.data.materialize()
            self.handle_sort(restore=True)

        return self.data

    def handle_filter(self):
        """ Apply the filter, mark it as handled """
        if self.filter is None:
            return

        query = FilterQuery.from_filter(self.filter.to_dict())
        logger.debug('Filter: %r', query.conditions)

        self.data = FilterOperation(query, self.fields, self.settings).apply_to_queryable(self.data)
        self.filter.handled(True)

    def handle_sort(self, restore: bool = False):
        """ Apply the sorting

        When paging with `last`, the ordering is flipped: the last N items are taken from the head.
        Sorting is only marked as handled when the data is in the requested order.

        Args:
            restore: Sort the page in the requested order, without the flip
        """
        if self.sorting is None:
            return

        query = SortQuery.from_groups(self.sorting.to_list())
        flip = not restore and not self.using_first
        logger.debug('Sort: %r, flip=%s', query.fields, flip)

        self.data = SortOperation(query, self.fields, self.settings, flip=flip).apply_to_queryable(self.data)

        if not flip:
            self.sorting.handled(True)

    def handle_page(self):
        """ Apply paging. The `before` argument is not supported """
        if self.resolver is None:
            return

        op = PagerOperation(self.paging_args(), self.settings)
        self.data = op.apply_to_queryable(self.data)
        self.window = op.window
        logger.debug('Page: %r', self.window)

    def build_connection(self, collection: Optional[abc.Iterable[Any]] = None) -> ConnectionDict:
        """ Build a Relay connection: edges with cursors, page info, total count

        Args:
            collection: The page of results, e.g. converted to your API types. Default: `self.data`
        """
        window = self.window
        if window is None:
            window = PagerOperation(self.paging_args(), self.settings).get_window(self.data)

        return build_connection(self.data if collection is None else collection, window)
