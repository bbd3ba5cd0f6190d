from __future__ import annotations

from typing import TYPE_CHECKING

from memql.queryable import Queryable, SortKey
from memql.query_object import SortQuery

from .base import Operation
from .fields import FieldRegistry, resolve_field


if TYPE_CHECKING:
    from memql.settings import ParserSettings


class SortOperation(Operation):
    """ Sort operation: define the ordering of result rows

    Handles: the "order" argument
    When applied to a Queryable:
    * Adds an order_by() step with fields and directions defined by the user

    Flip mode: every direction is inverted.
    This is how the last N items are fetched: flip the ordering, take N items from the head,
    then sort the page once again, without the flip, to restore the requested order.
    """
    sort: SortQuery
    fields: FieldRegistry
    flip: bool

    def __init__(self, sort: SortQuery, fields: FieldRegistry, settings: ParserSettings, *, flip: bool = False):
        super().__init__(settings)
        self.sort = sort
        self.fields = fields
        self.flip = flip

    __slots__ = 'sort', 'fields', 'flip'

    def apply_to_queryable(self, data: Queryable) -> Queryable:
        """ Sort the data: add an order_by() step """
        keys = self.compile_keys()

        # No sorting: keep the source order
        if not keys:
            return data

        return data.order_by(keys)

    def compile_keys(self) -> list[SortKey]:
        """ Generate the list of sorting keys, with directions

        Raises:
            exc.InvalidFieldError
        """
        return [
            SortKey(
                getter=resolve_field(field.name, self.fields, self.settings, where='sort').getter,
                # XOR: flip the direction
                descending=field.descending != self.flip,
            )
            for field in self.sort.fields
        ]
