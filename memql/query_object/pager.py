""" Paging input: relay-style "first", "after", "last", "before" """

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from memql import exc

from .base import OperationInputBase


if TYPE_CHECKING:
    from memql.engine.context import ResolverContext


@dataclass
class PagingArgs(OperationInputBase):
    """ Paging arguments

    Paging is possible either forward (`first`, `after`) or backward (`last`).
    The `before` cursor is accepted but not supported: it has no effect.
    """
    # Page size, forward
    first: Optional[int] = None
    # Cursor: the last seen item
    after: Optional[str] = None
    # Page size, backward
    last: Optional[int] = None
    # Cursor: not supported
    before: Optional[str] = None

    @classmethod
    def from_arguments(cls, resolver: ResolverContext):
        """ Read paging arguments from the resolver context """
        return cls.from_values(
            first=resolver.argument_value('first'),
            after=resolver.argument_value('after'),
            last=resolver.argument_value('last'),
            before=resolver.argument_value('before'),
        )

    @classmethod
    def from_values(cls, *, first=None, after=None, last=None, before=None):
        # Check types
        for name, value in (('first', first), ('last', last)):
            if value is None:
                continue
            if not isinstance(value, int) or isinstance(value, bool):
                raise exc.QueryObjectError(f'"{name}" must be an integer')
            if value < 0:
                raise exc.QueryObjectError(f'"{name}" must not be negative')
            if value > sys.maxsize:
                raise exc.QueryObjectError(f'"{name}" is too large')

        for name, value in (('after', after), ('before', before)):
            if value is not None and not isinstance(value, str):
                raise exc.QueryObjectError(f'"{name}" must be a string cursor')

        # Construct
        return cls(first=first, after=after, last=last, before=before)

    @property
    def using_first(self) -> bool:
        """ Paging forward? Default: yes. Only paging backward when `last` is given, and `first` is not """
        return self.first is not None or self.last is None

    @property
    def page_size(self) -> Optional[int]:
        """ The requested page size: `first` when paging forward, `last` when paging backward """
        return self.first if self.using_first else self.last

    def export(self) -> dict:
        return {'first': self.first, 'after': self.after, 'last': self.last, 'before': self.before}
