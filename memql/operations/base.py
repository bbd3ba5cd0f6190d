from __future__ import annotations

from typing import TYPE_CHECKING

from memql.queryable import Queryable


if TYPE_CHECKING:
    from memql.settings import ParserSettings


class Operation:
    """ Base for all operations. Defines the interface """
    settings: ParserSettings

    def __init__(self, settings: ParserSettings):
        self.settings = settings

    __slots__ = 'settings',

    def apply_to_queryable(self, data: Queryable) -> Queryable:
        """ Get a new Queryable with this operation applied """
        raise NotImplementedError
