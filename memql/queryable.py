""" Queryable: a lazily evaluated sequence that can be filtered, sorted and sliced

Nothing is evaluated until the sequence is iterated over: every method returns a new Queryable
that remembers the steps to apply to the source.
"""

from __future__ import annotations

import itertools
from collections import abc
from typing import Generic, NamedTuple, Optional, TypeVar, Union

from memql import exc
from memql.typing import FieldGetter, Predicate


T = TypeVar('T')

# A step of the pipeline: gets an iterable of rows, returns an iterable of rows
Step = abc.Callable[[abc.Iterable], abc.Iterable]


class SortKey(NamedTuple):
    """ A sorting key: a field value extractor and the direction """
    getter: FieldGetter
    descending: bool


class Queryable(Generic[T]):
    """ A lazily evaluated sequence of rows

    The source can be:
    * A collection (list, tuple, ...): can be iterated over many times
    * A function that returns an iterable: it's called every time the sequence is evaluated
    * An iterator (e.g. a generator): can only be iterated over once, and can't be counted
    """
    source: Union[abc.Iterable[T], abc.Callable[[], abc.Iterable[T]]]
    steps: tuple[Step, ...]

    def __init__(self, source: Union[abc.Iterable[T], abc.Callable[[], abc.Iterable[T]]], steps: abc.Iterable[Step] = ()):
        self.source = source
        self.steps = tuple(steps)

    __slots__ = 'source', 'steps'

    @classmethod
    def ensure(cls, data: Optional[Union[Queryable[T], abc.Iterable[T], abc.Callable[[], abc.Iterable[T]]]]) -> Queryable[T]:
        """ Construct a Queryable from any valid input """
        if data is None:
            return cls(())
        elif isinstance(data, Queryable):
            return data
        elif isinstance(data, abc.Iterable) or callable(data):
            return cls(data)
        else:
            raise TypeError(f'Queryable source must be iterable, "{type(data).__name__}" given')

    @property
    def reiterable(self) -> bool:
        """ Can this sequence be evaluated more than once? """
        return callable(self.source) or not isinstance(self.source, abc.Iterator)

    # Operations

    def where(self, predicate: Predicate) -> Queryable[T]:
        """ Keep rows that match the predicate """
        return self._chain(lambda rows: filter(predicate, rows))

    def order_by(self, keys: abc.Sequence[SortKey]) -> Queryable[T]:
        """ Sort rows by multiple keys. The first key is the primary one; others are tie-breakers """
        keys = tuple(keys)
        if not keys:
            return self
        return self._chain(OrderByStep(keys))

    def skip(self, n: int) -> Queryable[T]:
        """ Skip the first `n` rows """
        return self._chain(lambda rows: itertools.islice(rows, n, None))

    def take(self, n: int) -> Queryable[T]:
        """ Include at most `n` rows """
        return self._chain(lambda rows: itertools.islice(rows, n))

    # Evaluation

    def __iter__(self) -> abc.Iterator[T]:
        rows: abc.Iterable = self.source() if callable(self.source) else self.source
        for step in self.steps:
            rows = step(rows)
        return iter(rows)

    def count(self) -> int:
        """ Count the rows

        Raises:
            exc.CountNotSupportedError: the source is an iterator: counting would consume it
        """
        if not self.reiterable:
            raise exc.CountNotSupportedError(f'Cannot count a one-shot sequence: {type(self.source).__name__}')

        # Sorting does not change the count: skip it
        steps = [step for step in self.steps if not isinstance(step, OrderByStep)]

        # Count without iterating, if possible
        if not steps and isinstance(self.source, abc.Sized):
            return len(self.source)

        return sum(1 for _ in type(self)(self.source, steps))

    def to_list(self) -> list[T]:
        """ Evaluate the sequence """
        return list(self)

    def materialize(self) -> Queryable[T]:
        """ Evaluate the sequence and get a new Queryable over the results

        Use it to re-order results after paging: pending steps are not re-applied.
        """
        return type(self)(self.to_list())

    def _chain(self, step: Step) -> Queryable[T]:
        return type(self)(self.source, self.steps + (step,))

    def __repr__(self):
        return f'{type(self).__name__}({self.source!r}, steps={len(self.steps)})'


class OrderByStep:
    """ A sorting step. Counting skips it """
    __slots__ = 'keys',

    def __init__(self, keys: tuple[SortKey, ...]):
        self.keys = keys

    def __call__(self, rows: abc.Iterable) -> list:
        return sort_rows(rows, self.keys)


def sort_rows(rows: abc.Iterable, keys: abc.Sequence[SortKey]) -> list:
    """ Sort rows by multiple keys with mixed directions

    Python's sort is stable, so we sort by the least significant key first,
    and the primary key last.

    None values are considered smaller than anything else: they go first in ascending order
    """
    result = list(rows)
    for key in reversed(keys):
        result.sort(key=_nulls_first(key.getter), reverse=key.descending)
    return result


def _nulls_first(getter: FieldGetter) -> abc.Callable:
    def key(row):
        value = getter(row)
        return (value is not None, value)
    return key
