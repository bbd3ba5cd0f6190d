from enum import Enum

import pytest

from memql import exc
from memql.queryable import Queryable
from memql.settings import ParserSettings
from memql.operations import SortOperation, FieldRegistry
from memql.query_object import SortQuery, SortingField, SortingDirection

from .util.models import User, users, values


# Rows: (a, b)
ROWS = [
    {'a': 3, 'b': 1},
    {'a': 1, 'b': 2},
    {'a': 2, 'b': 1},
    {'a': 1, 'b': 1},
]


def sort_rows(data, groups: list, Model: type = None, *, flip: bool = False, **settings) -> list:
    """ Sort the data """
    op = SortOperation(SortQuery.from_groups(groups), FieldRegistry.for_model(Model), ParserSettings(**settings), flip=flip)
    return op.apply_to_queryable(Queryable(data)).to_list()


@pytest.mark.parametrize(('groups', 'flip', 'expected'), [
    # No sorting: source order
    ([], False, [(3, 1), (1, 2), (2, 1), (1, 1)]),
    ([{}], False, [(3, 1), (1, 2), (2, 1), (1, 1)]),
    # One field. Ties keep the source order
    ([{'a': 'ASC'}], False, [(1, 2), (1, 1), (2, 1), (3, 1)]),
    ([{'a': 'DESC'}], False, [(3, 1), (2, 1), (1, 2), (1, 1)]),
    ([{'a': 'desc'}], False, [(3, 1), (2, 1), (1, 2), (1, 1)]),
    # Tie-breakers
    ([{'a': 'ASC', 'b': 'ASC'}], False, [(1, 1), (1, 2), (2, 1), (3, 1)]),
    ([{'a': 'ASC', 'b': 'DESC'}], False, [(1, 2), (1, 1), (2, 1), (3, 1)]),
    ([{'a': 'DESC', 'b': 'ASC'}], False, [(3, 1), (2, 1), (1, 1), (1, 2)]),
    ([{'b': 'ASC', 'a': 'ASC'}], False, [(1, 1), (2, 1), (3, 1), (1, 2)]),
    # Only the first group is used
    ([{'a': 'DESC'}, {'b': 'ASC'}], False, [(3, 1), (2, 1), (1, 2), (1, 1)]),
    # Flip: every direction is inverted
    ([{'a': 'ASC'}], True, [(3, 1), (2, 1), (1, 2), (1, 1)]),
    ([{'a': 'ASC', 'b': 'ASC'}], True, [(3, 1), (2, 1), (1, 2), (1, 1)]),
    ([{'a': 'ASC', 'b': 'DESC'}], True, [(3, 1), (2, 1), (1, 1), (1, 2)]),
    # Flip, no sorting: source order
    ([], True, [(3, 1), (1, 2), (2, 1), (1, 1)]),
])
def test_sort_results(groups: list, flip: bool, expected: list):
    results = sort_rows(ROWS, groups, flip=flip)
    assert [(row['a'], row['b']) for row in results] == expected


def test_sort_nulls():
    """ None goes first in ascending order, last in descending order """
    data = [{'a': 2}, {'a': None}, {'a': 1}]
    assert values('a', sort_rows(data, [{'a': 'ASC'}])) == [None, 1, 2]
    assert values('a', sort_rows(data, [{'a': 'DESC'}])) == [2, 1, None]


def test_sort_model():
    """ Sort objects of a model """
    data = users('Carol', 'Alice', 'Bob')
    assert values('name', sort_rows(data, [{'name': 'ASC'}], User)) == ['Alice', 'Bob', 'Carol']
    assert values('name', sort_rows(data, [{'displayName': 'DESC'}], User)) == ['Carol', 'Bob', 'Alice']

    # Unknown fields fail
    with pytest.raises(exc.InvalidFieldError) as e:
        sort_rows(data, [{'password': 'ASC'}], User)
    assert e.value.where == 'sort'


def test_sort_property_mapper():
    """ Property mapper: only mapped fields can be sorted by """
    data = [{'full_name': 'b'}, {'full_name': 'a'}]
    assert values('full_name', sort_rows(data, [{'name': 'ASC'}], property_mapper={'Name': 'fullName'})) == ['a', 'b']

    with pytest.raises(exc.InvalidFieldError):
        sort_rows(data, [{'fullName': 'ASC'}], property_mapper={'Name': 'fullName'})


class ForeignDirection(Enum):
    ASC = 1
    DESC = 2


@pytest.mark.parametrize(('value', 'expected'), [
    ('ASC', SortingDirection.ASC),
    ('DESC', SortingDirection.DESC),
    ('desc', SortingDirection.DESC),
    (SortingDirection.DESC, SortingDirection.DESC),
    (ForeignDirection.DESC, SortingDirection.DESC),
    (ForeignDirection.ASC, SortingDirection.ASC),
    # Anything else is ascending
    ('up', SortingDirection.ASC),
    (None, SortingDirection.ASC),
])
def test_sorting_direction(value, expected: SortingDirection):
    assert SortingDirection.parse(value) == expected


def test_sort_input_parse():
    """ Sort input: parse, export """
    query = SortQuery.from_groups([{'a': 'ASC', 'b': 'DESC'}, {'c': 'ASC'}])
    assert query.fields == [
        SortingField(name='a', direction=SortingDirection.ASC),
        SortingField(name='b', direction=SortingDirection.DESC),
    ]
    assert 'a' in query
    assert 'c' not in query
    assert query.export() == [{'a': 'ASC', 'b': 'DESC'}]

    # Empty
    assert SortQuery.from_groups(None).fields == []
    assert SortQuery.from_groups([]).export() == []

    # Malformed
    with pytest.raises(exc.QueryObjectError):
        SortQuery.from_groups('a')
    with pytest.raises(exc.QueryObjectError):
        SortQuery.from_groups(['a'])
