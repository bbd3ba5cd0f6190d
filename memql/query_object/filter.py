""" Filter input: the "where" argument

Example:
    {
        name: { startsWith: "A" },
        or: [
            { age: { gte: 18, lt: 65 } },
            { isAdmin: { eq: true } },
        ],
    }
"""

from __future__ import annotations

from collections import abc
from dataclasses import dataclass
from typing import Any, Optional, Union

from memql import exc
from memql.util.funcy import collecting

from .base import OperationInputBase


# Boolean operators: keys that combine groups of conditions
AND, OR = 'and', 'or'
BOOLEAN_OPERATORS = frozenset((AND, OR))


@dataclass
class FilterQuery(OperationInputBase):
    """ Filter input: a list of conditions, ANDed together """
    # List of conditions: field conditions and/or boolean conditions
    conditions: list[FilterExpressionBase]

    @classmethod
    def from_filter(cls, filter: Optional[abc.Mapping[str, Any]]):
        """ Parse the filter tree: the way you get it from the API """
        # Empty
        if filter is None:
            return cls(conditions=[])

        # Check types
        if not isinstance(filter, abc.Mapping):
            raise exc.QueryObjectError('"filter" must be an object')

        # Construct
        return cls(conditions=cls._parse_input_fields(filter))

    def export(self) -> dict:
        return export_conditions(self.conditions)

    @classmethod
    @collecting
    def _parse_input_fields(cls, condition: abc.Mapping) -> abc.Iterator[FilterExpressionBase]:
        # Iterate the object
        for key, value in condition.items():
            # "and", "or": a boolean expression
            if key in BOOLEAN_OPERATORS:
                yield cls._parse_input_boolean_expression(key, value)
            # Everything else is a field expression
            else:
                yield from cls._parse_input_field_expressions(key, value)

    @classmethod
    def _parse_input_field_expressions(cls, field_name: str, value: Union[abc.Mapping[str, Any], Any]):
        # If the value is not a dict, it's a shortcut: { key: value }
        if not isinstance(value, abc.Mapping):
            yield FieldFilterExpression(field=field_name, operator='eq', value=value)
        # If the value is a dict, every item will be an operator and an operand
        else:
            for operator, operand in value.items():
                yield FieldFilterExpression(field=field_name, operator=operator, value=operand)

    @classmethod
    def _parse_input_boolean_expression(cls, operator: str, groups: Any):
        # Check types
        if not isinstance(groups, (list, tuple)):
            raise exc.QueryObjectError(f'"{operator}" operand must be an array')

        for group in groups:
            if not isinstance(group, abc.Mapping):
                raise exc.QueryObjectError(f'"{operator}" operand must be an array of objects')

        # Construct.
        # Every group is a separate clause; conditions inside a group are ANDed
        return BooleanFilterExpression(
            operator=operator,
            clauses=[
                FilterGroup(conditions=cls._parse_input_fields(group))
                for group in groups
            ]
        )


class FilterExpressionBase:
    """ Base class for filter expressions """

    def export(self) -> dict:
        raise NotImplementedError


@dataclass
class FieldFilterExpression(FilterExpressionBase):
    """ A filter for a field

    Example:
        { age: {gt: 18} }
    """
    field: str
    operator: str
    value: Any

    __slots__ = 'field', 'operator', 'value'

    def export(self) -> dict:
        return {self.field: {self.operator: self.value}}


@dataclass
class BooleanFilterExpression(FilterExpressionBase):
    """ A filter with a boolean expression

    Example:
        { or: [ ..., ... ] }
    """
    operator: str
    clauses: list[FilterGroup]

    __slots__ = 'operator', 'clauses'

    def export(self) -> dict:
        return {
            self.operator: [
                clause.export()
                for clause in self.clauses
            ]
        }


@dataclass
class FilterGroup(FilterExpressionBase):
    """ A group of conditions inside a boolean expression. Conditions are ANDed

    Example:
        { or: [ <group>, <group> ] }
    """
    conditions: list[FilterExpressionBase]

    __slots__ = 'conditions',

    def export(self) -> dict:
        return export_conditions(self.conditions)


def export_conditions(conditions: abc.Iterable[FilterExpressionBase]) -> dict:
    """ Export a list of conditions as one object. Operators of the same field are merged together """
    res: dict = {}
    for condition in conditions:
        for key, value in condition.export().items():
            if isinstance(condition, FieldFilterExpression) and key in res:
                res[key].update(value)
            else:
                res[key] = value
    return res
