from __future__ import annotations

import logging
from collections import abc
from typing import Any, Optional, TYPE_CHECKING

from memql import exc
from memql.queryable import Queryable
from memql.query_object.filter import AND, OR
from memql.query_object.filter import FilterQuery, FilterExpressionBase, FieldFilterExpression, BooleanFilterExpression, FilterGroup
from memql.typing import Predicate

from .base import Operation
from .coerce import coerce_value
from .fields import FieldRegistry, resolve_field


if TYPE_CHECKING:
    from memql.settings import ParserSettings


logger = logging.getLogger(__name__)


class FilterOperation(Operation):
    """ Filter: applies a filter condition

    Handles: the "where" argument
    When applied to a Queryable:
    * Compiles the whole filter tree into one predicate
    * Keeps the rows that match it
    """
    filter: FilterQuery
    fields: FieldRegistry

    def __init__(self, filter: FilterQuery, fields: FieldRegistry, settings: ParserSettings):
        super().__init__(settings)
        self.filter = filter
        self.fields = fields

    __slots__ = 'filter', 'fields'

    def apply_to_queryable(self, data: Queryable) -> Queryable:
        """ Filter the data: add a where() step """
        predicate = self.compile()

        # No conditions: nothing to do
        if predicate is None:
            return data

        return data.where(predicate)

    def compile(self) -> Optional[Predicate]:
        """ Compile the filter into a predicate

        Every field is resolved and every value is coerced right here, so errors are reported
        before any data is touched.

        Returns:
            predicate, or None if there are no conditions

        Raises:
            exc.InvalidFieldError
            exc.UnsupportedCoercionError
            exc.UnsupportedOperatorError: only in strict mode
        """
        return all_of(
            self._compile_condition(condition)
            for condition in self.filter.conditions
        )

    def _compile_condition(self, condition: FilterExpressionBase) -> Optional[Predicate]:
        """ Compile any condition

        Args:
            condition: a field expression (field == value), a boolean expression (x OR y OR z), or a group of them
        """
        # Field expressions
        if isinstance(condition, FieldFilterExpression):
            return self._compile_field_condition(condition)
        # Boolean expressions
        elif isinstance(condition, BooleanFilterExpression):
            return self._compile_boolean_conditions(condition)
        # Groups: conditions ANDed together
        elif isinstance(condition, FilterGroup):
            return all_of(self._compile_condition(c) for c in condition.conditions)
        # Surprised facial expressions
        else:
            raise NotImplementedError(repr(condition))

    def _compile_field_condition(self, condition: FieldFilterExpression) -> Optional[Predicate]:
        """ Compile a field condition: e.g. "field == value"

        A field expression is represented by a class that encapsulates the following syntax:

            field operator value
        """
        # Resolve the field, coerce the value to its type
        field = resolve_field(condition.field, self.fields, self.settings, where='filter')
        value = coerce_value(condition.value, field.type, timezone=self.settings.timezone)

        # Get the callable for the operator
        operator_lambda = self._get_operator_lambda(condition)
        if operator_lambda is None:
            return None

        # Apply the operator
        getter = field.getter
        return lambda row: operator_lambda(getter(row), value)

    def _compile_boolean_conditions(self, condition: BooleanFilterExpression) -> Optional[Predicate]:
        """ Compile a boolean expression: e.g. "x AND y AND z"

        A boolean expression is represented by a class that encapsulates the following syntax:

            operator ( group, group, group )
        """
        criteria = [self._compile_condition(c) for c in condition.clauses]

        if condition.operator == OR:
            return any_of(criteria)
        elif condition.operator == AND:
            return all_of(criteria)
        else:
            raise NotImplementedError(f'Unsupported boolean operator: {condition.operator}')

    def _get_operator_lambda(self, condition: FieldFilterExpression) -> Optional[abc.Callable[[Any, Any], bool]]:
        """ Get a callable that implements the operator. None if not supported """
        try:
            return self.OPERATORS[condition.operator]
        except KeyError:
            if self.settings.strict_operators:
                raise exc.UnsupportedOperatorError(condition.operator, condition.field) from None

            logger.warning('Ignoring unsupported filter operator %r for field %r', condition.operator, condition.field)
            return None

    # region Library

    # Mapping:
    #   'operator-name': lambda field_value, filter_value
    # Comparisons are false when either side is None
    OPERATORS: dict[str, abc.Callable[[Any, Any], bool]] = {
        'eq': lambda val, arg: val == arg,
        'neq': lambda val, arg: val != arg,
        'contains': lambda val, arg: val is not None and arg is not None and arg in val,
        'startsWith': lambda val, arg: isinstance(val, str) and isinstance(arg, str) and val.startswith(arg),
        'endsWith': lambda val, arg: isinstance(val, str) and isinstance(arg, str) and val.endswith(arg),
        # Less than; not greater than or equal
        'lt': lambda val, arg: val is not None and arg is not None and val < arg,
        'ngte': lambda val, arg: val is not None and arg is not None and val < arg,
        # Less than or equal; not greater than
        'lte': lambda val, arg: val is not None and arg is not None and val <= arg,
        'ngt': lambda val, arg: val is not None and arg is not None and val <= arg,
        # Greater than; not less than or equal
        'gt': lambda val, arg: val is not None and arg is not None and val > arg,
        'nlte': lambda val, arg: val is not None and arg is not None and val > arg,
        # Greater than or equal; not less than
        'gte': lambda val, arg: val is not None and arg is not None and val >= arg,
        'nlt': lambda val, arg: val is not None and arg is not None and val >= arg,
    }

    @classmethod
    def add_operator(cls, name: str, callable: abc.Callable[[Any, Any], bool]):
        """ Add a filter operator

        NOTE: This will add an operator that is effective application-wide.
        To keep it local, subclass FilterOperation and override OPERATORS

        Args:
            name: Operator name. For instance: "in"
            callable: A function that implements the operator.
                Accepts two arguments: field value, filter value
        """
        cls.OPERATORS[name] = callable

    # endregion


def all_of(predicates: abc.Iterable[Optional[Predicate]]) -> Optional[Predicate]:
    """ Combine predicates with AND. Missing ones are skipped; None if nothing remains """
    predicates = [p for p in predicates if p is not None]
    if not predicates:
        return None
    elif len(predicates) == 1:
        return predicates[0]
    else:
        return lambda row: all(p(row) for p in predicates)


def any_of(predicates: abc.Iterable[Optional[Predicate]]) -> Optional[Predicate]:
    """ Combine predicates with OR. Missing ones are skipped; None if nothing remains """
    predicates = [p for p in predicates if p is not None]
    if not predicates:
        return None
    elif len(predicates) == 1:
        return predicates[0]
    else:
        return lambda row: any(p(row) for p in predicates)
