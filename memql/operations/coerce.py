""" Type coercion: make filter values comparable to fields

Values come from the API and don't always have the type of the field they're compared against.
A few known mismatches are converted; anything else is an error.
"""

from __future__ import annotations

import numbers
import types
import typing
from datetime import datetime, tzinfo
from typing import Any, NamedTuple, Optional, Union

from memql import exc
from memql.typing import TZ_AWARE


# Kinds for datetime: naive datetimes and timezone-aware ones are different kinds of values
DATETIME = 'datetime'
DATETIME_AWARE = 'datetime (tz-aware)'


class FieldType(NamedTuple):
    """ The declared type of a field """
    # A class, or one of the datetime kinds
    kind: Union[type, str]
    # Is it Optional[]?
    nullable: bool

    @property
    def name(self) -> str:
        name = _kind_name(self.kind)
        return f'Optional[{name}]' if self.nullable else name


def describe_type(type_: Any) -> Optional[FieldType]:
    """ Describe a type annotation. Returns `None` if the type is not supported for coercion

    Example:
        describe_type(int) -> FieldType(int, False)
        describe_type(Optional[datetime]) -> FieldType('datetime', True)
        describe_type(Optional[AwareDatetime]) -> FieldType('datetime (tz-aware)', True)
    """
    nullable = False

    # Optional[X], X | None
    if typing.get_origin(type_) in (Union, types.UnionType):
        args = [arg for arg in typing.get_args(type_) if arg is not type(None)]
        if len(args) != 1:
            return None
        type_, nullable = args[0], True

    # Annotated[X, ...]
    aware = False
    if typing.get_origin(type_) is typing.Annotated:
        aware = TZ_AWARE in type_.__metadata__
        type_ = typing.get_args(type_)[0]

    # Generic aliases: list[int] => list
    type_ = typing.get_origin(type_) or type_

    if type_ is typing.Any:
        return None
    elif type_ is datetime:
        return FieldType(DATETIME_AWARE if aware else DATETIME, nullable)
    elif isinstance(type_, type):
        return FieldType(type_, nullable)
    else:
        return None


def value_kind(value: Any) -> Union[type, str]:
    """ Get the kind of a value: its class, or a datetime kind """
    if isinstance(value, datetime):
        return DATETIME if value.tzinfo is None else DATETIME_AWARE
    return type(value)


def needs_coercion(value: Any, field_type: FieldType) -> bool:
    """ Check whether the value has a different representation than the field """
    # None is compared as is
    if value is None:
        return False

    kind = field_type.kind

    # Datetime fields: naive and aware datetimes can't be compared
    if isinstance(kind, str):
        return value_kind(value) != kind

    # Instances and subclasses are fine. Numbers are comparable to one another
    try:
        if isinstance(value, kind):
            return False
        if isinstance(value, numbers.Number) and issubclass(kind, numbers.Number):
            return False
    except TypeError:
        # Classes that refuse instance checks: e.g. non-runtime protocols. Compared as is
        return False

    return True


def coerce_value(value: Any, field_type: Optional[FieldType], *, timezone: tzinfo) -> Any:
    """ Convert a filter value to the representation of the field

    Args:
        value: The value to convert
        field_type: The declared type of the field. `None` if unknown: the value is used as is
        timezone: The canonical timezone. Naive datetimes are assumed to be in this zone

    Raises:
        exc.UnsupportedCoercionError
    """
    if field_type is None or not needs_coercion(value, field_type):
        return value

    kind, target = value_kind(value), field_type.kind

    # aware datetime => naive datetime in the canonical zone
    if kind == DATETIME_AWARE and target == DATETIME:
        return value.astimezone(timezone).replace(tzinfo=None)
    # naive datetime => aware. Assuming it is already in the canonical zone
    elif kind == DATETIME and target == DATETIME_AWARE:
        return value.replace(tzinfo=timezone)
    # "123" => Optional[int]. Best effort: unparsable strings become 0
    elif kind is str and target is int and field_type.nullable:
        try:
            return int(value)
        except ValueError:
            return 0
    else:
        raise exc.UnsupportedCoercionError(_kind_name(kind), field_type.name)


def _kind_name(kind: Union[type, str]) -> str:
    return kind if isinstance(kind, str) else kind.__name__
