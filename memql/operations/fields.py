""" Field registry: how to get field values from rows

Every field that can be filtered or sorted by is represented by a getter function and,
if known, the declared type of the field. The registry is built once per model.
"""

from __future__ import annotations

import dataclasses
import operator
import typing
from collections import abc
from functools import lru_cache
from typing import Any, Optional, TYPE_CHECKING

from memql import exc
from memql.typing import FieldGetter, Row
from .coerce import FieldType, describe_type


if TYPE_CHECKING:
    from memql.settings import ParserSettings


@dataclasses.dataclass(frozen=True)
class Field:
    """ A field of a model """
    # Internal field name
    name: str

    # Value extractor
    getter: FieldGetter

    # The declared type. `None` if unknown: values compared against it are used as is
    type: Optional[FieldType] = None


class FieldRegistry:
    """ A collection of fields for a model

    With a model: fields are taken from its type annotations.
    Without a model: fields are looked up dynamically: dict rows by key, objects by attribute
    """
    # The model, or None for dynamic lookups
    Model: Optional[type]

    # Fields: { internal name => Field }
    fields: dict[str, Field]

    def __init__(self, Model: Optional[type] = None):
        self.Model = Model
        self.fields = {}

        if Model is not None:
            for name, type_ in _get_type_hints(Model).items():
                self.register(name, _make_getter(Model, name), type=type_)

    @classmethod
    def for_model(cls, Model: Optional[type]) -> FieldRegistry:
        """ Get a registry for a model. Cached. """
        if Model is None:
            return cls()
        return _registry_for_model(Model)

    @property
    def model_name(self) -> str:
        return self.Model.__name__ if self.Model is not None else 'row'

    def register(self, name: str, getter: FieldGetter, *, type: Any = None) -> Field:
        """ Register a custom field

        Args:
            name: Internal field name
            getter: Function that gets the field's value from a row
            type: The declared type of the field, e.g. `Optional[int]`. Used for value coercion.
        """
        field = Field(name=name, getter=getter, type=describe_type(type) if type is not None else None)
        self.fields[name] = field
        return field

    def get(self, name: str, *, where: str) -> Field:
        """ Get a field by its internal name

        Raises:
            exc.InvalidFieldError
        """
        try:
            return self.fields[name]
        except KeyError:
            pass

        # Dynamic lookup
        if self.Model is None:
            return Field(name=name, getter=_dynamic_getter(name))

        # Attributes that have no annotation: properties, etc
        if hasattr(self.Model, name) and not name.startswith('_'):
            return Field(name=name, getter=operator.attrgetter(name))

        raise exc.InvalidFieldError(self.model_name, name, where=where)


@lru_cache(maxsize=None)
def _registry_for_model(Model: type) -> FieldRegistry:
    return FieldRegistry(Model)


def _get_type_hints(Model: type) -> dict[str, Any]:
    """ Get annotated fields of a model """
    try:
        hints = typing.get_type_hints(Model, include_extras=True)
    except (NameError, TypeError):
        # Unresolvable forward references: fall back to raw annotations
        hints = {}
        for klass in reversed(Model.__mro__):
            hints.update(getattr(klass, '__annotations__', {}))

    return {
        name: type_
        for name, type_ in hints.items()
        if not name.startswith('_') and typing.get_origin(type_) is not typing.ClassVar
    }


def _make_getter(Model: type, name: str) -> FieldGetter:
    # TypedDict rows are plain dicts
    if typing.is_typeddict(Model):
        return operator.itemgetter(name)
    else:
        return operator.attrgetter(name)


def _dynamic_getter(name: str) -> FieldGetter:
    """ Get a field from a row: by key if it's a mapping, by attribute otherwise """
    def getter(row: Row):
        if isinstance(row, abc.Mapping):
            return row[name]
        else:
            return getattr(row, name)
    return getter


def resolve_field(api_name: str, registry: FieldRegistry, settings: ParserSettings, *, where: str) -> Field:
    """ Given an API field name, find the field. Otherwise, fail.

    The name goes through the property mapper (if any) and name normalization.

    Raises:
        exc.InvalidFieldError
    """
    name = settings.get_internal_field_name(api_name, where=where)
    return registry.get(name, where=where)
