from __future__ import annotations

import dataclasses
import re
from datetime import timezone, tzinfo
from typing import Optional

from memql import exc


@dataclasses.dataclass
class ParserSettings:
    """ Settings for MiddlewareParser

    This object defines additional behavior that may be used with queries:
    page sizes, field name mapping, timezone for datetime coercion, etc
    """
    # The page size you get by default, if neither `first` nor `last` is given
    default_page_size: int = 10

    # The max number of items you get, regardless of the page size
    max_page_size: Optional[int] = None

    # Property mapper: { API field name => internal field name }
    # When provided, only the fields it mentions can be filtered and sorted by.
    # Keys are case-insensitive
    property_mapper: Optional[dict[str, str]] = None

    # Canonical timezone: naive datetimes are assumed to be in this zone.
    # Aware datetimes are converted to it when compared against naive fields
    timezone: tzinfo = timezone.utc

    # Fail on unknown filter operators? When False, they are ignored
    strict_operators: bool = False

    def __post_init__(self):
        if self.default_page_size is None or self.default_page_size <= 0:
            raise ValueError(f'default_page_size must be a positive integer, {self.default_page_size!r} given')

        # Lower-case the keys: API field names are camelCase, but we don't want casing issues
        self.property_mapper = {
            key.lower(): value
            for key, value in (self.property_mapper or {}).items()
        }

    @property
    def using_property_mapper(self) -> bool:
        return bool(self.property_mapper)

    # ### Callbacks for operations

    def get_final_limit(self, limit: Optional[int]) -> int:
        """ Callback that fine-tunes the page size by applying default and max limits

        Used by: the pager operation to decide how many rows to include into a page
        """
        # Apply default limit
        if limit is None:
            limit = self.default_page_size

        # Apply max limit
        if self.max_page_size:
            limit = min(limit, self.max_page_size)

        # Done
        return limit

    def get_internal_field_name(self, api_name: str, *, where: str) -> str:
        """ Callback: convert API field name (e.g. camelCase) to the internal field name (e.g. snake_case)

        Uses the property mapper, if any.

        Raises:
            exc.InvalidFieldError: the property mapper is in use, but does not know this field
        """
        if self.using_property_mapper:
            try:
                name = self.property_mapper[api_name.lower()]  # type: ignore[index]
            except KeyError:
                raise exc.InvalidFieldError('property mapper', self.normalize_field_name(api_name), where=where) from None
        else:
            name = api_name

        return self.normalize_field_name(name)

    def normalize_field_name(self, name: str) -> str:
        """ Callback: name normalization convention. Default: camelCase => snake_case

        Override this method to use a different convention.
        """
        return camel_to_snake(name)


def camel_to_snake(name: str) -> str:
    """ Convert camelCase and PascalCase to snake_case

    Example:
        camel_to_snake('createdAt') -> 'created_at'
        camel_to_snake('HTTPStatus') -> 'http_status'
    """
    name = _FIRST_CAP_RE.sub(r'\1_\2', name)
    name = _ALL_CAP_RE.sub(r'\1_\2', name)
    return name.lower()


_FIRST_CAP_RE = re.compile(r'(.)([A-Z][a-z]+)')
_ALL_CAP_RE = re.compile(r'([a-z0-9])([A-Z])')
