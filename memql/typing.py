from collections import abc
from datetime import datetime
from typing import Any, Annotated


# Marker: a datetime field that carries a UTC offset
TZ_AWARE = 'tz-aware'

# Annotation for timezone-aware datetime fields.
# A bare `datetime` annotation is a plain (naive) timestamp
AwareDatetime = Annotated[datetime, TZ_AWARE]

# A row: an element of the queried sequence. Dicts, dataclasses, any objects
Row = Any

# Annotation for a field value extractor
FieldGetter = abc.Callable[[Row], Any]

# Annotation for a compiled filter condition
Predicate = abc.Callable[[Row], bool]
