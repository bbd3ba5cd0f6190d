""" Operations that implement the inputs

* filter: filter conditions
* sort: define the order
* pager: paginate (with cursors)
"""

from .base import Operation
from .filter import FilterOperation
from .sort import SortOperation
from .pager import PagerOperation, PageWindow, PageInfo

from .fields import Field, FieldRegistry
from .coerce import FieldType, coerce_value
