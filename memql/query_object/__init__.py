""" Tools for parsing the inputs: filter, sort, paging

These classes only represent the internal structure of the inputs.
They do not touch the data in any way.
"""

from .base import OperationInputBase
from .filter import FilterQuery, FilterExpressionBase, FieldFilterExpression, BooleanFilterExpression, FilterGroup
from .sort import SortQuery, SortingField, SortingDirection
from .pager import PagingArgs
