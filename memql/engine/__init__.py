""" Filter, sort and paginate: everything needed to process the inputs """

from .parser import MiddlewareParser
from .context import ResolverContext, FilterContext, SortingContext
from .context import ArgumentsContext, FilterInput, SortingInput
