""" Integration with FastAPI """

from .query_object import query_contexts, RequestContexts
