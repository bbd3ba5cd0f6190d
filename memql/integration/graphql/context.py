""" Host contexts for graphql-core resolvers

Arguments are taken from the resolver. Default argument names:

    type Query {
        users(where: UserFilterInput, order: [UserSortInput!], first: Int, after: String, last: Int, before: String): UserConnection!
    }
"""

from __future__ import annotations

from collections import abc
from typing import Any, NamedTuple, Optional

import graphql
from graphql.execution.values import get_argument_values

from memql.engine import MiddlewareParser, ArgumentsContext, FilterInput, SortingInput


class GraphQLResolverContext(ArgumentsContext):
    """ Resolver context for a graphql-core resolver

    Argument values are the ones your resolver gets as `**kwargs`.
    If you don't have them, they are coerced from the query and its variables.
    """

    def __init__(self, info: graphql.GraphQLResolveInfo, arguments: Optional[abc.Mapping[str, Any]] = None):
        self.info = info
        super().__init__(arguments if arguments is not None else resolver_arguments(info))


class GraphQLContexts(NamedTuple):
    """ Everything the parser needs from a resolver """
    resolver: GraphQLResolverContext
    filter: FilterInput
    sorting: SortingInput


def graphql_contexts(info: graphql.GraphQLResolveInfo, arguments: Optional[abc.Mapping[str, Any]] = None, *,
                     filter_argument: str = 'where',
                     sort_argument: str = 'order',
                     ) -> GraphQLContexts:
    """ Get host contexts for the current resolver

    Args:
        info: The `info` object from your field resolver function
        arguments: Resolver arguments (the `**kwargs`). Default: get them from `info`
        filter_argument: Name of the argument with the filter tree
        sort_argument: Name of the argument with sorting
    """
    resolver = GraphQLResolverContext(info, arguments)

    # Sorting: a list of groups. Accept a single group as well
    order = resolver.argument_value(sort_argument)
    if isinstance(order, abc.Mapping):
        order = [order]

    return GraphQLContexts(
        resolver=resolver,
        filter=FilterInput(resolver.argument_value(filter_argument)),
        sorting=SortingInput(order),
    )


def parser_for(data: Any, info: graphql.GraphQLResolveInfo, arguments: Optional[abc.Mapping[str, Any]] = None, *,
               filter_argument: str = 'where',
               sort_argument: str = 'order',
               **parser_kwargs) -> MiddlewareParser:
    """ Get a MiddlewareParser for the current resolver

    Example:
        def resolve_users(root, info: graphql.GraphQLResolveInfo, **kwargs):
            parser = parser_for(load_users(), info, kwargs, model=User)
            return parser.build_connection(parser.parse().to_list())

    Args:
        data: The data source
        info: The `info` object from your field resolver function
        arguments: Resolver arguments (the `**kwargs`). Default: get them from `info`
        **parser_kwargs: MiddlewareParser arguments: default_page_size, property_mapper, model, settings
    """
    resolver, filter, sorting = graphql_contexts(info, arguments, filter_argument=filter_argument, sort_argument=sort_argument)
    return MiddlewareParser(data, resolver, filter, sorting, **parser_kwargs)


def resolver_arguments(info: graphql.GraphQLResolveInfo) -> dict[str, Any]:
    """ Get argument values for the field that is being resolved """
    assert len(info.field_nodes) == 1  # I've never seen a selection of > 1 field
    field_node = list(info.field_nodes)[0]  # we cannot do [0] directly on its type: `Collection`
    field_def = info.parent_type.fields[info.field_name]
    return get_argument_values(field_def, field_node, info.variable_values)
