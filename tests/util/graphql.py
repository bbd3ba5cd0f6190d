""" Making queries with GraphQL """

from typing import Any, Optional, Union

import graphql


def graphql_query_sync(schema: graphql.GraphQLSchema, query: str, **variable_values):
    """ Make a GraphqQL query, quick. Fail on errors. """
    res = graphql.graphql_sync(schema, query, variable_values=variable_values)

    # Raise errors as exceptions. Useful in unit-tests.
    if res.errors:
        if len(res.errors) == 1:
            raise res.errors[0]
        else:
            raise RuntimeError(res.errors)

    return res.data


def resolves(schema: graphql.GraphQLSchema, type_name: str, field_name: Optional[str]):
    """ Quickly bind a resolver to a field

    Example:
        @resolves(gql_schema, 'Query', 'users')
        def resolve_users(root, info: graphql.GraphQLResolveInfo, **kwargs):
            ...
    """
    type: Union[graphql.GraphQLObjectType, Any] = schema.type_map[type_name]
    target = type if not field_name else type.fields[field_name]

    def decorator(func):
        target.resolve = func
        return func
    return decorator
