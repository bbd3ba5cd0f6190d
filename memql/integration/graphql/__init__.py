""" Integration with GraphQL: graphql-core """

# High-level APIs
from .context import parser_for, graphql_contexts
from .relay import graphql_relay_schema, build_connection

# Lower-level APIs
from .context import GraphQLResolverContext, GraphQLContexts, resolver_arguments
