import pytest

import graphql

from memql.integration.graphql import parser_for, graphql_contexts, graphql_relay_schema

from .util.graphql import graphql_query_sync, resolves
from .util.models import User


USERS = [
    User(id=1, name='Alice', age=30),
    User(id=2, name='Bob', age=17),
    User(id=3, name='Carol', age=45),
    User(id=4, name='Dave', age=None),
    User(id=5, name='Eve', age=22),
]


@pytest.mark.parametrize(('query', 'variables', 'expected'), [
    # Filter, sort, first
    (
        '''
        query {
            users(where: { age: { gte: 18 } }, order: [{ age: ASC }], first: 2) {
                edges { node { id name } cursor }
                pageInfo { hasNextPage hasPreviousPage endCursor }
                totalCount
            }
        }
        ''',
        {},
        {
            'ids': [5, 1],
            'totalCount': 3,
            'pageInfo': {'hasNextPage': True, 'hasPreviousPage': False, 'endCursor': 'Mg=='},
        },
    ),
    # Sort, last
    (
        '''
        query {
            users(order: [{ id: DESC }], last: 2) {
                edges { node { id name } cursor }
                pageInfo { hasNextPage hasPreviousPage endCursor }
                totalCount
            }
        }
        ''',
        {},
        {
            'ids': [2, 1],
            'totalCount': 5,
            'pageInfo': {'hasNextPage': True, 'hasPreviousPage': False, 'endCursor': 'Mg=='},
        },
    ),
    # Boolean groups, variables
    (
        '''
        query($where: UserFilterInput) {
            users(where: $where, order: [{ name: ASC }]) {
                edges { node { id name } cursor }
                pageInfo { hasNextPage hasPreviousPage endCursor }
                totalCount
            }
        }
        ''',
        {'where': {'or': [{'name': {'startsWith': 'A'}}, {'name': {'eq': 'Eve'}}]}},
        {
            'ids': [1, 5],
            'totalCount': 2,
            'pageInfo': {'hasNextPage': False, 'hasPreviousPage': False, 'endCursor': 'MTA='},
        },
    ),
    # Cursor
    (
        '''
        query($after: String) {
            users(first: 2, after: $after) {
                edges { node { id name } cursor }
                pageInfo { hasNextPage hasPreviousPage endCursor }
                totalCount
            }
        }
        ''',
        {'after': 'MQ=='},
        {
            'ids': [3, 4],
            'totalCount': 5,
            'pageInfo': {'hasNextPage': True, 'hasPreviousPage': True, 'endCursor': 'NA=='},
        },
    ),
])
@pytest.mark.parametrize('pass_arguments', [True, False])
def test_users_connection(query: str, variables: dict, expected: dict, pass_arguments: bool):
    """ Test: filter, sort, paginate through a GraphQL resolver """
    schema = graphql.build_schema(GQL_SCHEMA + graphql_relay_schema)

    @resolves(schema, 'Query', 'users')
    def resolve_users(root, info: graphql.GraphQLResolveInfo, **kwargs):
        # Arguments: either given, or taken from `info`
        parser = parser_for(USERS, info, kwargs if pass_arguments else None, model=User)
        page = parser.parse().to_list()
        return parser.build_connection([{'id': user.id, 'name': user.name} for user in page])

    res = graphql_query_sync(schema, query, **variables)
    connection = res['users']

    assert [edge['node']['id'] for edge in connection['edges']] == expected['ids']
    assert connection['totalCount'] == expected['totalCount']
    assert connection['pageInfo'] == expected['pageInfo']


def test_graphql_contexts():
    """ Test: host contexts, custom argument names """
    schema = graphql.build_schema('''
        type Query {
            items(filter: ItemFilterInput, sort: ItemSortInput, first: Int): [Item!]!
        }

        type Item { id: Int! }
        input ItemFilterInput { id: IntOperationFilterInput }
        input ItemSortInput { id: SortEnumType }
        input IntOperationFilterInput { eq: Int, gt: Int }
    ''' + graphql_relay_schema)

    @resolves(schema, 'Query', 'items')
    def resolve_items(root, info: graphql.GraphQLResolveInfo, **kwargs):
        nonlocal contexts
        contexts = graphql_contexts(info, filter_argument='filter', sort_argument='sort')
        return []

    contexts = None
    graphql_query_sync(schema, 'query { items(filter: { id: { gt: 1 } }, sort: { id: DESC }, first: 5) { id } }')

    assert contexts.filter.to_dict() == {'id': {'gt': 1}}
    assert contexts.sorting.to_list() == [{'id': 'DESC'}]  # a single group becomes a list
    assert contexts.resolver.argument_value('first') == 5
    assert contexts.resolver.argument_value('after') is None


# language=graphql
GQL_SCHEMA = '''
type Query {
    users(where: UserFilterInput, order: [UserSortInput!], first: Int, after: String, last: Int, before: String): UserConnection!
}

type User {
    id: Int!
    name: String!
}

type UserConnection {
    edges: [UserEdge!]!
    pageInfo: PageInfo!
    totalCount: Int!
}

type UserEdge {
    node: User!
    cursor: String!
}

input UserFilterInput {
    and: [UserFilterInput!]
    or: [UserFilterInput!]
    id: IntOperationFilterInput
    name: StringOperationFilterInput
    age: IntOperationFilterInput
}

input UserSortInput {
    id: SortEnumType
    name: SortEnumType
    age: SortEnumType
}

input IntOperationFilterInput {
    eq: Int
    neq: Int
    gt: Int
    gte: Int
    lt: Int
    lte: Int
}

input StringOperationFilterInput {
    eq: String
    neq: String
    contains: String
    startsWith: String
    endsWith: String
}
'''
