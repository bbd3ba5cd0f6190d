from typing import Any, NamedTuple, Optional

import fastapi
import yaml

from memql import exc
from memql.engine import ArgumentsContext, FilterInput, SortingInput


class RequestContexts(NamedTuple):
    """ Everything the parser needs from a request

    Example:
        @app.get('/api/users')
        def list_users(contexts: RequestContexts = Depends(query_contexts)):
            parser = MiddlewareParser(users, *contexts)
            return parser.build_connection(parser.parse().to_list())
    """
    resolver: ArgumentsContext
    filter: FilterInput
    sorting: SortingInput


def query_contexts(*,
        where: Optional[str] = fastapi.Query(
            None,
            title='Filter criteria.',
            description='Example: `{ age: { gte: 18 }, or: [ {name: {startsWith: "A"}}, {name: {eq: "Bob"}} ] }`. JSON or YAML.',
        ),
        order: Optional[str] = fastapi.Query(
            None,
            title='Sorting order.',
            description='Field names with directions. Example: `{ name: ASC, age: DESC }`. JSON or YAML.',
        ),
        first: Optional[int] = fastapi.Query(
            None,
            title='Pagination. The number of items to include, from the start.',
            ge=0,
        ),
        after: Optional[str] = fastapi.Query(
            None,
            title='Pagination. Cursor: include items after this one.',
        ),
        last: Optional[int] = fastapi.Query(
            None,
            title='Pagination. The number of items to include, from the end.',
            ge=0,
        ),
        before: Optional[str] = fastapi.Query(
            None,
            title='Pagination. Not supported.',
        ),
) -> RequestContexts:
    """ Get host contexts from the request parameters

    Example:
        /api/?where={ age: { gt: 18 } }&order={ name: ASC }&first=10

    Raises:
        exc.QueryObjectError
    """
    try:
        filter = parse_serialized_argument('where', where)
        sort = parse_serialized_argument('order', order)
    except ArgumentValueError as e:
        raise exc.QueryObjectError(f'Argument `{e.argument_name}` parsing failed: {e}') from e

    # Sorting: a list of groups. Accept a single group as well
    if isinstance(sort, dict):
        sort = [sort]

    return RequestContexts(
        resolver=ArgumentsContext(first=first, after=after, last=last, before=before),
        filter=FilterInput(filter),
        sorting=SortingInput(sort),
    )


class ArgumentValueError(ValueError):
    """ Argument parse error """
    def __init__(self, argument_name: str, error: str):
        self.argument_name = argument_name
        super().__init__(error)


def parse_serialized_argument(name: str, value: Optional[str]) -> Any:
    """ Parse a serialized argument as YAML. JSON is valid YAML as well """
    # None passthrough
    if value is None:
        return None

    # Parse the string
    try:
        return yaml.safe_load(value)
    except yaml.YAMLError as e:
        raise ArgumentValueError(name, str(e))
