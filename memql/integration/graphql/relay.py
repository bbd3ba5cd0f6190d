""" Relay pagination """

from __future__ import annotations

import os.path

from memql.connection import build_connection, ConnectionDict, EdgeDict  # noqa: shortcut
from memql.operations.pager import PageInfoDict  # noqa: shortcut


pwd = os.path.dirname(__file__)

# Get this schema
with open(os.path.join(pwd, './relay.graphql'), 'rt') as f:
    graphql_relay_schema = f.read()
