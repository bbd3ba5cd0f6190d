import base64
import sys

import pytest

from memql.cursor import encode_cursor, decode_cursor


@pytest.mark.parametrize(('offset', 'cursor'), [
    (0, 'MA=='),
    (1, 'MQ=='),
    (2, 'Mg=='),
    (47, 'NDc='),
])
def test_cursor_known_values(offset: int, cursor: str):
    """ Cursors are base64-encoded decimals """
    assert encode_cursor(offset) == cursor
    assert decode_cursor(cursor) == (offset, True)


def test_cursor_roundtrip():
    """ decode(encode(n)) == n """
    for n in [*range(0, 1000, 7), 10**6, 2**31, 10**18]:
        assert decode_cursor(encode_cursor(n)) == (n, True)


@pytest.mark.parametrize('cursor', [
    # Empty
    None,
    '',
    # Not base64
    'not a cursor',
    '!!!',
    'MA',  # bad padding
    # Not a number
    'YWJj',  # "abc"
    'LTE=',  # "-1"
    'IDE=',  # " 1"
    '4pyT',  # "✓"
    '////',  # not utf-8
    # Too large
    base64.urlsafe_b64encode(b'9' * 5000).decode(),
    encode_cursor(10**19),
    encode_cursor(sys.maxsize),
    # Not a string
    123,
])
def test_cursor_malformed(cursor):
    """ Malformed cursors point at the start. Never fail. """
    assert decode_cursor(cursor) == (0, False)


def test_cursor_negative():
    with pytest.raises(ValueError):
        encode_cursor(-1)
