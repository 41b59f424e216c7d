"""
Canonical framing for deterministic hashing.

Every object is stored and hashed as::

    <type> <size>\\0<payload>

Same type and payload always produce the same bytes.
"""

from typing import Tuple

from ..errors import InvalidObjectError

OBJECT_TYPES = ('blob', 'tree')


def frame(object_type: str, payload: bytes) -> bytes:
    """
    Build the framed representation of an object.

    Rules:
    - type tag in ASCII
    - single space
    - decimal byte length of the payload
    - single NUL separator
    - payload, unmodified

    The payload is fully buffered; there is no size limit.
    """
    if object_type not in OBJECT_TYPES:
        raise InvalidObjectError(f"Invalid object type: {object_type}")
    header = f"{object_type} {len(payload)}".encode('ascii')
    return header + b'\0' + payload


def parse_header(framed: bytes, object_hash: str = None) -> Tuple[str, int, bytes]:
    """
    Split framed bytes into (type, declared size, payload).

    The declared size is returned as-is and not compared against the
    payload length; callers decide how strict to be.

    Raises InvalidObjectError if the header is malformed.
    """
    space = framed.find(b' ')
    if space < 0:
        raise InvalidObjectError("Header missing type separator", object_hash)

    nul = framed.find(b'\0', space + 1)
    if nul < 0:
        raise InvalidObjectError("Header missing NUL separator", object_hash)

    try:
        object_type = framed[:space].decode('ascii')
        declared_size = int(framed[space + 1:nul].decode('ascii'))
    except (UnicodeDecodeError, ValueError) as e:
        raise InvalidObjectError(f"Malformed header: {e}", object_hash)

    return object_type, declared_size, framed[nul + 1:]
