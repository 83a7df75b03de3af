""" types.py
"""
import binascii
import re
import warnings

from datetime import datetime, timezone
from typing import Union

__all__ = ['KeyID',
           'utc']


class KeyID(str):
    '''
    This class represents an 8-octet OpenPGP key ID as 16 uppercase hex digits.

    Some toolkits hand key IDs around as signed 64-bit integers, so negative ints are accepted as well.
    '''
    def __new__(cls, content: Union[str, bytes, bytearray, int]) -> "KeyID":
        if isinstance(content, KeyID):
            return content

        if isinstance(content, bool):
            raise TypeError(f'cannot initialize a KeyID from {type(content)}')

        if isinstance(content, int):
            if not -(1 << 63) <= content < (1 << 64):
                raise ValueError(f'Initializing a KeyID from an int requires a 64-bit value, not {content}')
            return str.__new__(cls, f'{content & 0xFFFFFFFFFFFFFFFF:016X}')

        if isinstance(content, str):
            content = content.replace(' ', '').upper()
            if not re.match(r'^[0-9A-F]{16}$', content):
                raise ValueError(f'Initializing a KeyID from a string requires it to be 16 hex digits, not "{content}"')
            return str.__new__(cls, content)

        if isinstance(content, (bytes, bytearray)):
            if len(content) != 8:
                raise ValueError(f'Initializing a KeyID from a bytes or bytearray requires exactly 8 bytes, not {content!r}')
            return str.__new__(cls, binascii.b2a_hex(content).decode('latin1').upper())

        raise TypeError(f'cannot initialize a KeyID from {type(content)}')

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeyID):
            return str(self) == str(other)
        if isinstance(other, str):
            return str(self) == other
        if isinstance(other, (bytes, bytearray)):
            return bytes(self) == other
        return False

    def __ne__(self, other: object) -> bool:
        return not (self == other)

    def __int__(self) -> int:
        return int.from_bytes(bytes(self), byteorder='big', signed=False)

    def __hash__(self) -> int:
        return hash(str(self))

    def __bytes__(self) -> bytes:
        return binascii.a2b_hex(self)

    def __repr__(self) -> str:
        return f"KeyID({self})"


def utc(value: datetime, stacklevel: int = 3) -> datetime:
    """
    Return ``value`` as a timezone-aware :py:obj:`~datetime.datetime`.

    Naive datetimes are assumed to already be in UTC.
    """
    if not isinstance(value, datetime):
        raise TypeError(f'expected a datetime, not {type(value)}')

    if value.tzinfo is None:
        warnings.warn(f"naive datetime {value.isoformat()} - assuming UTC", stacklevel=stacklevel)
        return value.replace(tzinfo=timezone.utc)

    return value
