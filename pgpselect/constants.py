""" constants.py
"""
from enum import Enum
from enum import IntEnum
from enum import IntFlag

__all__ = [
    'KeyFlags',
    'Purpose',
    'PrivateKeyStatus',
]


class KeyFlags(IntFlag):
    """Flags that determine a key's capabilities (RFC 4880 section 5.2.3.21)."""
    #: Signifies that a key may be used to certify keys and user ids.
    Certify = 0x01
    #: Signifies that a key may be used to sign messages and documents.
    Sign = 0x02
    #: Signifies that a key may be used to encrypt communications.
    EncryptCommunications = 0x04
    #: Signifies that a key may be used to encrypt storage.
    EncryptStorage = 0x08
    #: Signifies that the private component of a given key may have been split by a secret-sharing mechanism.
    Split = 0x10
    #: Signifies that a key may be used for authentication.
    Authentication = 0x20
    #: Signifies that the private component of a key may be in the possession of more than one person.
    MultiPerson = 0x80

    @classmethod
    def from_usage(cls, usage):
        """
        Collapse ``usage`` into a single :py:obj:`KeyFlags` value.

        :param usage: an ``int`` bitmask, a :py:obj:`KeyFlags` value, or an iterable of them.
        """
        if isinstance(usage, int):
            return cls(usage)

        flags = cls(0)
        for flag in usage:
            flags |= cls(flag)
        return flags


class Purpose(Enum):
    """What a selected key is going to be used for."""
    ForSigning = 'signing'
    ForEncryption = 'encryption'


class PrivateKeyStatus(IntEnum):
    """
    The outcome of asking a secret key store about a key.

    ``Unavailable`` means the store failed to answer; it is treated the same as ``Absent``.
    """
    Absent = 0
    Present = 1
    Unavailable = 2
