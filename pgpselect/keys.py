""" keys.py

Read-only views of parsed OpenPGP keys, as handed to the selection core by a keyring store.
"""
from datetime import datetime, timedelta, timezone

from .constants import KeyFlags
from .types import KeyID
from .types import utc

__all__ = ['Signature',
           'PublicKey',
           'KeyRing']


class Signature(object):
    """
    A self-signature or binding signature on a key. Only the hashed key flags subpacket matters here.

    :param key_flags: an ``int`` bitmask, or a ``set`` of :py:obj:`~constants.KeyFlags` as in PGPy's ``usage=``.
    :param created: optional :py:obj:`~datetime.datetime` the signature was made at.
    """
    def __init__(self, key_flags=0, created=None):
        self._key_flags = KeyFlags.from_usage(key_flags)
        self._created = utc(created) if created is not None else None

    @property
    def key_flags(self):
        """The :py:obj:`~constants.KeyFlags` carried in the hashed key flags subpacket"""
        return self._key_flags

    @property
    def created(self):
        return self._created

    def __repr__(self):
        return "<Signature [{:s}] at 0x{:02X}>".format(repr(self._key_flags), id(self))


class PublicKey(object):
    """
    One key, master or subkey, bound to an identity.

    ``valid_seconds == 0`` means the key never expires. Otherwise the key expires at ``created + valid_seconds``.
    ``valid_seconds`` is not bounded to the 4-octet key expiration subpacket; expirations past the end of the
    calendar are reported as :py:obj:`datetime.max`.
    Instances compare and hash by identity, the same way the keyring store hands them out.
    """
    def __init__(self, key_id, created, is_master_key=False, valid_seconds=0, has_revocation=False,
                 signatures=(), user_ids=()):
        if isinstance(valid_seconds, bool) or not isinstance(valid_seconds, int):
            raise TypeError(f'valid_seconds must be an int, not {type(valid_seconds)}')
        if valid_seconds < 0:
            raise ValueError(f'valid_seconds must not be negative, not {valid_seconds}')

        self._key_id = KeyID(key_id)
        self._created = utc(created)
        self._is_master_key = bool(is_master_key)
        self._valid_seconds = valid_seconds
        self._has_revocation = bool(has_revocation)
        self._signatures = tuple(signatures)
        self._user_ids = tuple(user_ids)

    @property
    def key_id(self):
        """The :py:obj:`~types.KeyID` of this key"""
        return self._key_id

    @property
    def created(self):
        """A timezone-aware :py:obj:`~datetime.datetime` of when this key was created"""
        return self._created

    @property
    def is_master_key(self):
        """``True`` if this is the primary key of its keyring; ``False`` if this is a subkey"""
        return self._is_master_key

    @property
    def valid_seconds(self):
        return self._valid_seconds

    @property
    def expires_at(self):
        """A :py:obj:`~datetime.datetime` of when this key is to be considered expired, if any. Otherwise, ``None``"""
        if self._valid_seconds == 0:
            return None

        try:
            return self._created + timedelta(seconds=self._valid_seconds)

        except OverflowError:
            return datetime.max.replace(tzinfo=timezone.utc)

    @property
    def has_revocation(self):
        return self._has_revocation

    @property
    def signatures(self):
        """The direct signatures on this key, in the order the keyring stores them"""
        return self._signatures

    @property
    def user_ids(self):
        return self._user_ids

    def __repr__(self):
        return "<PublicKey [{:s}][{:s}] at 0x{:02X}>".format("master" if self._is_master_key else "sub",
                                                           self._key_id, id(self))


class KeyRing(object):
    """
    A master key followed by zero or more subkeys. Iterating yields the master key first, then the subkeys in
    insertion order.
    """
    def __init__(self, master_key, *subkeys):
        if not master_key.is_master_key:
            raise ValueError(f"Key {master_key.key_id} is not a master key")

        for subkey in subkeys:
            if subkey.is_master_key:
                raise ValueError(f"Key {subkey.key_id} is a master key; a keyring holds exactly one")

        self._keys = (master_key,) + tuple(subkeys)

    @property
    def master_key(self):
        return self._keys[0]

    @property
    def subkeys(self):
        return self._keys[1:]

    @property
    def user_ids(self):
        """The user ids bound to the master key of this keyring"""
        return self.master_key.user_ids

    @property
    def key_ids(self):
        return [key.key_id for key in self._keys]

    def __iter__(self):
        return iter(self._keys)

    def __len__(self):
        return len(self._keys)

    def __contains__(self, key_id):
        if isinstance(key_id, PublicKey):
            return key_id in self._keys

        try:
            key_id = KeyID(key_id)

        except (TypeError, ValueError):
            return False

        return key_id in self.key_ids

    def __repr__(self):
        return "<KeyRing [{:s}] ({:d} keys) at 0x{:02X}>".format(self.master_key.key_id, len(self), id(self))
