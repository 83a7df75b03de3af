""" policy.py

The predicates RFC 4880 key selection is built from.

https://tools.ietf.org/html/rfc4880#section-5.2.3.21
"""
import functools
import logging
import operator

from datetime import timedelta
from typing import Callable, NamedTuple

from .constants import KeyFlags
from .constants import PrivateKeyStatus
from .errors import SecretKeyLookupError

__all__ = ['extract_key_flags',
           'is_not_revoked',
           'is_not_expired',
           'is_not_master_key',
           'is_verification_key',
           'is_encryption_key',
           'lookup_private_key',
           'has_private_key',
           'keyrings_for_identity',
           'SelectionPolicy']


def extract_key_flags(key):
    """
    Aggregate the key flags of every direct signature on ``key``.

    A key gets a capability if any of its signatures grants it. A key without signatures has no capabilities.
    """
    return functools.reduce(operator.or_, (sig.key_flags for sig in key.signatures), KeyFlags(0))


def is_not_revoked(key):
    return not key.has_revocation


def is_not_expired(key, now):
    """
    ``True`` unless ``key`` expired strictly before ``now``. A key expiring exactly at ``now`` is still valid.
    """
    # valid_seconds == 0 means: no expiration date
    if key.valid_seconds == 0:
        return True

    try:
        expires_at = key.created + timedelta(seconds=key.valid_seconds)

    except OverflowError:
        # expires past the end of the calendar
        return True

    return not expires_at < now


def is_not_master_key(key):
    return not key.is_master_key


def is_verification_key(key):
    return (extract_key_flags(key) & KeyFlags.Sign) == KeyFlags.Sign


def is_encryption_key(key):
    flags = extract_key_flags(key)
    return (flags & KeyFlags.EncryptCommunications) == KeyFlags.EncryptCommunications \
        or (flags & KeyFlags.EncryptStorage) == KeyFlags.EncryptStorage


def lookup_private_key(key, secret_keys):
    """
    Ask ``secret_keys`` whether it holds the private half of ``key``.

    A store that fails to answer does not abort selection: the failure is logged and reported as
    :py:obj:`~constants.PrivateKeyStatus.Unavailable`.

    :rtype: :py:obj:`~constants.PrivateKeyStatus`
    """
    try:
        present = secret_keys.contains(key.key_id)

    except SecretKeyLookupError as e:
        logging.debug("Failed to test for private key for pubkey {keyid:s}: {err!s}".format(keyid=key.key_id, err=e))
        return PrivateKeyStatus.Unavailable

    return PrivateKeyStatus.Present if present else PrivateKeyStatus.Absent


def has_private_key(key, secret_keys):
    # Unavailable counts as absent
    return lookup_private_key(key, secret_keys) is PrivateKeyStatus.Present


def keyrings_for_identity(purpose, identity, keyring_config):
    """
    Return every keyring the public keyring store associates with ``identity``, without duplicates.

    The store decides how ``identity`` is matched. Lookup errors from the store are not caught.

    :param purpose: the :py:obj:`~constants.Purpose` the keyrings are wanted for.
    :param identity: the user id as passed by the caller.
    :param keyring_config: a :py:obj:`~keyring.KeyringConfig`
    :returns: a ``tuple`` of distinct keyrings, in the order the store first returned them.
    """
    keyrings = {}
    for keyring in keyring_config.public_keyrings.get_keyrings(identity):
        keyrings.setdefault(id(keyring), keyring)
    return tuple(keyrings.values())


class SelectionPolicy(NamedTuple):
    """
    The predicates a key selection strategy is composed of. Every field defaults to the RFC 4880 behavior;
    replace any of them to customize policy::

        strict = SelectionPolicy()._replace(is_not_expired=my_stricter_check)
    """
    keyrings_for_identity: Callable = keyrings_for_identity
    is_not_master_key: Callable = is_not_master_key
    is_verification_key: Callable = is_verification_key
    is_encryption_key: Callable = is_encryption_key
    is_not_revoked: Callable = is_not_revoked
    is_not_expired: Callable = is_not_expired
    has_private_key: Callable = has_private_key
