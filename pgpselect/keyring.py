""" keyring.py

The collaborators the selection core reads keys from, and simple in-memory implementations of them.
"""
import abc
import collections
import collections.abc as collections_abc
import itertools

from .errors import KeyringLookupError
from .keys import KeyRing
from .keys import PublicKey
from .types import KeyID

__all__ = ['KeyringStore',
           'SecretKeyStore',
           'MemoryKeyringStore',
           'MemorySecretKeyStore',
           'KeyringConfig']


class KeyringStore(metaclass=abc.ABCMeta):
    """Somewhere public keyrings can be looked up by identity."""

    @abc.abstractmethod
    def get_keyrings(self, identity):
        """
        Return an iterable of every :py:obj:`~keys.KeyRing` associated with ``identity``.

        How ``identity`` is matched (exact, partial, case-insensitive) is up to the store.

        :raises: :py:exc:`~errors.KeyringLookupError` if the store cannot be read.
        """


class SecretKeyStore(metaclass=abc.ABCMeta):
    """Somewhere private key material can be looked up by key id."""

    @abc.abstractmethod
    def contains(self, key_id):
        """
        ``True`` if a usable private key exists for ``key_id``, otherwise ``False``.

        :raises: :py:exc:`~errors.SecretKeyLookupError` if the store cannot answer.
        """


class MemoryKeyringStore(KeyringStore, collections_abc.Container, collections_abc.Iterable, collections_abc.Sized):
    def __init__(self, *args):
        """
        MemoryKeyringStore objects hold already-parsed :py:obj:`~keys.KeyRing` objects in memory, and match
        identities against the user ids on their master keys.
        """
        super(MemoryKeyringStore, self).__init__()
        self._keyrings = collections.OrderedDict()
        self._by_keyid = {}
        self.load(*args)

    def __contains__(self, alias):
        if isinstance(alias, KeyRing):
            return id(alias) in self._keyrings

        if isinstance(alias, str):
            if any(alias in kr.user_ids for kr in self):
                return True

        try:
            return KeyID(alias) in self._by_keyid

        except (TypeError, ValueError):
            return False

    def __len__(self):
        return len(self._keyrings)

    def __iter__(self):
        for keyring in self._keyrings.values():
            yield keyring

    def _add_keyring(self, keyring):
        krid = id(keyring)
        if krid in self._keyrings:
            return False

        self._keyrings[krid] = keyring
        for key in keyring:
            self._by_keyid.setdefault(key.key_id, krid)
        return True

    def load(self, *args):
        r"""
        Load all keyrings provided into this store.

        :param \*args: Each arg in ``args`` can be a :py:obj:`~keys.KeyRing`, or a ``list`` or ``tuple`` of them.
        :returns: a ``list`` of the master key ids of keyrings that were loaded during this operation.
        """
        loaded = []
        for keyring in iter(item for ilist in iter(ilist if isinstance(ilist, (tuple, list)) else [ilist] for ilist in args)
                            for item in ilist):
            if not isinstance(keyring, KeyRing):
                raise TypeError(f"expected a KeyRing, not {type(keyring)}")

            if self._add_keyring(keyring):
                loaded.append(keyring.master_key.key_id)

        return loaded

    def get_keyrings(self, identity, match_partial=True, ignore_case=True):
        """
        Return the keyrings with a user id matching ``identity``, in the order they were loaded.

        :param identity: the user id, or part of it, to look for.
        :type identity: ``str``
        :param match_partial: if ``True``, ``identity`` only has to be contained in a user id.
        :param ignore_case: if ``True``, compare case-insensitively.
        """
        if not isinstance(identity, str):
            raise KeyringLookupError(f"cannot look up keyrings by {type(identity)}")

        if ignore_case:
            identity = identity.lower()

        def _matches(uid):
            if ignore_case:
                uid = uid.lower()
            return identity in uid if match_partial else identity == uid

        return [kr for kr in self if any(_matches(uid) for uid in kr.user_ids)]

    def get_keyring(self, key_id):
        """
        Return the keyring that holds the key with ``key_id``.

        :raises: :py:exc:`KeyError` if no loaded keyring holds that key.
        """
        try:
            krid = self._by_keyid[KeyID(key_id)]

        except (TypeError, ValueError):
            raise KeyError(key_id)

        return self._keyrings[krid]

    def key_ids(self, keytype='any'):
        """
        List loaded key ids with some optional filtering.

        :param keytype: Can be 'any', 'primary', or 'sub'. If 'primary' or 'sub', the key ids of keys of the
                        other type will not be included in the results.
        :type keytype: ``str``
        :returns: a ``set`` of key ids of keys matching the filter specified.
        """
        if keytype not in ('any', 'primary', 'sub'):
            raise ValueError(f"keytype must be one of 'any', 'primary', 'sub', not {keytype!r}")

        return {key.key_id for key in itertools.chain.from_iterable(self)
                if key.is_master_key in [True if keytype in ['primary', 'any'] else None,
                                         False if keytype in ['sub', 'any'] else None]}


class MemorySecretKeyStore(SecretKeyStore, collections_abc.Container, collections_abc.Sized):
    """The key ids of keys whose private material is at hand."""
    def __init__(self, *key_ids):
        super(MemorySecretKeyStore, self).__init__()
        self._key_ids = set()
        for key_id in key_ids:
            self.add(key_id)

    @staticmethod
    def _key_id(key):
        if isinstance(key, PublicKey):
            return key.key_id
        return KeyID(key)

    def add(self, key):
        self._key_ids.add(self._key_id(key))

    def contains(self, key_id):
        return self._key_id(key_id) in self._key_ids

    def __contains__(self, key_id):
        try:
            return self.contains(key_id)

        except (TypeError, ValueError):
            return False

    def __len__(self):
        return len(self._key_ids)


class KeyringConfig(object):
    """
    The public keyrings to select keys from, and the secret keys that tell which of them can be used to sign.

    :param public_keyrings: a :py:obj:`KeyringStore`
    :param secret_keyrings: a :py:obj:`SecretKeyStore`. Defaults to an empty :py:obj:`MemorySecretKeyStore`.
    """
    def __init__(self, public_keyrings, secret_keyrings=None):
        if not isinstance(public_keyrings, KeyringStore):
            raise TypeError(f"public_keyrings must be a KeyringStore, not {type(public_keyrings)}")

        if secret_keyrings is None:
            secret_keyrings = MemorySecretKeyStore()

        if not isinstance(secret_keyrings, SecretKeyStore):
            raise TypeError(f"secret_keyrings must be a SecretKeyStore, not {type(secret_keyrings)}")

        self._public_keyrings = public_keyrings
        self._secret_keyrings = secret_keyrings

    @property
    def public_keyrings(self):
        return self._public_keyrings

    @property
    def secret_keyrings(self):
        return self._secret_keyrings

    def __repr__(self):
        return "<KeyringConfig [{:s}, {:s}] at 0x{:02X}>".format(type(self._public_keyrings).__name__,
                                                               type(self._secret_keyrings).__name__, id(self))
