""" interop.py

Builds :py:obj:`~keys.KeyRing` views out of keys parsed by PGPy.
"""
import collections
import os

from datetime import timezone

from pgpy import PGPKey
from pgpy.constants import SignatureType

from .keyring import KeyringConfig
from .keyring import MemoryKeyringStore
from .keyring import SecretKeyStore
from .keys import KeyRing
from .keys import PublicKey
from .keys import Signature
from .types import KeyID

__all__ = ['public_key_from_pgpkey',
           'keyring_from_pgpkey',
           'PGPySecretKeyStore',
           'load_keyring_config']


def _utc(dt):
    # OpenPGP timestamps are always UTC
    if dt is not None and dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def _key_flags(sig):
    flags = sig.key_flags
    if isinstance(flags, int):
        return int(flags)
    return [int(flag) for flag in flags]


def _uid_string(uid):
    if not uid.is_uid:
        return ""

    parts = [uid.name]
    if uid.comment:
        parts.append("({:s})".format(uid.comment))
    if uid.email:
        parts.append("<{:s}>".format(uid.email))
    return " ".join(p for p in parts if p)


def _signatures(pgpkey):
    # a primary key's capabilities are carried on its user id self-signatures
    sigs = list(pgpkey.__sig__)
    if pgpkey.is_primary:
        for uid in pgpkey.userids + pgpkey.userattributes:
            sigs.extend(uid.__sig__)
    return sigs


def public_key_from_pgpkey(pgpkey):
    """
    Build a :py:obj:`~keys.PublicKey` view of a :py:obj:`pgpy.PGPKey`.

    Either half of a key can be passed; only public information is read.
    """
    revocation = SignatureType.KeyRevocation if pgpkey.is_primary else SignatureType.SubkeyRevocation

    signatures = []
    valid_seconds = 0
    has_revocation = False
    for sig in _signatures(pgpkey):
        if sig.type == revocation:
            has_revocation = True
            continue

        signatures.append(Signature(_key_flags(sig), _utc(sig.created)))

        # the most recent self-signature in keyring order decides the expiration
        if sig.key_expiration is not None:
            valid_seconds = int(sig.key_expiration.total_seconds())

    return PublicKey(KeyID(str(pgpkey.fingerprint.keyid)),
                     _utc(pgpkey.created),
                     is_master_key=pgpkey.is_primary,
                     valid_seconds=valid_seconds,
                     has_revocation=has_revocation,
                     signatures=signatures,
                     user_ids=[_uid_string(uid) for uid in pgpkey.userids] if pgpkey.is_primary else [])


def keyring_from_pgpkey(pgpkey):
    """Build a :py:obj:`~keys.KeyRing` out of a primary :py:obj:`pgpy.PGPKey` and its subkeys."""
    if not pgpkey.is_primary:
        raise ValueError("Key {:s} is a subkey; a keyring must be built from its primary key"
                         "".format(str(pgpkey.fingerprint.keyid)))

    return KeyRing(public_key_from_pgpkey(pgpkey),
                   *[public_key_from_pgpkey(sk) for sk in pgpkey.subkeys.values()])


class PGPySecretKeyStore(SecretKeyStore):
    """A :py:obj:`~keyring.SecretKeyStore` over PGPy private keys."""
    def __init__(self, *pgpkeys):
        super(PGPySecretKeyStore, self).__init__()
        self._keys = {}
        for pgpkey in pgpkeys:
            self.add(pgpkey)

    def add(self, pgpkey):
        """Add the private half ``pgpkey`` and its private subkeys. Public keys are ignored."""
        if pgpkey.is_public:
            return

        self._keys[KeyID(str(pgpkey.fingerprint.keyid))] = pgpkey
        for subkey in pgpkey.subkeys.values():
            self.add(subkey)

    def contains(self, key_id):
        return KeyID(key_id) in self._keys

    def __len__(self):
        return len(self._keys)


def load_keyring_config(*args):
    r"""
    Load keys with PGPy and wrap them in a :py:obj:`~keyring.KeyringConfig`.

    :param \*args: Each arg in ``args`` can be any of the formats supported by :py:meth:`pgpy.PGPKey.from_file` and
                  :py:meth:`pgpy.PGPKey.from_blob` or a :py:class:`pgpy.PGPKey` instance, or a ``list`` or ``tuple``
                  of these.
    :returns: a :py:obj:`~keyring.KeyringConfig`. Every primary key becomes one keyring; private keys are also
              added to the secret key store.
    """
    def _preiter(first, iterable):
        yield first
        for item in iterable:
            yield item

    primaries = collections.OrderedDict()
    secret_keys = PGPySecretKeyStore()

    for key in iter(item for ilist in iter(ilist if isinstance(ilist, (tuple, list)) else [ilist] for ilist in args)
                    for item in ilist):
        keys = {}
        if isinstance(key, PGPKey):
            _key = key
        elif os.path.isfile(key):
            _key, keys = PGPKey.from_file(key)
        else:
            _key, keys = PGPKey.from_blob(key)

        for ik in _preiter(_key, keys.values()):
            if not ik.is_primary:
                continue

            secret_keys.add(ik)
            primaries.setdefault(str(ik.fingerprint), ik)

    return KeyringConfig(MemoryKeyringStore([keyring_from_pgpkey(pk) for pk in primaries.values()]), secret_keys)
