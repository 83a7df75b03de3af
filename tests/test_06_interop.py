""" test building keyrings out of keys parsed by PGPy
"""
import pytest

from datetime import timedelta

from pgpy import PGPKey
from pgpy import PGPUID
from pgpy.constants import EllipticCurveOID
from pgpy.constants import HashAlgorithm
from pgpy.constants import KeyFlags as PGPyKeyFlags
from pgpy.constants import PubKeyAlgorithm

from pgpselect import KeyFlags
from pgpselect import Purpose
from pgpselect import Rfc4880KeySelectionStrategy
from pgpselect.interop import PGPySecretKeyStore
from pgpselect.interop import keyring_from_pgpkey
from pgpselect.interop import load_keyring_config
from pgpselect.interop import public_key_from_pgpkey
from pgpselect.keyring import SecretKeyStore
from pgpselect.policy import extract_key_flags


def _new_key(name, email, usage, **prefs):
    key = PGPKey.new(PubKeyAlgorithm.EdDSA, EllipticCurveOID.Ed25519)
    uid = PGPUID.new(name, comment='test', email=email)
    key.add_uid(uid, usage=usage, hashes=[HashAlgorithm.SHA256], **prefs)
    return key


def _subkeys(key):
    return list(key.subkeys.values())


@pytest.fixture(scope='module')
def alice():
    key = _new_key('Alice von TestKey', 'alice@test.key', {PGPyKeyFlags.Certify, PGPyKeyFlags.Sign})

    enc = PGPKey.new(PubKeyAlgorithm.ECDH, EllipticCurveOID.Curve25519)
    key.add_subkey(enc, usage={PGPyKeyFlags.EncryptCommunications, PGPyKeyFlags.EncryptStorage})

    sig = PGPKey.new(PubKeyAlgorithm.EdDSA, EllipticCurveOID.Ed25519)
    key.add_subkey(sig, usage={PGPyKeyFlags.Sign})

    return key


@pytest.fixture(scope='module')
def bob():
    # bob's primary key expires a year after it was created; his signing subkey is revoked
    key = _new_key('Bob von TestKey', 'bob@test.key', {PGPyKeyFlags.Certify, PGPyKeyFlags.Sign},
                   key_expiration=timedelta(days=365))

    sig = PGPKey.new(PubKeyAlgorithm.EdDSA, EllipticCurveOID.Ed25519)
    key.add_subkey(sig, usage={PGPyKeyFlags.Sign})

    subkey = _subkeys(key)[0]
    subkey |= key.revoke(subkey)

    return key


@pytest.fixture
def strategy():
    return Rfc4880KeySelectionStrategy()


class TestPublicKeyFromPGPKey(object):
    def test_primary(self, alice):
        pk = public_key_from_pgpkey(alice)

        assert pk.key_id == alice.fingerprint.keyid
        assert pk.is_master_key
        assert pk.created.replace(tzinfo=None) == alice.created.replace(tzinfo=None)
        assert pk.created.tzinfo is not None
        assert pk.valid_seconds == 0
        assert not pk.has_revocation
        assert pk.user_ids == ('Alice von TestKey (test) <alice@test.key>',)
        assert extract_key_flags(pk) & (KeyFlags.Certify | KeyFlags.Sign) == KeyFlags.Certify | KeyFlags.Sign

    def test_subkeys(self, alice):
        enc, sig = [public_key_from_pgpkey(sk) for sk in _subkeys(alice)]

        assert not enc.is_master_key
        assert enc.user_ids == ()
        assert extract_key_flags(enc) == KeyFlags.EncryptCommunications | KeyFlags.EncryptStorage
        assert extract_key_flags(sig) == KeyFlags.Sign

    def test_public_half(self, alice):
        pk = public_key_from_pgpkey(alice.pubkey)

        assert pk.key_id == alice.fingerprint.keyid
        assert pk.user_ids == ('Alice von TestKey (test) <alice@test.key>',)

    def test_expiration(self, bob):
        pk = public_key_from_pgpkey(bob)

        assert pk.valid_seconds == 365 * 86400

    def test_revocation(self, bob):
        assert not public_key_from_pgpkey(bob).has_revocation
        assert public_key_from_pgpkey(_subkeys(bob)[0]).has_revocation


class TestKeyringFromPGPKey(object):
    def test_keyring(self, alice):
        kr = keyring_from_pgpkey(alice)

        assert len(kr) == 3
        assert kr.master_key.key_id == alice.fingerprint.keyid
        assert kr.key_ids == [alice.fingerprint.keyid] + [sk.fingerprint.keyid for sk in _subkeys(alice)]

    def test_subkey(self, alice):
        with pytest.raises(ValueError):
            keyring_from_pgpkey(_subkeys(alice)[0])


class TestPGPySecretKeyStore(object):
    def test_private(self, alice):
        sks = PGPySecretKeyStore(alice)

        assert isinstance(sks, SecretKeyStore)
        assert len(sks) == 3
        assert sks.contains(alice.fingerprint.keyid)
        assert all(sks.contains(sk.fingerprint.keyid) for sk in _subkeys(alice))

    def test_public_ignored(self, alice):
        sks = PGPySecretKeyStore(alice.pubkey)

        assert len(sks) == 0
        assert not sks.contains(alice.fingerprint.keyid)


class TestLoadKeyringConfig(object):
    def test_private_key(self, alice, strategy):
        enc, sig = _subkeys(alice)
        config = load_keyring_config(alice)

        assert len(config.public_keyrings) == 1
        assert strategy.select_key(Purpose.ForSigning, 'alice@test.key', config).key_id == sig.fingerprint.keyid
        assert strategy.select_key(Purpose.ForEncryption, 'alice@test.key', config).key_id == enc.fingerprint.keyid
        assert {k.key_id for k in strategy.valid_keys_for_verification('alice@test.key', config)} == \
            {alice.fingerprint.keyid, sig.fingerprint.keyid}

    def test_public_blob(self, alice, strategy):
        enc, _ = _subkeys(alice)
        config = load_keyring_config(str(alice.pubkey))

        assert len(config.public_keyrings) == 1
        assert len(config.secret_keyrings) == 0
        assert strategy.select_key(Purpose.ForSigning, 'Alice', config) is None
        assert strategy.select_key(Purpose.ForEncryption, 'Alice', config).key_id == enc.fingerprint.keyid

    def test_file(self, alice, bob, tmp_path):
        path = tmp_path / 'bob.pub.asc'
        path.write_text(str(bob.pubkey))

        config = load_keyring_config([str(path), alice.pubkey])

        assert len(config.public_keyrings) == 2
        assert config.public_keyrings.get_keyrings('bob@test.key')[0].master_key.key_id == bob.fingerprint.keyid

    def test_duplicates(self, alice):
        config = load_keyring_config(alice, alice.pubkey, [str(alice.pubkey)])

        assert len(config.public_keyrings) == 1
        assert len(config.secret_keyrings) == 3

    def test_revoked_subkey_not_selected(self, bob, strategy):
        config = load_keyring_config(bob)

        # the only signing subkey is revoked, and the primary key is never used for day-to-day signing
        assert strategy.select_key(Purpose.ForSigning, 'bob@test.key', config) is None
        assert {k.key_id for k in strategy.valid_keys_for_verification('bob@test.key', config)} == \
            {bob.fingerprint.keyid}
