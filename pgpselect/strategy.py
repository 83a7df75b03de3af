""" strategy.py
"""
import abc
import itertools
import logging

from datetime import datetime, timezone

from .constants import Purpose
from .policy import SelectionPolicy
from .types import utc

__all__ = ['KeySelectionStrategy',
           'Rfc4880KeySelectionStrategy']


class KeySelectionStrategy(metaclass=abc.ABCMeta):
    """Decides which public keys to use for an identity."""

    @abc.abstractmethod
    def valid_keys_for_verification(self, uid, keyring_config):
        """
        Return every key of ``uid`` that could be used to make a signature, i.e. that the caller holds the
        private half of.

        :param uid: the user id as passed by the caller.
        :param keyring_config: a :py:obj:`~keyring.KeyringConfig`
        :returns: a ``set`` of :py:obj:`~keys.PublicKey`, possibly empty.
        """

    @abc.abstractmethod
    def select_key(self, purpose, uid, keyring_config):
        """
        Return the one key of ``uid`` to use for ``purpose``, or ``None`` if there is none.

        :param purpose: a :py:obj:`~constants.Purpose`
        :param uid: the user id as passed by the caller.
        :param keyring_config: a :py:obj:`~keyring.KeyringConfig`
        """


class Rfc4880KeySelectionStrategy(KeySelectionStrategy):
    """
    This strategy implements RFC 4880 section 5.2.3.21: keys are chosen by the key flags their signatures carry,
    and have to be neither revoked nor expired.

    - Signing keys must be subkeys, and the private key must be available.
    - Encryption keys can be master keys or subkeys; no private key is needed to encrypt to someone.

    When several keys qualify, the one that comes last in keyring order wins.

    :param reference_time: the :py:obj:`~datetime.datetime` used as "now" for expiration checks. Defaults to the
                           time the strategy is created.
    :param policy: a :py:obj:`~policy.SelectionPolicy`. Defaults to ``SelectionPolicy()``.
    """
    def __init__(self, reference_time=None, policy=None):
        if reference_time is None:
            reference_time = datetime.now(timezone.utc)

        if policy is None:
            policy = SelectionPolicy()

        if not isinstance(policy, SelectionPolicy):
            raise TypeError(f"policy must be a SelectionPolicy, not {type(policy)}")

        self._reference_time = utc(reference_time)
        self._policy = policy

    @property
    def reference_time(self):
        """The date used for key expiration checks as "now"."""
        return self._reference_time

    @property
    def policy(self):
        return self._policy

    def _is_not_expired(self, key):
        return self._policy.is_not_expired(key, self._reference_time)

    def _verification_filters(self, secret_keyrings):
        policy = self._policy

        def _has_private_key(key):
            return policy.has_private_key(key, secret_keyrings)

        return [policy.is_verification_key,
                policy.is_not_revoked,
                self._is_not_expired,
                _has_private_key]

    def _filters(self, purpose, secret_keyrings):
        if purpose is Purpose.ForSigning:
            return [self._policy.is_not_master_key] + self._verification_filters(secret_keyrings)

        if purpose is Purpose.ForEncryption:
            return [self._policy.is_encryption_key,
                    self._policy.is_not_revoked,
                    self._is_not_expired]

        return None

    @staticmethod
    def _candidates(keyrings, filters):
        # filters run in order and stop at the first miss
        for key in itertools.chain.from_iterable(keyrings):
            if all(f(key) for f in filters):
                yield key

    def valid_keys_for_verification(self, uid, keyring_config):
        keyrings = self._policy.keyrings_for_identity(Purpose.ForSigning, uid, keyring_config)
        filters = self._verification_filters(keyring_config.secret_keyrings)
        return set(self._candidates(keyrings, filters))

    def select_key(self, purpose, uid, keyring_config):
        keyrings = self._policy.keyrings_for_identity(purpose, uid, keyring_config)

        filters = self._filters(purpose, keyring_config.secret_keyrings)
        if filters is None:
            logging.debug("No key selection for unknown purpose {purpose!r}".format(purpose=purpose))
            return None

        selected = None
        for selected in self._candidates(keyrings, filters):
            pass

        if selected is None:
            logging.debug("No key of {uid!r} is usable for {purpose:s}".format(uid=uid, purpose=purpose.value))

        else:
            logging.debug("Selected key {keyid:s} of {uid!r} for {purpose:s}".format(keyid=selected.key_id, uid=uid,
                                                                                  purpose=purpose.value))

        return selected
