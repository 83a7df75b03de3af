""" pgpselect :: RFC 4880 key selection for OpenPGP keyrings
"""

from ._author import __version__
from .constants import KeyFlags
from .constants import Purpose
from .keyring import KeyringConfig
from .keyring import MemoryKeyringStore
from .keyring import MemorySecretKeyStore
from .keys import KeyRing
from .keys import PublicKey
from .keys import Signature
from .policy import SelectionPolicy
from .strategy import KeySelectionStrategy
from .strategy import Rfc4880KeySelectionStrategy

__all__ = ['constants',
           'errors',
           'KeyFlags',
           'KeyringConfig',
           'KeyRing',
           'KeySelectionStrategy',
           'MemoryKeyringStore',
           'MemorySecretKeyStore',
           'PublicKey',
           'Purpose',
           'Rfc4880KeySelectionStrategy',
           'SelectionPolicy',
           'Signature', ]
