""" errors.py
"""

__all__ = ('KeySelectionError',
           'KeyringLookupError',
           'SecretKeyLookupError',)


class KeySelectionError(Exception):
    """Raised as a general error in pgpselect"""
    pass


class KeyringLookupError(KeySelectionError):
    """Raised by a keyring store when it cannot resolve the keyrings for an identity"""
    pass


class SecretKeyLookupError(KeySelectionError):
    """Raised by a secret key store when it cannot tell whether a private key is present"""
    pass
