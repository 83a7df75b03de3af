"""pgpselect conftest"""
import pytest

import itertools
import os
import sys

from datetime import datetime, timedelta, timezone

# set the CWD and add to sys.path if we need to
os.chdir(os.path.join(os.path.abspath(os.path.dirname(__file__)), os.pardir))

if os.getcwd() not in sys.path:
    sys.path.insert(0, os.getcwd())
else:
    sys.path.insert(0, sys.path.pop(sys.path.index(os.getcwd())))

if os.path.join(os.getcwd(), 'tests') not in sys.path:
    sys.path.insert(1, os.path.join(os.getcwd(), 'tests'))

from pgpselect import PublicKey
from pgpselect import Signature
from pgpselect._author import __version__

# the fixed "now" every test measures expiration against
now = datetime(2020, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

_keyids = itertools.count(0x1000)


def make_key(usage=(), master=False, created=None, valid_seconds=0, revoked=False, user_ids=(), key_id=None):
    """Build a :py:obj:`PublicKey` with a single self-signature carrying ``usage``."""
    if key_id is None:
        key_id = next(_keyids)

    if created is None:
        created = now - timedelta(days=30)

    signatures = [Signature(usage)] if usage is not None else []
    return PublicKey(key_id, created, is_master_key=master, valid_seconds=valid_seconds, has_revocation=revoked,
                     signatures=signatures, user_ids=user_ids)


@pytest.fixture
def reference_time():
    return now


# pytest hooks

# pytest_configure
# called after command line options have been parsed and all plugins and initial conftest files been loaded.
def pytest_configure(config):
    print("== pgpselect Test Suite ==")

    # display the working directory and the package version
    print("Working Directory: " + os.getcwd())
    print("Using pgpselect " + str(__version__))
    print("")
