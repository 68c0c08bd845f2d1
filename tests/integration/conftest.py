"""Integration test helper fixtures.

These fixtures drive the ASGI app through ``test_client`` with a fake range
provider preloaded with a few breached passwords.
"""

import pytest

BREACHED = {
    "password": 9_545_824,
    "123456": 37_359_195,
    "qwerty": 3_946_737,
}


@pytest.fixture
def breached_provider(fake_provider):
    """The fake provider with BREACHED registered."""
    for password, count in BREACHED.items():
        fake_provider.breach(password, count)
    return fake_provider
