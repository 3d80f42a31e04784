"""Fake implementations of core ports for testing.

These in-memory implementations allow the cart builder to be tested
without real storage or store configuration:

- FakeCartRepositoryPort: In-memory cart persistence with call tracking
- FakeStoreLookupPort: Canned store configuration
- FakeCustomerLookupPort: Canned contacts
- FakeShippingMethod: Shipping method returning configured rates
"""

from .customer import FakeCustomerLookupPort
from .repository import FakeCartRepositoryPort
from .shipping import FakeShippingMethod
from .store import FakeStoreLookupPort

__all__ = [
    "FakeCartRepositoryPort",
    "FakeCustomerLookupPort",
    "FakeShippingMethod",
    "FakeStoreLookupPort",
]
