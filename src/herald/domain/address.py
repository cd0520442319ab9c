"""Mailbox address value type."""

from dataclasses import dataclass, field
from typing import Optional

from .exceptions import InvalidAddressError


@dataclass(frozen=True)
class Address:
    """
    A single mailbox: an email address with an optional display name.

    Only the email address takes part in equality and hashing, so
    Address("a@b.com", "Alice") == Address("a@b.com").

    Attributes:
        email_address: Mailbox address, must contain '@'
        name: Optional display name (e.g., "John Doe")
    """
    email_address: str
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        """Validate the address after initialization."""
        if not self.email_address or '@' not in self.email_address:
            raise InvalidAddressError(f"Invalid email address: {self.email_address!r}")

    def __str__(self) -> str:
        if self.name:
            return f"{self.name} <{self.email_address}>"
        return self.email_address
