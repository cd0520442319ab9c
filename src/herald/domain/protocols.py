"""
Capability contracts consumed and exposed by the email core.

Any templating engine, delivery backend or template store that matches
these shapes can be plugged in; Email never depends on a concrete
implementation.
"""

import asyncio
from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .email_message import Email
    from .models import SendResponse


@runtime_checkable
class Renderer(Protocol):
    """Turns a template source and its model into final body text."""

    async def render(
        self,
        template: str,
        model: Any,
        cancellation: Optional[asyncio.Event] = None
    ) -> str:
        """
        Render a template against a model.

        Args:
            template: Unrendered template source
            model: Opaque data bound to the template
            cancellation: Optional signal the renderer should honor

        Returns:
            Rendered text

        Raises:
            RenderError: On template syntax or evaluation errors
        """
        ...


@runtime_checkable
class EmailSender(Protocol):
    """Delivery backend: renders the body and transmits the email."""

    async def send(
        self,
        email: 'Email',
        cancellation: Optional[asyncio.Event] = None
    ) -> 'SendResponse':
        """Send an email and report the outcome as a SendResponse."""
        ...


@runtime_checkable
class TemplateSource(Protocol):
    """A bundle of named template resources."""

    def read_text(self, path: str) -> str:
        """
        Read a template resource as text.

        Raises:
            ResourceNotFoundError: If the bundle has no such resource
        """
        ...
