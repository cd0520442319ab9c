"""
Email composition and deferred body rendering.

An Email is built eagerly: every with_* / using_*_template call validates
its argument and raises immediately, leaving the message untouched on
failure. The body, however, is only resolved when render_body() is
awaited at send time, so messages can be composed without any renderer
available.
"""

import asyncio
import logging
import sys
from pathlib import Path
from types import MappingProxyType, ModuleType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .address import Address
from .exceptions import (
    DuplicateHeaderError,
    NullArgumentError,
    PreconditionViolationError,
)
from .models import Attachment, Priority
from .protocols import Renderer, TemplateSource
from ..services import templates as template_service

logger = logging.getLogger(__name__)


def _require(value: Any, argument: str) -> Any:
    if value is None:
        raise NullArgumentError(argument)
    return value


def _calling_package(depth: int) -> str:
    """Name of the package (or top-level module) `depth` frames up the stack."""
    caller_globals = sys._getframe(depth + 1).f_globals
    return caller_globals.get('__package__') or caller_globals['__name__']


class Email:
    """
    A composable email message.

    Mutators change the message in place and return it, so calls chain:

        >>> email = (
        ...     Email(Address("me@example.com"))
        ...     .with_to(Address("you@example.com", "You"))
        ...     .with_subject("Hi")
        ...     .using_string_template("hello {{ who }}", {"who": "world"})
        ... )
        >>> body = await email.render_body(renderer)

    When both a literal body and a template are set, the template is used.
    """

    def __init__(self, from_address: Address):
        """
        Create an email.

        Args:
            from_address: Sender address

        Raises:
            NullArgumentError: If from_address is None
        """
        self.from_address: Address = _require(from_address, 'from_address')

        self._to_addresses: List[Address] = []
        self._cc_addresses: List[Address] = []
        self._bcc_addresses: List[Address] = []
        self._attachments: List[Attachment] = []
        self._headers: Dict[str, str] = {}

        self.subject: Optional[str] = None
        self.body: Optional[str] = None
        self.template: Optional[str] = None
        self.model: Any = None
        self.is_html: bool = True
        self.priority: Priority = Priority.NORMAL

    @classmethod
    def compose(cls, from_address: str, to: str, subject: str, body_html: str) -> 'Email':
        """
        Compose an email quickly.

        Args:
            from_address: Sender address
            to: Recipient address
            subject: Email subject
            body_html: Email body as HTML

        Returns:
            Email with one recipient and an HTML body

        Raises:
            NullArgumentError: If any argument is None
            InvalidAddressError: If either address is malformed

        Example:
            >>> email = Email.compose(
            ...     from_address="me@example.com",
            ...     to="myfriend@example.com",
            ...     subject="hi there!",
            ...     body_html="what's up?"
            ... )
        """
        sender = Address(_require(from_address, 'from_address'))
        recipient = Address(_require(to, 'to'))
        _require(subject, 'subject')
        _require(body_html, 'body_html')

        email = cls(sender)
        email._to_addresses.append(recipient)
        email.subject = subject
        email.body = body_html
        email.is_html = True
        return email

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def to_addresses(self) -> Tuple[Address, ...]:
        return tuple(self._to_addresses)

    @property
    def cc_addresses(self) -> Tuple[Address, ...]:
        return tuple(self._cc_addresses)

    @property
    def bcc_addresses(self) -> Tuple[Address, ...]:
        return tuple(self._bcc_addresses)

    @property
    def attachments(self) -> Tuple[Attachment, ...]:
        return tuple(self._attachments)

    @property
    def headers(self) -> Mapping[str, str]:
        return MappingProxyType(self._headers)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def with_subject(self, subject: str) -> 'Email':
        self.subject = _require(subject, 'subject')
        return self

    def with_to(self, address: Address) -> 'Email':
        """Add a "to" recipient."""
        self._to_addresses.append(_require(address, 'address'))
        return self

    def with_cc(self, address: Address) -> 'Email':
        """Add a "cc" (carbon-copy) recipient."""
        self._cc_addresses.append(_require(address, 'address'))
        return self

    def with_bcc(self, address: Address) -> 'Email':
        """Add a "bcc" (blind carbon-copy) recipient."""
        self._bcc_addresses.append(_require(address, 'address'))
        return self

    def with_attachment(self, attachment: Attachment) -> 'Email':
        self._attachments.append(_require(attachment, 'attachment'))
        return self

    def with_header(self, header: str, content: str) -> 'Email':
        """
        Add an email header.

        Raises:
            NullArgumentError: If header is None
            DuplicateHeaderError: If the header was already added
        """
        _require(header, 'header')
        if header in self._headers:
            raise DuplicateHeaderError(header)
        self._headers[header] = content
        return self

    def with_html_body(self, body: Optional[str]) -> 'Email':
        """Set body content as HTML. Passing None clears the body."""
        self.body = body
        self.is_html = True
        return self

    def with_plain_text_body(self, body: Optional[str]) -> 'Email':
        """Set body content as plain text. Passing None clears the body."""
        self.body = body
        self.is_html = False
        return self

    def with_priority(self, priority: Priority) -> 'Email':
        self.priority = priority
        return self

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def using_string_template(self, template: str, model: Any, is_html: bool = True) -> 'Email':
        """
        Use a template string during render.

        Args:
            template: Template source
            model: Data handed to the renderer along with the template
            is_html: Treat rendered output as HTML

        Raises:
            NullArgumentError: If template or model is None
        """
        _require(template, 'template')
        _require(model, 'model')

        self.template = template
        self.model = model
        self.is_html = is_html
        return self

    def using_file_template(
        self,
        template_file: Union[str, Path],
        model: Any,
        is_html: bool = True
    ) -> 'Email':
        """
        Use an existing template file during render.

        The file is read immediately; later edits to it have no effect on
        this email.

        Raises:
            NullArgumentError: If template_file or model is None
            FileNotFoundError: If the file does not exist
        """
        _require(template_file, 'template_file')
        _require(model, 'model')

        template = template_service.read_template_file(template_file)
        return self.using_string_template(template, model, is_html)

    def using_embedded_template(
        self,
        template_path: str,
        model: Any,
        source: Union[str, ModuleType, TemplateSource, None] = None,
        is_html: bool = True
    ) -> 'Email':
        """
        Use a template bundled with a package (or any TemplateSource).

        Args:
            template_path: Resource path inside the source
            model: Data handed to the renderer along with the template
            source: Package name, module or TemplateSource to read from.
                Defaults to the package of the calling module.
            is_html: Treat rendered output as HTML

        Raises:
            NullArgumentError: If template_path or model is None
            ResourceNotFoundError: If the source has no such resource
        """
        _require(template_path, 'template_path')
        _require(model, 'model')

        if source is None:
            source = _calling_package(1)

        template = template_service.resolve_source(source).read_text(template_path)
        return self.using_string_template(template, model, is_html)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    async def render_body(
        self,
        renderer: Renderer,
        cancellation: Optional[asyncio.Event] = None
    ) -> str:
        """
        Render email body as string.

        A literal body is returned as is without touching the renderer.
        Otherwise the template and model are handed to the renderer, and any
        error it raises propagates unchanged.

        Args:
            renderer: Renderer used when a template is set
            cancellation: Passed through to the renderer

        Returns:
            str: Final email body

        Raises:
            PreconditionViolationError: If neither body nor template is set
        """
        if self.template is None and self.body is None:
            raise PreconditionViolationError("body or template must be set")

        if self.template is None:
            logger.debug("Using literal email body, no rendering needed")
            return self.body

        logger.debug(
            f"Rendering email body from template ({len(self.template)} characters) "
            f"with {type(renderer).__name__}"
        )
        return await renderer.render(self.template, self.model, cancellation)

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        return (
            f"Email(from={self.from_address.email_address}, "
            f"to={[a.email_address for a in self._to_addresses]}, "
            f"subject={self.subject!r})"
        )
