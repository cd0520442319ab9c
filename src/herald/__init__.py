"""
Compose email messages now, render their bodies at send time.

Usage:
    from herald import Address, Email

    email = (
        Email(Address("me@example.com"))
        .with_to(Address("you@example.com"))
        .with_subject("Welcome")
        .using_file_template("templates/welcome.html", {"name": "You"})
    )
    body = await email.render_body(renderer)
"""

from .domain.address import Address
from .domain.email_message import Email
from .domain.exceptions import (
    DuplicateHeaderError,
    HeraldError,
    InvalidAddressError,
    InvalidArgumentError,
    NullArgumentError,
    PreconditionViolationError,
    RenderError,
    ResourceNotFoundError,
)
from .domain.models import Attachment, Priority, SendResponse
from .domain.protocols import EmailSender, Renderer, TemplateSource
from .services.templates import PackageTemplateSource

__all__ = [
    'Address',
    'Attachment',
    'DuplicateHeaderError',
    'Email',
    'EmailSender',
    'HeraldError',
    'InvalidAddressError',
    'InvalidArgumentError',
    'NullArgumentError',
    'PackageTemplateSource',
    'PreconditionViolationError',
    'Priority',
    'RenderError',
    'Renderer',
    'ResourceNotFoundError',
    'SendResponse',
    'TemplateSource',
]
