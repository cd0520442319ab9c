"""
Data models that travel alongside an Email.

These are plain value types: the email core stores and hands them to
delivery backends without interpreting them.
"""

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

from .exceptions import InvalidArgumentError, NullArgumentError

DEFAULT_CONTENT_TYPE = 'application/octet-stream'


class Priority(Enum):
    """Delivery priority hint passed to the sending backend."""
    LOW = 'low'
    NORMAL = 'normal'
    HIGH = 'high'


def _guess_content_type(filename: str) -> str:
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or DEFAULT_CONTENT_TYPE


@dataclass(frozen=True)
class Attachment:
    """
    Email attachment backed either by a file on disk or by an open stream.

    Use the from_file / from_stream constructors rather than building
    instances directly.

    Attributes:
        filename: Name the recipient will see
        content_type: MIME type (e.g., "image/png", "application/pdf")
        path: File on disk (file-backed attachments only)
        stream: Binary stream (stream-backed attachments only)
    """
    filename: str
    content_type: str
    path: Optional[Path] = None
    stream: Optional[BinaryIO] = field(default=None, compare=False)

    @property
    def is_file_backed(self) -> bool:
        """Check if attachment content lives on disk."""
        return self.path is not None

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        attachment_name: Optional[str] = None
    ) -> 'Attachment':
        """
        Create attachment from a file on disk.

        The file is not opened here; delivery backends read it when sending.

        Args:
            path: File to attach
            attachment_name: Optional override, the file name is used by default

        Returns:
            Attachment with content type guessed from the file extension
        """
        if path is None:
            raise NullArgumentError('path')

        path = Path(path)
        return cls(
            filename=attachment_name or path.name,
            content_type=_guess_content_type(path.name),
            path=path
        )

    @classmethod
    def from_stream(
        cls,
        stream: BinaryIO,
        attachment_name: str,
        content_type: Optional[str] = None
    ) -> 'Attachment':
        """
        Create attachment from a binary stream.

        Args:
            stream: Readable binary stream with the attachment content
            attachment_name: Name the recipient will see
            content_type: Optional MIME type, guessed from the name when omitted

        Returns:
            Stream-backed Attachment
        """
        if stream is None:
            raise NullArgumentError('stream')
        if not attachment_name:
            raise InvalidArgumentError("Stream attachments require a name")

        return cls(
            filename=attachment_name,
            content_type=content_type or _guess_content_type(attachment_name),
            stream=stream
        )


@dataclass(frozen=True)
class SendResponse:
    """
    Result of handing an email to a delivery backend.

    This explicit result type lets senders report failures without
    raising. A response is successful exactly when it carries no errors.

    Attributes:
        errors: Error messages in the order they were reported
    """
    errors: Tuple[str, ...] = ()

    @property
    def is_successful(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls) -> 'SendResponse':
        """Shared zero-error response."""
        return _SUCCESS

    @classmethod
    def fail(cls, *messages: str) -> 'SendResponse':
        """
        Build a failed response.

        Args:
            *messages: One or more error messages

        Raises:
            InvalidArgumentError: If no message is given
        """
        if not messages:
            raise InvalidArgumentError("A failed response needs at least one error message")
        return cls(errors=tuple(messages))

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.is_successful:
            return "SendResponse(success=True)"
        return f"SendResponse(success=False, errors={list(self.errors)})"


_SUCCESS = SendResponse()
