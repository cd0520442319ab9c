"""
Error types raised while composing and rendering emails.

Validation errors derive from ValueError so callers that only care about
"bad input" can catch the builtin. Renderer and resource failures are
propagated to the caller unchanged.
"""


# ============================================================================
# Base
# ============================================================================

class HeraldError(Exception):
    """Base class for all errors raised by this package."""
    pass


# ============================================================================
# Composition errors (raised synchronously by Address / Email)
# ============================================================================

class InvalidArgumentError(HeraldError, ValueError):
    """Raised when an argument is malformed."""
    pass


class InvalidAddressError(InvalidArgumentError):
    """Raised when an email address is empty or has no '@'."""
    pass


class NullArgumentError(InvalidArgumentError):
    """Raised when a required argument is None."""

    def __init__(self, argument: str):
        super().__init__(f"Argument '{argument}' must not be None")
        self.argument = argument


class DuplicateHeaderError(InvalidArgumentError):
    """Raised when a header with the same name was already added."""

    def __init__(self, header: str):
        super().__init__(f"Header '{header}' has already been added")
        self.header = header


# ============================================================================
# Rendering errors
# ============================================================================

class PreconditionViolationError(HeraldError):
    """Raised when an email is rendered without a body or template."""
    pass


class RenderError(HeraldError):
    """Raised by renderer implementations when a template cannot be rendered."""
    pass


# ============================================================================
# Template source errors
# ============================================================================

class ResourceNotFoundError(HeraldError, FileNotFoundError):
    """Raised when a template resource cannot be located in its source."""

    def __init__(self, path: str, source: str):
        super().__init__(f"Template resource '{path}' not found in {source}")
        self.path = path
        self.source = source
