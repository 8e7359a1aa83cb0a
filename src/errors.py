"""Domain exceptions raised by the core and the page store."""


class SeoEditorError(Exception):
    """Base class for all service errors."""


class ValidationError(SeoEditorError):
    """Missing or malformed identifiers or payload fields."""


class NotFoundError(SeoEditorError):
    """No page matches the requested pageId within the tenant."""


class AuthError(SeoEditorError):
    """Missing or unrecognized access token."""


class EmptyInputError(SeoEditorError):
    """Aggregate scoring was requested over zero pages."""


class StoreError(SeoEditorError):
    """The document store failed or returned a corrupt document."""
