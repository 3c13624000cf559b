from typing import Optional


class BooruError(Exception):
    """Base exception for booru operations."""

    pass


class FeatureUnavailable(BooruError):
    """Raised when the booru does not support the requested operation."""

    def __init__(self, feature: Optional[str] = None):
        self.feature = feature
        message = f"Feature not available on this booru: {feature}" if feature else "Feature not available on this booru"
        super().__init__(message)


class TooManyTags(BooruError):
    """Raised when a search uses more tags than the booru allows."""

    pass


class InvalidTags(BooruError):
    """Raised when a search matches nothing."""

    pass


class PostNotFound(InvalidTags):
    """Raised when a single-post lookup returns an empty collection."""

    pass


class AuthenticationRequired(BooruError):
    """Raised when the booru answers 403."""

    pass


class HttpError(BooruError):
    """Raised for any other non-success HTTP status."""

    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP {status_code} from {url}" if url else f"HTTP {status_code}")


class DecodeError(BooruError):
    """Raised when a response cannot be decoded into a canonical record."""

    pass
