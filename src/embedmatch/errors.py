"""Custom embedmatch exceptions."""


class EmbedMatchError(Exception):
    """Base exception for all embedmatch errors."""

    pass


class ProviderError(EmbedMatchError):
    """Exception raised when an embedding could not be generated.

    Wraps whatever the underlying provider raised (network failures,
    malformed responses, SDK errors) in ``original_error``.
    """

    def __init__(
        self, message: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class ProviderAuthError(ProviderError):
    """The embedding service rejected our credentials.

    Raised when no API key is configured, or when an embedding request comes
    back 401/403 because the key is revoked or lacks access to the model.
    """

    pass


class ProviderAPIError(ProviderError):
    """An embedding request did not produce a vector.

    Covers HTTP errors from the embeddings endpoint (``status_code`` is set,
    429 for rate limiting), dropped connections (``status_code`` is None),
    and responses that carry no embedding data.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.status_code = status_code


class DegenerateVectorError(EmbedMatchError, ValueError):
    """Cosine similarity is undefined because a vector has zero norm."""

    pass


class DimensionMismatchError(EmbedMatchError, ValueError):
    """Two compared vectors have different lengths."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(
            f"Cannot compare vectors of different dimension: {left} != {right}"
        )
        self.left = left
        self.right = right


class EmptyCandidateSetError(EmbedMatchError, ValueError):
    """A best match was requested from an empty candidate list."""

    pass


class ConfigError(EmbedMatchError):
    """Configuration file or environment override is invalid."""

    pass
