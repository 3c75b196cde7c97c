"""OpenAI embeddings API provider implementation."""

import logging
import os

from openai import (
    APIConnectionError,
    APIError,
    APIStatusError,
    AuthenticationError,
    OpenAI,
    PermissionDeniedError,
    RateLimitError,
)

from ..errors import ProviderAPIError, ProviderAuthError
from .base import EmbeddingProvider

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "text-embedding-3-small"


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """OpenAI embedding provider implementation.

    Sends one string per request to the embeddings endpoint. Rate limiting
    and retries are left to the caller; the underlying client is created
    with retries disabled so that every failure surfaces.
    """

    name = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_OPENAI_MODEL,
        client: OpenAI | None = None,
    ) -> None:
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key. If not provided, reads from
                    OPENAI_API_KEY environment variable.
            model: Embedding model ID
            client: Pre-built OpenAI client (skips key lookup)

        Raises:
            ProviderAuthError: If API key is not provided or client creation fails.
        """
        self.model = model

        if client is not None:
            self._client = client
            return

        self._api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self._api_key:
            raise ProviderAuthError(
                "OpenAI API key not found. Set OPENAI_API_KEY environment "
                "variable or provide api_key parameter."
            )

        try:
            self._client = OpenAI(api_key=self._api_key, max_retries=0)
        except Exception as e:
            raise ProviderAuthError(f"Failed to initialize OpenAI client: {e}", e) from e

    def embed(self, text: str) -> list[float]:
        """Request the embedding of ``text``.

        Args:
            text: Text to embed

        Returns:
            Embedding vector as a list of floats

        Raises:
            ProviderAuthError: If authentication fails
            ProviderAPIError: If the API call fails or returns no data
        """
        try:
            response = self._client.embeddings.create(model=self.model, input=text)
        except (AuthenticationError, PermissionDeniedError) as e:
            raise ProviderAuthError(f"Authentication failed: {e}", e) from e
        except RateLimitError as e:
            raise ProviderAPIError(f"Rate limit exceeded: {e}", 429, e) from e
        except APIStatusError as e:
            raise ProviderAPIError(
                f"API call failed with status {e.status_code}: {e}", e.status_code, e
            ) from e
        except APIConnectionError as e:
            raise ProviderAPIError(f"Connection to OpenAI failed: {e}", None, e) from e
        except APIError as e:
            raise ProviderAPIError(f"API call failed: {e}", None, e) from e

        if not response.data:
            raise ProviderAPIError("No embedding data received from API")

        logger.debug(
            f"Received {len(response.data[0].embedding)}-dim embedding from {self.model}"
        )
        return response.data[0].embedding
