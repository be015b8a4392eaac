"""Embedding provider adapters."""

from .http_embedding_provider import HttpEmbeddingProvider

__all__ = ["HttpEmbeddingProvider"]
