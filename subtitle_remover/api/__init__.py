"""Clients for the remote image editing API."""

from .gemini_client import (
    EditFailure,
    EditResult,
    EditSuccess,
    FailureKind,
    GeminiClient,
    GeminiRequestError,
    MissingCredentialError,
)

__all__ = [
    "EditFailure",
    "EditResult",
    "EditSuccess",
    "FailureKind",
    "GeminiClient",
    "GeminiRequestError",
    "MissingCredentialError",
]
