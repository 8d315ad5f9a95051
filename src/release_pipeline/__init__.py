"""
Release Metadata Signer - Release Pipeline Module

This module coordinates artifact inspection, manifest construction,
persistence and minisign signing for a release.
"""

__version__ = "0.2.0"

from .config import ReleaseRequest  # noqa: E402
from .errors import (  # noqa: E402
    FileAccessError,
    PipelineError,
    PipelineStage,
    SigningError,
    ValidationError,
)
from .pipeline import ReleasePipeline, resolve_app_version  # noqa: E402

__all__ = [
    'ReleasePipeline',
    'ReleaseRequest',
    'PipelineError',
    'PipelineStage',
    'ValidationError',
    'FileAccessError',
    'SigningError',
    'resolve_app_version',
]
