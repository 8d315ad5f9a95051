"""
Release Metadata Signer - Artifact Inspection Module

This module derives integrity metadata (SHA-512 digest, size) and advisory
tags (architecture, version) from distributable files.
"""

from .file_inspector import ArtifactDescriptor, ArtifactInspector
from .filename_heuristics import (
    Architecture,
    extract_arch_from_filename,
    extract_version_from_filename,
)

__all__ = [
    'ArtifactDescriptor',
    'ArtifactInspector',
    'Architecture',
    'extract_arch_from_filename',
    'extract_version_from_filename',
]
