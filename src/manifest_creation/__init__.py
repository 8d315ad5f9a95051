"""
Release Metadata Signer - Manifest Creation Module

This module builds the versioned release manifest from inspected artifacts
and writes it to disk as YAML.
"""

from .manifest_builder import ManifestBuilder, build_file_url, format_release_date
from .manifest_writer import ManifestWriter, manifest_filename, read_release_notes
from .release_manifest import (
    SCHEMA_VERSION,
    CompatibilityManifest,
    ReleaseFile,
    ReleaseManifest,
)

__all__ = [
    'ManifestBuilder',
    'ManifestWriter',
    'ReleaseManifest',
    'CompatibilityManifest',
    'ReleaseFile',
    'SCHEMA_VERSION',
    'build_file_url',
    'format_release_date',
    'manifest_filename',
    'read_release_notes',
]
