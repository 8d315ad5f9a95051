"""
Release Manifest Module

Data types for the versioned release document consumed by auto-updaters.
A manifest comes in two shapes: the standard document, and a compatibility
variant that additionally mirrors the primary file at the top level for
legacy electron-builder style updaters.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class ReleaseFile:
    """A single file entry in the manifest."""

    url: str
    sha512: str
    size: int
    arch: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            'url': self.url,
            'sha512': self.sha512,
            'size': self.size,
        }
        if self.arch:
            entry['arch'] = self.arch
        return entry


@dataclass(frozen=True)
class ReleaseManifest:
    """Standard release manifest."""

    version: str
    updater_version: str
    release_date: str
    files: Tuple[ReleaseFile, ...]
    release_notes: Optional[str] = None
    schema_version: int = field(default=SCHEMA_VERSION, init=False)

    @property
    def primary_file(self) -> ReleaseFile:
        """The first file entry, used as the default download."""
        return self.files[0]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the manifest to its wire document, preserving key order."""
        document: Dict[str, Any] = {
            'version': self.version,
            'updaterVersion': self.updater_version,
            'schemaVersion': self.schema_version,
            'releaseDate': self.release_date,
            'files': [entry.to_dict() for entry in self.files],
        }
        if self.release_notes:
            document['releaseNotes'] = self.release_notes
        return document


@dataclass(frozen=True)
class CompatibilityManifest(ReleaseManifest):
    """
    Manifest extended with top-level ``path``, ``sha512`` and ``size``.

    Instances should be created with :meth:`from_manifest` so the legacy
    fields are always derived from the first file entry.
    """

    path: str = ''
    sha512: str = ''
    size: int = 0

    @classmethod
    def from_manifest(cls, manifest: ReleaseManifest, primary_name: str) -> 'CompatibilityManifest':
        """
        Derive the compatibility variant from a finished standard manifest.

        Args:
            manifest: Manifest whose file list is final
            primary_name: Base name of the first distributable

        Returns:
            CompatibilityManifest mirroring the first file entry
        """
        primary = manifest.primary_file
        return cls(
            version=manifest.version,
            updater_version=manifest.updater_version,
            release_date=manifest.release_date,
            files=manifest.files,
            release_notes=manifest.release_notes,
            path=primary_name,
            sha512=primary.sha512,
            size=primary.size,
        )

    def to_dict(self) -> Dict[str, Any]:
        document = super().to_dict()
        document['path'] = self.path
        document['sha512'] = self.sha512
        document['size'] = self.size
        return document
