"""
Manifest Builder Module

Assembles a ReleaseManifest from inspected artifacts and caller metadata.
The builder performs no I/O.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence

from artifact_inspection import ArtifactDescriptor

from .release_manifest import CompatibilityManifest, ReleaseFile, ReleaseManifest


def format_release_date(moment: Optional[datetime] = None) -> str:
    """Format a timestamp as ISO-8601 UTC with millisecond precision."""
    moment = moment or datetime.now(timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def build_file_url(name: str, base_url: Optional[str] = None) -> str:
    """Return the download URL for a distributable."""
    if not base_url:
        return name
    return f"{base_url.rstrip('/')}/{name}"


class ManifestBuilder:
    """Builds release manifests from artifact descriptors."""

    def build(self,
              artifacts: Sequence[ArtifactDescriptor],
              version: str,
              updater_version: str,
              release_notes: Optional[str] = None,
              base_url: Optional[str] = None,
              auto_updater_compat: bool = False,
              release_date: Optional[datetime] = None) -> ReleaseManifest:
        """
        Build a release manifest.

        ``artifacts`` must be non-empty; callers validate this before
        inspection starts.

        Args:
            artifacts: Inspected distributables, in input order
            version: Effective application version
            updater_version: Version of the updater protocol
            release_notes: Optional Markdown notes, dropped when empty
            base_url: Optional URL prefix for every file entry
            auto_updater_compat: Add legacy top-level path/sha512/size fields
            release_date: Release timestamp (defaults to now)

        Returns:
            ReleaseManifest, or CompatibilityManifest when requested
        """
        files = tuple(
            ReleaseFile(
                url=build_file_url(artifact.name, base_url),
                sha512=artifact.sha512,
                size=artifact.size,
                arch=artifact.arch.value if artifact.arch else None
            )
            for artifact in artifacts
        )

        manifest = ReleaseManifest(
            version=version,
            updater_version=updater_version,
            release_date=format_release_date(release_date),
            files=files,
            release_notes=release_notes or None
        )

        if auto_updater_compat:
            return CompatibilityManifest.from_manifest(manifest, artifacts[0].name)

        return manifest
