"""
Manifest Writer Module

Serializes release manifests to YAML and persists them as
``latest-<platform>.yml``. Also reads release notes from disk.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from .release_manifest import ReleaseManifest

logger = logging.getLogger('release_metadata.manifest')


def manifest_filename(platform: str) -> str:
    """Return the manifest file name for a platform tag."""
    return f"latest-{platform}.yml"


class ManifestWriter:
    """Writes manifests to an output directory."""

    def __init__(self, output_dir: Union[str, Path] = '.'):
        self.output_dir = Path(output_dir)

    def to_yaml(self, manifest: ReleaseManifest) -> str:
        """Serialize a manifest to YAML, keeping the document key order."""
        return yaml.safe_dump(
            manifest.to_dict(),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True
        )

    def save(self, manifest: ReleaseManifest, platform: str) -> Path:
        """
        Write a manifest into the output directory.

        The directory is created if missing. An existing manifest for the
        same platform is replaced.

        Args:
            manifest: Manifest to persist
            platform: Platform tag used in the file name

        Returns:
            Path of the written manifest
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        manifest_path = self.output_dir / manifest_filename(platform)
        with open(manifest_path, 'w', encoding='utf-8') as f:
            f.write(self.to_yaml(manifest))

        logger.debug("Wrote manifest to %s", manifest_path)
        return manifest_path


def read_release_notes(notes_path: Optional[str]) -> Optional[str]:
    """
    Read Markdown release notes from a file.

    Args:
        notes_path: Path to the notes file, or None

    Returns:
        File contents, or None when no path is given
    """
    if not notes_path:
        return None

    with open(notes_path, 'r', encoding='utf-8') as f:
        return f.read()
