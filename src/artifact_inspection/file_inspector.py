"""
File Inspector Module

Computes the integrity metadata that describes a distributable in a release
manifest: a base64 SHA-512 digest, the byte size and an architecture tag.
"""

import base64
import errno
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from cryptography.hazmat.primitives import hashes

from .filename_heuristics import Architecture, extract_arch_from_filename

logger = logging.getLogger('release_metadata.inspection')

CHUNK_SIZE = 64 * 1024
DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class ArtifactDescriptor:
    """Integrity metadata for one distributable file."""

    path: str
    name: str
    sha512: str
    size: int
    arch: Optional[Architecture] = None


class ArtifactInspector:
    """Derives ArtifactDescriptors from files on disk."""

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers

    def calculate_sha512(self, file_path: str) -> str:
        """
        Calculate the SHA-512 digest of a file without loading it whole.

        Args:
            file_path: Path to the file

        Returns:
            Base64-encoded digest
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(errno.ENOENT, "Artifact not found", file_path)

        digest = hashes.Hash(hashes.SHA512())
        with open(file_path, 'rb') as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                digest.update(chunk)

        return base64.b64encode(digest.finalize()).decode('ascii')

    def get_file_size(self, file_path: str) -> int:
        """Return the size of a file in bytes."""
        return os.stat(file_path).st_size

    def inspect(self, file_path: str) -> ArtifactDescriptor:
        """
        Build the descriptor for a single distributable.

        Args:
            file_path: Path to the distributable

        Returns:
            ArtifactDescriptor with digest, size and architecture tag
        """
        name = os.path.basename(file_path)
        sha512 = self.calculate_sha512(file_path)
        size = self.get_file_size(file_path)
        arch = extract_arch_from_filename(name)

        logger.debug("Inspected %s (%d bytes, arch=%s)", name, size,
                     arch.value if arch else 'unknown')

        return ArtifactDescriptor(
            path=file_path,
            name=name,
            sha512=sha512,
            size=size,
            arch=arch
        )

    def inspect_many(self, file_paths: Sequence[str]) -> List[ArtifactDescriptor]:
        """
        Inspect several distributables concurrently.

        Descriptors are returned in the order of ``file_paths``. The first
        failure (in input order) is re-raised once all workers finish.

        Args:
            file_paths: Paths to the distributables

        Returns:
            List of ArtifactDescriptor objects
        """
        if not file_paths:
            return []

        workers = min(self.max_workers, len(file_paths))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.inspect, path) for path in file_paths]
            return [future.result() for future in futures]
