"""
Filename Heuristics Module

Best-effort extraction of architecture and version tags from distributable
file names. Results are advisory: a miss yields None, never an error.
"""

import re
from enum import Enum
from typing import List, Optional, Pattern, Tuple


class Architecture(str, Enum):
    """Target architectures recognised in distributable file names."""

    ARM64 = 'arm64'
    X64 = 'x64'
    IA32 = 'ia32'
    UNIVERSAL = 'universal'


# Checked in order; x86_64 must be claimed by x64 before the bare x86 group.
_ARCH_PATTERNS: List[Tuple[Pattern, Architecture]] = [
    (re.compile(r'arm64|aarch64', re.IGNORECASE), Architecture.ARM64),
    (re.compile(r'x64|x86_64|amd64', re.IGNORECASE), Architecture.X64),
    (re.compile(r'x86|ia32|i386', re.IGNORECASE), Architecture.IA32),
    (re.compile(r'universal', re.IGNORECASE), Architecture.UNIVERSAL),
]

_EXTENSION = re.compile(r'\.[^.]+$')
_VERSION_WITH_PRERELEASE = re.compile(r'v?(\d+\.\d+\.\d+(?:-[a-zA-Z0-9.]+)?)')
_VERSION_SIMPLE = re.compile(r'v?(\d+\.\d+\.\d+)')


def extract_arch_from_filename(filename: str) -> Optional[Architecture]:
    """
    Guess the target architecture from a file name.

    Args:
        filename: Base name of the distributable

    Returns:
        Matching Architecture, or None if no known token is present
    """
    for pattern, arch in _ARCH_PATTERNS:
        if pattern.search(filename):
            return arch
    return None


def extract_version_from_filename(filename: str) -> Optional[str]:
    """
    Extract a semantic version such as ``1.2.3`` or ``1.2.3-beta.1``.

    The file extension is removed first so that it is never mistaken for
    part of a prerelease suffix.

    Args:
        filename: Base name of the distributable

    Returns:
        Version string without any leading ``v``, or None
    """
    name_without_ext = _EXTENSION.sub('', filename)

    match = _VERSION_WITH_PRERELEASE.search(name_without_ext)
    if match:
        return match.group(1)

    match = _VERSION_SIMPLE.search(name_without_ext)
    return match.group(1) if match else None
