"""
Pipeline configuration module.

Defaults, environment variable names and the request object that carries
resolved options into the release pipeline.
"""

from dataclasses import dataclass
from typing import List, Optional

from signing import SigningCredential


# ============================================================================
# Constants
# ============================================================================

SUPPORTED_PLATFORMS = ('mac', 'win', 'linux')

# Environment variable names
ENV_PASSWORD = 'MINISIGN_PASSWORD'
ENV_SIGNER = 'MINISIGN_BIN'

# Default values
DEFAULT_PLATFORM = 'mac'
DEFAULT_OUTPUT_DIR = '.'
DEFAULT_UPDATER_VERSION = '1.0.0'
FALLBACK_APP_VERSION = '1.0.0'
DEFAULT_SIGNER = 'minisign'
DEFAULT_INSPECTION_WORKERS = 4


# ============================================================================
# Request
# ============================================================================


@dataclass
class ReleaseRequest:
    """
    Resolved options for one pipeline run.

    Attributes:
        distributables: Paths of the files to describe and sign, in order
        secret_key_path: Path to the minisign secret key
        credential: How the key passphrase reaches minisign
        output_dir: Directory that receives ``latest-<platform>.yml``
        platform: Platform tag used in the manifest file name
        app_version: Explicit application version
        updater_version: Updater protocol version
        base_url: URL prefix for file entries
        release_notes: Markdown notes; takes precedence over release_notes_path
        release_notes_path: File containing Markdown notes
        auto_updater_compat: Emit legacy top-level path/sha512/size fields
    """

    distributables: List[str]
    secret_key_path: str
    credential: SigningCredential
    output_dir: str = DEFAULT_OUTPUT_DIR
    platform: str = DEFAULT_PLATFORM
    app_version: Optional[str] = None
    updater_version: str = DEFAULT_UPDATER_VERSION
    base_url: Optional[str] = None
    release_notes: Optional[str] = None
    release_notes_path: Optional[str] = None
    auto_updater_compat: bool = False
