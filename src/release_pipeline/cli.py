"""
Command-line entry point.

``create-release-metadata`` builds ``latest-<platform>.yml`` for a set of
distributables and signs the manifest and every file with minisign.
"""

import logging
import sys
from typing import Optional, Tuple

import click

from signing import CredentialUnavailableError, MinisignSigner, resolve_credential

from . import __version__
from .config import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PLATFORM,
    DEFAULT_SIGNER,
    DEFAULT_UPDATER_VERSION,
    ENV_PASSWORD,
    ENV_SIGNER,
    SUPPORTED_PLATFORMS,
    ReleaseRequest,
)
from .errors import PipelineError
from .pipeline import ReleasePipeline

INSTALL_INSTRUCTIONS = """\
Installation instructions for minisign:

On macOS:
  brew install minisign

On Ubuntu/Debian:
  apt install minisign

On Windows:
  Download from https://jedisct1.github.io/minisign/

For more information and other platforms:
  https://jedisct1.github.io/minisign/

To generate keys, use:
  minisign -G"""


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Setup logging for the command line tool.

    Args:
        verbose: Show per-stage progress when True

    Returns:
        Configured logger
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("release_metadata")


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.command(name="create-release-metadata")
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False))
@click.option("-k", "--secret-key", "secret_key", type=click.Path(dir_okay=False),
              help="Path to the minisign secret key file")
@click.option("-o", "--output-dir", default=DEFAULT_OUTPUT_DIR, show_default=True,
              help="Directory where the metadata files will be written")
@click.option("-n", "--release-notes", help="Release notes in Markdown format")
@click.option("--release-notes-file", type=click.Path(dir_okay=False),
              help="Path to a file containing release notes in Markdown format")
@click.option("--auto-updater-compat", is_flag=True,
              help="Generate manifest compatible with Electron Builder auto-updater")
@click.option("--base-url", help="Base URL where the distributable files will be hosted")
@click.option("--app-version",
              help="Version of the application (defaults to version extracted from filename)")
@click.option("--updater-version", default=DEFAULT_UPDATER_VERSION, show_default=True,
              help="Version of the updater")
@click.option("--platform", type=click.Choice(SUPPORTED_PLATFORMS), default=DEFAULT_PLATFORM,
              show_default=True, help="Platform to create metadata for")
@click.option("-p", "--password", envvar=ENV_PASSWORD,
              help=f"Secret key password (or set {ENV_PASSWORD}); prompts when omitted")
@click.option("--minisign", "minisign_bin", envvar=ENV_SIGNER, default=DEFAULT_SIGNER,
              show_default=True, help=f"minisign executable (or set {ENV_SIGNER})")
@click.option("-v", "--verbose", is_flag=True, help="Show progress for each stage")
@click.option("--install-minisign", is_flag=True, help="Show instructions to install minisign")
@click.version_option(version=__version__, prog_name="create-release-metadata")
def cli(files: Tuple[str, ...],
        secret_key: Optional[str],
        output_dir: str,
        release_notes: Optional[str],
        release_notes_file: Optional[str],
        auto_updater_compat: bool,
        base_url: Optional[str],
        app_version: Optional[str],
        updater_version: str,
        platform: str,
        password: Optional[str],
        minisign_bin: str,
        verbose: bool,
        install_minisign: bool) -> None:
    """
    Create signed release metadata for FILES.

    Writes latest-<platform>.yml with the SHA-512 digest and size of every
    distributable, then signs the manifest and each file with minisign.
    """
    if install_minisign:
        click.echo(INSTALL_INSTRUCTIONS)
        return

    logger = setup_logging(verbose)
    signer = MinisignSigner(executable=minisign_bin)

    if not signer.is_available():
        click.echo("Error: The minisign command is required but not installed or not in your PATH.",
                   err=True)
        click.echo("Run with --install-minisign for installation instructions.", err=True)
        sys.exit(1)

    if not files:
        _fail("No distributable files specified")
    if not secret_key:
        _fail("--secret-key is required")

    try:
        credential = resolve_credential(password)
    except CredentialUnavailableError as e:
        _fail(str(e))

    request = ReleaseRequest(
        distributables=list(files),
        secret_key_path=secret_key,
        credential=credential,
        output_dir=output_dir,
        platform=platform,
        app_version=app_version,
        updater_version=updater_version,
        base_url=base_url,
        release_notes=release_notes,
        release_notes_path=release_notes_file,
        auto_updater_compat=auto_updater_compat,
    )

    try:
        manifest_path = ReleasePipeline(signer=signer, logger=logger).run(request)
    except PipelineError as e:
        _fail(str(e))

    click.echo(f"Successfully created metadata at {manifest_path}")
    click.echo("Created signature files:")
    click.echo(f" - {signer.signature_path(manifest_path)}")
    for file_path in files:
        click.echo(f" - {signer.signature_path(file_path)}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
