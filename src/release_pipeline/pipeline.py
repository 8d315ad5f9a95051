"""
Release Pipeline Module

Sequences inspection, manifest construction, persistence and signing for
a release. The run is fail-fast: the first error stops the pipeline and
files already written are left in place.
"""

import logging
import os
from datetime import datetime
from typing import List, Optional, Tuple

from artifact_inspection import (
    ArtifactDescriptor,
    ArtifactInspector,
    extract_version_from_filename,
)
from manifest_creation import ManifestBuilder, ManifestWriter, ReleaseManifest, read_release_notes
from signing import ExplicitCredential, InteractiveCredential, MinisignSigner

from .config import DEFAULT_INSPECTION_WORKERS, FALLBACK_APP_VERSION, ReleaseRequest
from .errors import (
    FileAccessError,
    PipelineError,
    PipelineStage,
    SigningError,
    ValidationError,
)

_default_logger = logging.getLogger('release_metadata.pipeline')
_default_logger.addHandler(logging.NullHandler())


def resolve_app_version(explicit: Optional[str], distributables: List[str]) -> str:
    """Explicit version, else one parsed from the first file name, else the fallback."""
    if explicit is not None:
        return explicit
    derived = extract_version_from_filename(os.path.basename(distributables[0]))
    return derived or FALLBACK_APP_VERSION


class ReleasePipeline:
    """Creates and signs release metadata for a set of distributables."""

    def __init__(self,
                 signer: Optional[MinisignSigner] = None,
                 logger: Optional[logging.Logger] = None,
                 inspector: Optional[ArtifactInspector] = None,
                 builder: Optional[ManifestBuilder] = None):
        """
        Initialize the pipeline.

        Args:
            signer: Signer used for the manifest and every distributable
            logger: Sink for progress messages (silent by default)
            inspector: File inspector; a bounded thread pool by default
            builder: Manifest builder
        """
        self.signer = signer or MinisignSigner()
        self.logger = logger or _default_logger
        self.inspector = inspector or ArtifactInspector(max_workers=DEFAULT_INSPECTION_WORKERS)
        self.builder = builder or ManifestBuilder()
        self.stage = PipelineStage.PENDING

    def run(self, request: ReleaseRequest, release_date: Optional[datetime] = None) -> str:
        """
        Run the pipeline to completion.

        Args:
            request: Resolved options for the run
            release_date: Timestamp recorded in the manifest (defaults to now)

        Returns:
            Path of the signed manifest file
        """
        try:
            self._validate(request)
            artifacts, notes = self._inspect(request)
            manifest = self._build(request, artifacts, notes, release_date)
            manifest_path = self._persist(request, manifest)
            self._sign_manifest(request, manifest_path)
            self._sign_distributables(request)
        except PipelineError:
            self.stage = PipelineStage.FAILED
            raise

        self._advance(PipelineStage.COMPLETE)
        self.logger.info("Release metadata complete: %s", manifest_path)
        return manifest_path

    def _advance(self, stage: PipelineStage) -> None:
        self.stage = stage
        self.logger.debug("Pipeline stage: %s", stage.value)

    def _validate(self, request: ReleaseRequest) -> None:
        if not request.distributables:
            raise ValidationError("No distributable files provided")
        if not request.secret_key_path:
            raise ValidationError("Secret key path is required")
        if not isinstance(request.credential, (ExplicitCredential, InteractiveCredential)):
            raise ValidationError("A signing credential is required")
        self._advance(PipelineStage.VALIDATED)

    def _inspect(self, request: ReleaseRequest) -> Tuple[List[ArtifactDescriptor], Optional[str]]:
        self.logger.info("[inspect] Hashing %d distributable(s)", len(request.distributables))
        try:
            artifacts = self.inspector.inspect_many(request.distributables)
        except OSError as e:
            path = getattr(e, 'filename', None)
            raise FileAccessError(
                f"Failed to inspect distributable: {e.strerror or e}",
                PipelineStage.INSPECTED,
                path
            ) from e

        for artifact in artifacts:
            self.logger.info("[inspect] %s sha512=%s size=%d", artifact.name, artifact.sha512, artifact.size)

        if request.release_notes is not None:
            notes = request.release_notes
        else:
            try:
                notes = read_release_notes(request.release_notes_path)
            except (OSError, UnicodeDecodeError) as e:
                raise FileAccessError(
                    f"Failed to read release notes: {getattr(e, 'strerror', None) or e}",
                    PipelineStage.INSPECTED,
                    request.release_notes_path
                ) from e

        self._advance(PipelineStage.INSPECTED)
        return artifacts, notes

    def _build(self,
               request: ReleaseRequest,
               artifacts: List[ArtifactDescriptor],
               notes: Optional[str],
               release_date: Optional[datetime]) -> ReleaseManifest:
        version = resolve_app_version(request.app_version, request.distributables)
        self.logger.info("[build] Manifest for version %s", version)

        manifest = self.builder.build(
            artifacts,
            version=version,
            updater_version=request.updater_version,
            release_notes=notes,
            base_url=request.base_url,
            auto_updater_compat=request.auto_updater_compat,
            release_date=release_date
        )
        self._advance(PipelineStage.BUILT)
        return manifest

    def _persist(self, request: ReleaseRequest, manifest: ReleaseManifest) -> str:
        writer = ManifestWriter(request.output_dir)
        try:
            manifest_path = str(writer.save(manifest, request.platform))
        except OSError as e:
            raise FileAccessError(
                f"Failed to write manifest: {e.strerror or e}",
                PipelineStage.PERSISTED,
                getattr(e, 'filename', None) or request.output_dir
            ) from e

        self.logger.info("[persist] Wrote %s", manifest_path)
        self._advance(PipelineStage.PERSISTED)
        return manifest_path

    def _sign(self, request: ReleaseRequest, file_path: str, stage: PipelineStage) -> None:
        self.logger.info("[sign] %s", file_path)
        try:
            outcome = self.signer.sign(file_path, request.secret_key_path, request.credential)
        except TypeError as e:
            raise SigningError(f"Failed to sign file with minisign: {e}", stage, file_path) from e
        if not outcome.success:
            raise SigningError(
                f"Failed to sign file with minisign: {outcome.describe()}",
                stage,
                file_path,
                exit_status=outcome.exit_status,
                diagnostics=outcome.diagnostics
            )

    def _sign_manifest(self, request: ReleaseRequest, manifest_path: str) -> None:
        self._sign(request, manifest_path, PipelineStage.MANIFEST_SIGNED)
        self._advance(PipelineStage.MANIFEST_SIGNED)

    def _sign_distributables(self, request: ReleaseRequest) -> None:
        # Sequential: interactive signing needs exclusive use of the terminal.
        for file_path in request.distributables:
            self._sign(request, file_path, PipelineStage.ARTIFACTS_SIGNED)
        self._advance(PipelineStage.ARTIFACTS_SIGNED)
