"""
Pipeline Errors Module

Exceptions raised by the release pipeline. Every error carries the stage
that failed and, where one is involved, the offending file.
"""

import os
from enum import Enum
from typing import Optional


class PipelineStage(str, Enum):
    """Stages of a release pipeline run, in execution order."""

    PENDING = 'pending'
    VALIDATED = 'validated'
    INSPECTED = 'inspected'
    BUILT = 'built'
    PERSISTED = 'persisted'
    MANIFEST_SIGNED = 'manifest-signed'
    ARTIFACTS_SIGNED = 'artifacts-signed'
    COMPLETE = 'complete'
    FAILED = 'failed'


class PipelineError(Exception):
    """Base exception for release pipeline failures."""

    def __init__(self, message: str, stage: PipelineStage, path: Optional[str] = None):
        self.message = message
        self.stage = stage
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        if self.path:
            return f"[{self.stage.value}] {os.path.basename(self.path)}: {self.message}"
        return f"[{self.stage.value}] {self.message}"


class ValidationError(PipelineError):
    """Invalid inputs, reported before any file is touched."""

    def __init__(self, message: str):
        super().__init__(message, PipelineStage.VALIDATED)


class FileAccessError(PipelineError):
    """An artifact, notes file or output location could not be read or written."""

    pass


class SigningError(PipelineError):
    """The external signer failed for a file."""

    def __init__(self,
                 message: str,
                 stage: PipelineStage,
                 path: str,
                 exit_status: Optional[int] = None,
                 diagnostics: str = ''):
        self.exit_status = exit_status
        self.diagnostics = diagnostics
        super().__init__(message, stage, path)
