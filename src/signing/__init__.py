"""
Release Metadata Signer - Signing Module

This module drives the external minisign tool to sign release manifests
and distributables, supplying the key passphrase either through a pipe or
through the operator's terminal.
"""

from .credentials import (
    CredentialUnavailableError,
    ExplicitCredential,
    InteractiveCredential,
    SigningCredential,
    resolve_credential,
)
from .minisign_signer import MinisignSigner, SigningOutcome

__all__ = [
    'MinisignSigner',
    'SigningOutcome',
    'SigningCredential',
    'ExplicitCredential',
    'InteractiveCredential',
    'CredentialUnavailableError',
    'resolve_credential',
]
