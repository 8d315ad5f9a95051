"""
Signing Credentials Module

Describes how the passphrase for a minisign secret key reaches the signer
process: supplied up front, or typed by the operator at the terminal.
"""

import sys
from dataclasses import dataclass, field
from typing import Optional, TextIO


class CredentialUnavailableError(Exception):
    """No passphrase was supplied and no terminal is available to prompt for one."""

    pass


class SigningCredential:
    """Base class for the credential supply modes."""

    mode = 'unknown'


@dataclass(frozen=True)
class ExplicitCredential(SigningCredential):
    """Passphrase supplied by the caller and piped to the signer."""

    secret: str = field(repr=False)
    mode = 'explicit'


@dataclass(frozen=True)
class InteractiveCredential(SigningCredential):
    """The signer prompts the operator through the inherited terminal."""

    mode = 'interactive'


def resolve_credential(secret: Optional[str] = None,
                       stdin: Optional[TextIO] = None) -> SigningCredential:
    """
    Select the credential mode for a signing run.

    Args:
        secret: Passphrase, if the caller has one
        stdin: Stream checked for terminal access (defaults to sys.stdin)

    Returns:
        ExplicitCredential when a secret is given, otherwise
        InteractiveCredential when stdin is a terminal
    """
    if secret is not None:
        return ExplicitCredential(secret)

    stream = stdin if stdin is not None else sys.stdin
    if stream is not None and stream.isatty():
        return InteractiveCredential()

    raise CredentialUnavailableError(
        "No password supplied and no terminal available for minisign to prompt; "
        "pass --password or set MINISIGN_PASSWORD"
    )
