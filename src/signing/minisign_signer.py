"""
Minisign Signer Module

Drives the external ``minisign`` tool to produce detached signatures.
Each call to :meth:`MinisignSigner.sign` spawns exactly one process and
reduces its exit status to a SigningOutcome.
"""

import logging
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, Dict, Optional, TextIO, Type

from .credentials import ExplicitCredential, InteractiveCredential, SigningCredential

logger = logging.getLogger('release_metadata.signing')

SIGNATURE_SUFFIX = '.minisig'


@dataclass(frozen=True)
class SigningOutcome:
    """Result of one signer invocation."""

    file_path: str
    success: bool
    exit_status: Optional[int] = None
    diagnostics: str = ''

    def describe(self) -> str:
        """Human readable summary of a failed invocation."""
        if self.success:
            return f"Signed {self.file_path}"
        if self.exit_status is None:
            reason = "minisign could not be started"
        elif self.exit_status < 0:
            reason = f"minisign was terminated by signal {-self.exit_status}"
        else:
            reason = f"minisign exited with status {self.exit_status}"
        detail = self.diagnostics.strip()
        return f"{reason}: {detail}" if detail else reason


class MinisignSigner:
    """Signs files by invoking ``minisign -S -s <key> -m <file>``."""

    def __init__(self,
                 executable: str = 'minisign',
                 diagnostic_stream: Optional[TextIO] = None):
        """
        Initialize the signer.

        Args:
            executable: Name or path of the minisign binary
            diagnostic_stream: Where captured signer output is echoed
                (defaults to sys.stderr at call time)
        """
        self.executable = executable
        self.diagnostic_stream = diagnostic_stream
        self._strategies: Dict[Type[SigningCredential], Callable[..., SigningOutcome]] = {
            ExplicitCredential: self._sign_with_piped_secret,
            InteractiveCredential: self._sign_with_terminal,
        }

    def build_command(self, file_path: str, secret_key_path: str) -> list:
        return [self.executable, '-S', '-s', secret_key_path, '-m', file_path]

    def sign(self,
             file_path: str,
             secret_key_path: str,
             credential: SigningCredential) -> SigningOutcome:
        """
        Sign a file once.

        Args:
            file_path: File to sign
            secret_key_path: Path to the minisign secret key
            credential: How the key passphrase is supplied

        Returns:
            SigningOutcome for the invocation
        """
        strategy = self._strategies.get(type(credential))
        if strategy is None:
            raise TypeError(f"Unsupported signing credential: {type(credential).__name__}")

        command = self.build_command(file_path, secret_key_path)
        logger.debug("Running %s (%s credential)", ' '.join(command), credential.mode)

        try:
            return strategy(command, file_path, credential)
        except OSError as e:
            return SigningOutcome(file_path=file_path, success=False, diagnostics=str(e))

    def _sign_with_piped_secret(self,
                                command: list,
                                file_path: str,
                                credential: ExplicitCredential) -> SigningOutcome:
        process = subprocess.Popen(
            command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True
        )
        output, _ = process.communicate(input=credential.secret + '\n')

        if output:
            stream = self.diagnostic_stream or sys.stderr
            stream.write(output)
            stream.flush()

        return SigningOutcome(
            file_path=file_path,
            success=process.returncode == 0,
            exit_status=process.returncode,
            diagnostics=output or ''
        )

    def _sign_with_terminal(self,
                            command: list,
                            file_path: str,
                            credential: InteractiveCredential) -> SigningOutcome:
        # Streams are inherited so minisign can prompt on the controlling terminal.
        process = subprocess.Popen(command)
        returncode = process.wait()

        return SigningOutcome(
            file_path=file_path,
            success=returncode == 0,
            exit_status=returncode
        )

    def is_available(self) -> bool:
        """Check that the minisign binary can be executed."""
        try:
            subprocess.run(
                [self.executable, '-v'],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=True
            )
            return True
        except (subprocess.SubprocessError, OSError):
            return False

    @staticmethod
    def signature_path(file_path: str) -> str:
        """Path of the detached signature minisign writes beside ``file_path``."""
        return f"{file_path}{SIGNATURE_SUFFIX}"
