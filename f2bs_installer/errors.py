"""Error hierarchy for the installer.

Each error carries a stable ``code`` that commands surface in JSON output.
"""

from __future__ import annotations


class InstallerError(Exception):
    """Base error with a user-facing message."""

    code = "F2BS-ERROR"


class NoWritableInstallDirectory(InstallerError):
    """Raised when no directory on the search path can receive the binary."""

    code = "F2BS-NO-INSTALL-DIR"

    def __init__(self, message: str = "No writable directory found on PATH for install") -> None:
        super().__init__(message)


class ReleaseError(InstallerError):
    """Release metadata could not be fetched or did not list the asset."""

    code = "F2BS-RELEASE"


class ArchiveError(InstallerError):
    """Download or extraction of the release archive failed."""

    code = "F2BS-ARCHIVE"


class MissingBinaryError(ArchiveError):
    code = "F2BS-MISSING-BINARY"


class ChecksumMismatch(ArchiveError):
    code = "F2BS-CHECKSUM"

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Archive checksum mismatch (expected={expected} actual={actual})")
        self.expected = expected
        self.actual = actual


class PrivilegeError(InstallerError):
    """Copying into the destination failed, with or without sudo."""

    code = "F2BS-PRIVILEGE"

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


class ConfigValidationError(InstallerError):
    """Raised when the merged installer config fails schema validation."""

    code = "F2BS-CONFIG"

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
