"""
Error taxonomy for the POS skill commands.

Every error carries the process exit code the CLI should return, so entry
points can map failures without inspecting messages.
"""

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_CONFIG = 2
EXIT_WRITE_NOT_CONFIRMED = 3
EXIT_TRANSPORT = 4
EXIT_REMOTE_API = 5
EXIT_INTERRUPTED = 130


class PosSkillError(Exception):
    """Base class for all failures raised by the skill commands."""

    exit_code = EXIT_USAGE


class UsageError(PosSkillError):
    """Bad command line: no command, unknown command or a missing argument."""

    exit_code = EXIT_USAGE


class ConfigurationError(PosSkillError):
    """A required environment variable is unset, empty or malformed."""

    exit_code = EXIT_CONFIG

    def __init__(self, variable: str, detail: str = "is required but not set"):
        self.variable = variable
        super().__init__(f"{variable} {detail}")


class WriteNotConfirmedError(PosSkillError):
    """A mutating command ran without CONFIRM_WRITE=YES."""

    exit_code = EXIT_WRITE_NOT_CONFIRMED


class TransportError(PosSkillError):
    """The remote API could not be reached (DNS, connection, timeout)."""

    exit_code = EXIT_TRANSPORT

    def __init__(self, method: str, path: str, reason: str):
        self.method = method
        self.path = path
        self.reason = reason
        super().__init__(f"{method} {path} failed: {reason}")


class RemoteAPIError(PosSkillError):
    """The remote API answered with a non-2xx status."""

    exit_code = EXIT_REMOTE_API

    def __init__(self, method: str, path: str, status_code: int, body: bytes = b""):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body
        super().__init__(f"{method} {path} returned HTTP {status_code}")
