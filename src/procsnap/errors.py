"""Exceptions raised while scanning the process table."""


class ProcessError(Exception):
    """Base class for all procsnap errors."""


class RootUnreadableError(ProcessError):
    """The process table root itself could not be listed."""

    def __init__(self, root: str) -> None:
        super().__init__(f"cannot list process table at {root}")
        self.root = root


class ProcessNotFoundError(ProcessError):
    """The process went away between listing and reading its files."""

    def __init__(self, pid: int, path: str | None = None) -> None:
        message = f"process {pid} not found"
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)
        self.pid = pid
        self.path = path


class MalformedRecordError(ProcessError, ValueError):
    """
    A stat record did not match the expected layout.

    Unlike ProcessNotFoundError this is not an expected race: it points at
    a kernel format change or a corrupted read.
    """

    def __init__(
        self,
        reason: str,
        field: str | None = None,
        pid: int | None = None,
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.field = field
        self.pid = pid

    def __str__(self) -> str:
        parts = []
        if self.pid is not None:
            parts.append(f"pid {self.pid}")
        if self.field is not None:
            parts.append(f"field {self.field}")
        prefix = ", ".join(parts)
        return f"{prefix}: {self.reason}" if prefix else self.reason
