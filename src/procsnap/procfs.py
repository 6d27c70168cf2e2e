"""Process table scanning on top of the /proc filesystem."""

import logging
import os
from collections.abc import Iterable, Iterator

import psutil

from procsnap.errors import (
    MalformedRecordError,
    ProcessNotFoundError,
    RootUnreadableError,
)
from procsnap.models import ProcessMetrics, ProcessStat
from procsnap.stat import parse_stat

logger = logging.getLogger(__name__)

DEFAULT_PROCFS_PATH = "/proc"

PathLike = str | os.PathLike[str]


def procfs_root(root: PathLike | None = None) -> str:
    """
    Resolve the process table root.

    Falls back to psutil.PROCFS_PATH so that callers who point psutil at a
    different procfs mount see the same process table here.
    """
    if root is None:
        return getattr(psutil, "PROCFS_PATH", DEFAULT_PROCFS_PATH)
    return os.fspath(root)


def _as_pid(name: str) -> int | None:
    # str.isdigit() also accepts non-ASCII digits
    if not (name.isascii() and name.isdigit()):
        return None
    pid = int(name)
    return pid if pid > 0 else None


def list_process_ids(root: PathLike | None = None) -> list[int]:
    """
    List the ids of all processes currently visible under root.

    Entries whose names are not positive integers (self, meminfo, sys, ...)
    are skipped.

    Args:
        root: Process table mount point. Defaults to psutil.PROCFS_PATH.

    Returns:
        Process ids in directory order.

    Raises:
        RootUnreadableError: If root cannot be listed.
    """
    root = procfs_root(root)
    try:
        with os.scandir(root) as entries:
            names = [entry.name for entry in entries]
    except OSError as e:
        raise RootUnreadableError(root) from e

    return [pid for pid in map(_as_pid, names) if pid is not None]


def _read_bytes(path: str, pid: int) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        # ENOENT, ESRCH and EACCES all mean the entry is gone or not ours
        raise ProcessNotFoundError(pid, path) from e


def read_stat(pid: int, root: PathLike | None = None) -> ProcessStat:
    """
    Read and decode /proc/[pid]/stat.

    Raises:
        ProcessNotFoundError: If the file cannot be read.
        MalformedRecordError: If its content does not decode, or names a
            different pid.
    """
    path = os.path.join(procfs_root(root), str(pid), "stat")
    raw = _read_bytes(path, pid)
    try:
        stat = parse_stat(raw.decode("utf-8", errors="replace"))
    except MalformedRecordError as e:
        e.pid = pid
        raise
    if stat.pid != pid:
        raise MalformedRecordError(f"record belongs to pid {stat.pid}", field="pid", pid=pid)
    return stat


def read_cmdline(pid: int, root: PathLike | None = None) -> str:
    """Read /proc/[pid]/cmdline as text, NUL separators included."""
    path = os.path.join(procfs_root(root), str(pid), "cmdline")
    return _read_bytes(path, pid).decode("utf-8", errors="replace")


def decode_process(pid: int, root: PathLike | None = None) -> ProcessMetrics:
    """
    Build the metrics record of a single process.

    Args:
        pid: Process id, usually taken from list_process_ids().
        root: Process table mount point. Defaults to psutil.PROCFS_PATH.

    Returns:
        ProcessMetrics with cpu_percent left unset.

    Raises:
        ProcessNotFoundError: The process exited before its files were read.
        MalformedRecordError: The stat record does not match the layout.
    """
    root = procfs_root(root)
    command = read_cmdline(pid, root)
    stat = read_stat(pid, root)
    return ProcessMetrics(
        pid=pid,
        command=command,
        start_time=stat.starttime,
        rss=stat.rss,
        vsz=stat.vsize,
        cpu_time=stat.cpu_time,
    )


def _decode_each(root: str, candidates: Iterable[int]) -> Iterator[ProcessMetrics]:
    yielded = vanished = malformed = 0
    for pid in candidates:
        try:
            metrics = decode_process(pid, root)
        except ProcessNotFoundError as e:
            vanished += 1
            logger.debug("Skipping pid %d: %s", pid, e)
            continue
        except MalformedRecordError as e:
            malformed += 1
            logger.warning("Skipping pid %d with malformed stat record: %s", pid, e)
            continue
        yielded += 1
        yield metrics

    logger.debug(
        "Scanned %s: %d processes, %d vanished, %d malformed",
        root,
        yielded,
        vanished,
        malformed,
    )


def pids(root: PathLike | None = None) -> Iterator[int]:
    """Iterate over the ids of all visible processes."""
    return iter(list_process_ids(root))


def processes(root: PathLike | None = None) -> Iterator[ProcessMetrics]:
    """
    Lazily produce a metrics snapshot of all visible processes.

    The process table is listed immediately, so an unreadable root raises
    here rather than on first iteration. Each process is then read only when
    the caller pulls it. Processes that exit mid-scan, or whose stat record
    is malformed, are left out.

    Raises:
        RootUnreadableError: If root cannot be listed.
    """
    root = procfs_root(root)
    return _decode_each(root, list_process_ids(root))
