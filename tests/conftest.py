"""Shared fixtures: fake process tables laid out like /proc."""

from pathlib import Path

import pytest

from procsnap.stat import TAIL_FIELDS

# Field values for a sleeping process on a 64-bit kernel.
DEFAULT_STAT = {
    "state": "S",
    "ppid": 0,
    "pgrp": 1,
    "session": 1,
    "tty_nr": 0,
    "tpgid": -1,
    "flags": 4194560,
    "minflt": 51872,
    "cminflt": 1385390,
    "majflt": 92,
    "cmajflt": 1113,
    "utime": 219,
    "stime": 388,
    "cutime": 5243,
    "cstime": 2196,
    "priority": 20,
    "nice": 0,
    "num_threads": 1,
    "itrealvalue": 0,
    "starttime": 4,
    "vsize": 35135488,
    "rss": 1229,
    "rsslim": 18446744073709551615,
    "startcode": 1,
    "endcode": 1,
    "startstack": 0,
    "kstkesp": 0,
    "kstkeip": 0,
    "signal": 0,
    "blocked": 671173123,
    "sigignore": 4096,
    "sigcatch": 1260,
    "wchan": 1,
    "nswap": 0,
    "cnswap": 0,
    "exit_signal": 17,
    "processor": 3,
    "rt_priority": 0,
    "policy": 0,
    "delayacct_blkio_ticks": 77,
    "guest_time": 0,
    "cguest_time": 0,
    "start_data": 0,
    "end_data": 0,
    "start_brk": 0,
    "arg_start": 0,
    "arg_end": 0,
    "env_start": 0,
    "env_end": 0,
    "exit_code": 0,
}

# pid -> (comm, cmdline, overrides)
FIXTURE_PROCESSES = {
    1: ("init", "/sbin/init", {"starttime": 4, "rss": 1229, "vsize": 35135488}),
    16018: (
        "bash",
        "-bash",
        {"ppid": 16017, "utime": 12, "stime": 7, "starttime": 15838213, "rss": 1489},
    ),
    24064: (
        "sshd",
        "sshd: admin [priv]",
        {"ppid": 1, "utime": 3, "stime": 2, "starttime": 24123421, "vsize": 100302848},
    ),
    24126: ("kworker/0:1", "", {"ppid": 2, "flags": 69238880, "vsize": 0, "rss": 0}),
}

FIXTURE_PIDS = sorted(FIXTURE_PROCESSES)


def build_stat_line(pid: int, comm: str, **overrides) -> str:
    """Render a stat record the way the kernel prints it."""
    values = {**DEFAULT_STAT, **overrides}
    tail = [str(values["state"])] + [str(values[name]) for name, _ in TAIL_FIELDS]
    return f"{pid} ({comm}) " + " ".join(tail) + "\n"


def write_process(root: Path, pid: int, comm: str, cmdline: str = "", **overrides) -> Path:
    """Create root/<pid>/{stat,cmdline} and return the process directory."""
    proc_dir = root / str(pid)
    proc_dir.mkdir()
    (proc_dir / "stat").write_text(build_stat_line(pid, comm, **overrides))
    (proc_dir / "cmdline").write_text(cmdline)
    return proc_dir


@pytest.fixture
def stat_line():
    """Factory for stat record lines."""
    return build_stat_line


@pytest.fixture
def empty_root(tmp_path: Path) -> Path:
    """An existing but empty process table."""
    root = tmp_path / "proc"
    root.mkdir()
    return root


@pytest.fixture
def add_process(empty_root: Path):
    """Factory that adds a process directory to empty_root."""

    def _add(pid: int, comm: str = "test", cmdline: str = "", **overrides) -> Path:
        return write_process(empty_root, pid, comm, cmdline, **overrides)

    return _add


@pytest.fixture
def proc_root(empty_root: Path) -> Path:
    """
    Process table with four processes and the usual non-process entries.

    pids: 1, 16018, 24064, 24126
    """
    for pid, (comm, cmdline, overrides) in FIXTURE_PROCESSES.items():
        write_process(empty_root, pid, comm, cmdline, **overrides)

    (empty_root / "self").mkdir()
    (empty_root / "sys").mkdir()
    (empty_root / "meminfo").write_text("MemTotal:       16318412 kB\n")
    (empty_root / "stat").write_text("cpu  10132153 290696 3084719 46828483 16683 0 25195 0 0 0\n")
    return empty_root
