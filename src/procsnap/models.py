"""Data models for procsnap."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ProcessMetrics:
    """Immutable point-in-time metrics of one process."""

    pid: int
    command: str  # raw cmdline, NUL separators kept
    start_time: int  # Ticks since boot
    rss: int  # Pages
    vsz: int  # Bytes
    cpu_time: int  # utime + stime, ticks
    cpu_percent: float | None = None


@dataclass(slots=True, frozen=True)
class ProcessStat:
    """
    Decoded fields of /proc/[pid]/stat, in kernel order.

    See proc(5). Counters are kept exactly as the kernel reports them:
    times in clock ticks, rss in pages, vsize in bytes.
    """

    pid: int
    comm: str
    state: str
    ppid: int
    pgrp: int
    session: int
    tty_nr: int
    tpgid: int
    flags: int
    minflt: int
    cminflt: int
    majflt: int
    cmajflt: int
    utime: int
    stime: int
    cutime: int
    cstime: int
    priority: int
    nice: int
    num_threads: int
    itrealvalue: int
    starttime: int
    vsize: int
    rss: int
    rsslim: int
    startcode: int
    endcode: int
    startstack: int
    kstkesp: int
    kstkeip: int
    signal: int
    blocked: int
    sigignore: int
    sigcatch: int
    wchan: int
    nswap: int
    cnswap: int
    exit_signal: int
    processor: int
    rt_priority: int
    policy: int
    delayacct_blkio_ticks: int
    guest_time: int
    cguest_time: int
    start_data: int
    end_data: int
    start_brk: int
    arg_start: int
    arg_end: int
    env_start: int
    env_end: int
    exit_code: int

    @property
    def cpu_time(self) -> int:
        """User plus kernel mode ticks."""
        return self.utime + self.stime
