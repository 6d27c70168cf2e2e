"""procsnap - point-in-time process metrics from /proc."""

import logging

from procsnap.errors import (
    MalformedRecordError,
    ProcessError,
    ProcessNotFoundError,
    RootUnreadableError,
)
from procsnap.models import ProcessMetrics, ProcessStat
from procsnap.procfs import (
    DEFAULT_PROCFS_PATH,
    decode_process,
    list_process_ids,
    pids,
    processes,
    read_cmdline,
    read_stat,
)
from procsnap.stat import parse_stat

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_PROCFS_PATH",
    "MalformedRecordError",
    "ProcessError",
    "ProcessMetrics",
    "ProcessNotFoundError",
    "ProcessStat",
    "RootUnreadableError",
    "decode_process",
    "list_process_ids",
    "parse_stat",
    "pids",
    "processes",
    "read_cmdline",
    "read_stat",
]
