"""
Parser for the /proc/[pid]/stat record.

The record is a single line of space separated fields whose order is fixed
by the kernel. The second field is the command name wrapped in parentheses.
The name is copied from the executable and may itself contain spaces and
parentheses, so the line cannot simply be split on whitespace: the name is
bracketed by the first '(' and the last ')' and only the text around it is
split.
"""

import re

from procsnap.errors import MalformedRecordError
from procsnap.models import ProcessStat

# Integer ranges per scanf conversion in proc(5), for a 64-bit kernel.
I32 = (-(2**31), 2**31 - 1)  # %d
U32 = (0, 2**32 - 1)  # %u
I64 = (-(2**63), 2**63 - 1)  # %ld
U64 = (0, 2**64 - 1)  # %lu, %llu

# Fields that follow the command name, in kernel order. 'state' is a single
# character and is handled separately; everything else is an integer.
TAIL_FIELDS: tuple[tuple[str, tuple[int, int]], ...] = (
    ("ppid", I32),
    ("pgrp", I32),
    ("session", I32),
    ("tty_nr", I32),
    ("tpgid", I32),
    ("flags", U32),
    ("minflt", U64),
    ("cminflt", U64),
    ("majflt", U64),
    ("cmajflt", U64),
    ("utime", U64),
    ("stime", U64),
    ("cutime", I64),
    ("cstime", I64),
    ("priority", I64),
    ("nice", I64),
    ("num_threads", I64),
    ("itrealvalue", I64),
    ("starttime", U64),
    ("vsize", U64),
    ("rss", I64),
    ("rsslim", U64),
    ("startcode", U64),
    ("endcode", U64),
    ("startstack", U64),
    ("kstkesp", U64),
    ("kstkeip", U64),
    ("signal", U64),
    ("blocked", U64),
    ("sigignore", U64),
    ("sigcatch", U64),
    ("wchan", U64),
    ("nswap", U64),
    ("cnswap", U64),
    ("exit_signal", I32),
    ("processor", I32),
    ("rt_priority", U32),
    ("policy", U32),
    ("delayacct_blkio_ticks", U64),
    ("guest_time", U64),
    ("cguest_time", I64),
    ("start_data", U64),
    ("end_data", U64),
    ("start_brk", U64),
    ("arg_start", U64),
    ("arg_end", U64),
    ("env_start", U64),
    ("env_end", U64),
    ("exit_code", I32),
)

# state + the integer fields above
FIELD_COUNT_AFTER_COMM = 1 + len(TAIL_FIELDS)

_INTEGER = re.compile(r"-?[0-9]+")


def _parse_int(text: str, name: str, bounds: tuple[int, int]) -> int:
    if not _INTEGER.fullmatch(text):
        raise MalformedRecordError(f"expected an integer, got {text!r}", field=name)
    value = int(text)
    low, high = bounds
    if not low <= value <= high:
        raise MalformedRecordError(f"{value} out of range [{low}, {high}]", field=name)
    return value


def parse_stat(line: str) -> ProcessStat:
    """
    Parse one /proc/[pid]/stat line into a ProcessStat.

    Args:
        line: Record content. A single trailing newline is ignored.

    Returns:
        The fully decoded record.

    Raises:
        MalformedRecordError: If any field is missing, extra, non-numeric
            where a number is expected, or outside its integer width.
    """
    line = line.rstrip("\n")

    open_paren = line.find("(")
    close_paren = line.rfind(")")
    if open_paren == -1 or close_paren == -1 or close_paren < open_paren:
        raise MalformedRecordError("command name is not parenthesised", field="comm")

    head = line[:open_paren]
    comm = line[open_paren + 1 : close_paren]
    tail = line[close_paren + 1 :]

    if not head.endswith(" "):
        raise MalformedRecordError("no separator before command name", field="pid")
    pid = _parse_int(head[:-1], "pid", I32)

    if not tail.startswith(" "):
        raise MalformedRecordError("no separator after command name", field="state")
    tokens = tail[1:].split(" ")
    if len(tokens) != FIELD_COUNT_AFTER_COMM:
        raise MalformedRecordError(
            f"expected {FIELD_COUNT_AFTER_COMM} fields after the command name, "
            f"got {len(tokens)}"
        )

    state = tokens[0]
    if len(state) != 1:
        raise MalformedRecordError(f"expected a single character, got {state!r}", field="state")

    values = {
        name: _parse_int(token, name, bounds)
        for (name, bounds), token in zip(TAIL_FIELDS, tokens[1:])
    }
    return ProcessStat(pid=pid, comm=comm, state=state, **values)
