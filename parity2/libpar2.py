"""Shared enumerations and recovery file planning."""

from __future__ import annotations

import enum

__all__ = [
    "Scheme",
    "NoiseLevel",
    "Result",
    "RecoveryFileCountError",
    "compute_recovery_file_count",
]


class Scheme(enum.IntEnum):
    """How recovery blocks are distributed over recovery files."""

    UNKNOWN = 0
    VARIABLE = 1  # each file has twice as many blocks as the previous
    LIMITED = 2  # limit the size of each file
    UNIFORM = 3  # all files the same size


class NoiseLevel(enum.IntEnum):
    """How much progress information to report."""

    UNKNOWN = 0
    SILENT = 1
    QUIET = 2
    NORMAL = 3
    NOISY = 4
    DEBUG = 5


class Result(enum.IntEnum):
    """Outcome codes, also used as process exit statuses."""

    SUCCESS = 0
    REPAIR_POSSIBLE = 1
    REPAIR_NOT_POSSIBLE = 2
    INVALID_COMMAND_LINE_ARGUMENTS = 3
    INSUFFICIENT_CRITICAL_DATA = 4
    REPAIR_FAILED = 5
    FILE_IO_ERROR = 6
    LOGIC_ERROR = 7
    MEMORY_ERROR = 8


class RecoveryFileCountError(ValueError):
    """The number of recovery files cannot be determined."""


def compute_recovery_file_count(scheme, recoveryblockcount, largestfilesize,
                                blocksize, recoveryfilecount=0):
    """Return how many recovery files to create.

    ``recoveryfilecount`` is a requested count, 0 meaning "choose one";
    it is ignored by the limited scheme.
    """
    if recoveryblockcount == 0:
        return 0

    scheme = Scheme(scheme)
    if scheme is Scheme.UNKNOWN:
        raise RecoveryFileCountError("Scheme unspecified (create, verify, or repair).")

    if scheme in (Scheme.VARIABLE, Scheme.UNIFORM):
        if recoveryfilecount == 0:
            # Roughly log2 of the block count.
            recoveryfilecount = recoveryblockcount.bit_length()
        if recoveryfilecount > recoveryblockcount:
            raise RecoveryFileCountError("Too many recovery files specified.")
        return recoveryfilecount

    # Limited: no file holds more blocks than the largest source file needs.
    if blocksize <= 0:
        raise RecoveryFileCountError("Block size must be positive.")
    largest = (largestfilesize + blocksize - 1) // blocksize
    if largest == 0:
        raise RecoveryFileCountError("Largest file size must be positive.")
    whole = recoveryblockcount // largest
    whole = whole - 1 if whole >= 1 else 0
    extra = recoveryblockcount - whole * largest
    return whole + extra.bit_length()