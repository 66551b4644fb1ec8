"""Binary layout of PAR 1.0 file headers and file entries."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field

from parity2.md5 import MD5Hash

__all__ = [
    "PAR1_MAGIC",
    "HEADER_SIZE",
    "ENTRY_FIXED_SIZE",
    "FileEntryStatus",
    "Par1FileHeader",
    "Par1FileEntry",
]

PAR1_MAGIC = b"PAR\0\0\0\0\0"

_HEADER_STRUCT = struct.Struct("<8sII16s16s6Q")
_ENTRY_STRUCT = struct.Struct("<3Q16s16s")

HEADER_SIZE = _HEADER_STRUCT.size
ENTRY_FIXED_SIZE = _ENTRY_STRUCT.size


class FileEntryStatus(enum.IntFlag):
    """Status bits of a PAR 1.0 file entry."""

    INPARITYVOLUME = 1
    CHECKED = 2


def _zero_hash() -> MD5Hash:
    return MD5Hash(bytes(16))


@dataclass
class Par1FileHeader:
    """The fixed header at the start of every PAR 1.0 file."""

    magic: bytes = PAR1_MAGIC
    fileversion: int = 0
    programversion: int = 0
    controlhash: MD5Hash = field(default_factory=_zero_hash)
    sethash: MD5Hash = field(default_factory=_zero_hash)
    volumenumber: int = 0
    numberoffiles: int = 0
    filelistoffset: int = 0
    filelistsize: int = 0
    dataoffset: int = 0
    datasize: int = 0

    def pack(self) -> bytes:
        """Return the little-endian wire form of the header."""
        return _HEADER_STRUCT.pack(
            self.magic,
            self.fileversion,
            self.programversion,
            bytes(self.controlhash),
            bytes(self.sethash),
            self.volumenumber,
            self.numberoffiles,
            self.filelistoffset,
            self.filelistsize,
            self.dataoffset,
            self.datasize,
        )

    @classmethod
    def unpack(cls, data) -> "Par1FileHeader":
        """Parse a header from the start of ``data``."""
        if len(data) < HEADER_SIZE:
            raise ValueError(
                f"a PAR1 header needs {HEADER_SIZE} bytes, got {len(data)}"
            )
        (magic, fileversion, programversion, controlhash, sethash,
         volumenumber, numberoffiles, filelistoffset, filelistsize,
         dataoffset, datasize) = _HEADER_STRUCT.unpack_from(data)
        return cls(
            magic=magic,
            fileversion=fileversion,
            programversion=programversion,
            controlhash=MD5Hash(controlhash),
            sethash=MD5Hash(sethash),
            volumenumber=volumenumber,
            numberoffiles=numberoffiles,
            filelistoffset=filelistoffset,
            filelistsize=filelistsize,
            dataoffset=dataoffset,
            datasize=datasize,
        )

    def has_valid_magic(self) -> bool:
        """Whether the header carries the PAR 1.0 magic value."""
        return self.magic == PAR1_MAGIC


@dataclass
class Par1FileEntry:
    """One entry of the file list in a PAR 1.0 file."""

    status: FileEntryStatus = FileEntryStatus(0)
    filesize: int = 0
    hashfull: MD5Hash = field(default_factory=_zero_hash)
    hash16k: MD5Hash = field(default_factory=_zero_hash)
    name: str = ""

    @property
    def entrysize(self) -> int:
        """Size of the packed entry in bytes, name included."""
        return ENTRY_FIXED_SIZE + len(self.name.encode("utf-16-le"))

    def pack(self) -> bytes:
        """Return the little-endian wire form of the entry."""
        return _ENTRY_STRUCT.pack(
            self.entrysize,
            int(self.status),
            self.filesize,
            bytes(self.hashfull),
            bytes(self.hash16k),
        ) + self.name.encode("utf-16-le")

    @classmethod
    def unpack(cls, data) -> "Par1FileEntry":
        """Parse an entry from the start of ``data``."""
        if len(data) < ENTRY_FIXED_SIZE:
            raise ValueError(
                f"a PAR1 file entry needs at least {ENTRY_FIXED_SIZE} bytes, "
                f"got {len(data)}"
            )
        entrysize, status, filesize, hashfull, hash16k = _ENTRY_STRUCT.unpack_from(data)
        if entrysize < ENTRY_FIXED_SIZE or (entrysize - ENTRY_FIXED_SIZE) % 2:
            raise ValueError(f"invalid PAR1 file entry size {entrysize}")
        if entrysize > len(data):
            raise ValueError(
                f"PAR1 file entry claims {entrysize} bytes, only {len(data)} given"
            )
        name = bytes(data[ENTRY_FIXED_SIZE:entrysize]).decode("utf-16-le")
        return cls(
            status=FileEntryStatus(status),
            filesize=filesize,
            hashfull=MD5Hash(hashfull),
            hash16k=MD5Hash(hash16k),
            name=name,
        )