"""Files read from and written to disk, and a registry of open files."""

from __future__ import annotations

import os

from parity2.paths import create_parent_directory, file_exists, get_file_size

__all__ = [
    "MAX_LENGTH",
    "MAX_OFFSET",
    "DiskFileError",
    "DiskFile",
    "DiskFileMap",
]

# Largest single read or write, kept 8-byte aligned.
MAX_LENGTH = 0xFFFFFFFF & ~7
# Largest offset or size a file may have.
MAX_OFFSET = 0x7FFFFFFFFFFFFFFF


class DiskFileError(OSError):
    """A disk file could not be created, opened, read, written or moved."""


class DiskFile:
    """A file that data is read from or written to at arbitrary offsets."""

    def __init__(self):
        self._filename = ""
        self._filesize = 0
        self._file = None
        self._offset = 0
        self._exists = False

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def filesize(self) -> int:
        return self._filesize

    @property
    def exists(self) -> bool:
        """Whether the file is known to exist on disk."""
        return self._exists

    def is_open(self) -> bool:
        """Whether the file is currently open."""
        return self._file is not None

    def _require_open(self) -> None:
        if self._file is None:
            raise DiskFileError(f"{self._filename or 'file'} is not open")

    def _require_closed(self) -> None:
        if self._file is not None:
            raise DiskFileError(f"{self._filename} is still open")

    def create(self, filename, filesize):
        """Create a new file of ``filesize`` bytes and keep it open for writing."""
        self._require_closed()
        self._filename = filename
        self._filesize = filesize

        try:
            create_parent_directory(filename)
        except OSError as exc:
            raise DiskFileError(str(exc)) from exc

        if file_exists(filename):
            raise DiskFileError(f'Could not create "{filename}": File already exists.')

        if filesize > MAX_OFFSET:
            raise DiskFileError(f"Requested file size for {filename} is too large.")

        try:
            handle = open(filename, "w+b")
        except OSError as exc:
            raise DiskFileError(f"Could not create {filename}: {exc.strerror}") from exc

        if filesize > 0:
            try:
                handle.truncate(filesize)
                handle.seek(filesize)
            except OSError as exc:
                handle.close()
                try:
                    os.remove(filename)
                except OSError:
                    pass
                raise DiskFileError(
                    f"Could not set end of file of {filename}: {exc.strerror}"
                ) from exc

        self._file = handle
        self._offset = filesize
        self._exists = True

    def _seek(self, offset, length, verb, preposition):
        if self._offset == offset:
            return
        if offset < 0 or offset > MAX_OFFSET:
            raise DiskFileError(
                f"Could not {verb} {length} bytes {preposition} {self._filename} "
                f"at offset {offset}"
            )
        try:
            self._file.seek(offset)
        except OSError as exc:
            self._offset = None
            raise DiskFileError(
                f"Could not {verb} {length} bytes {preposition} {self._filename} "
                f"at offset {offset}: {exc.strerror}"
            ) from exc
        self._offset = offset

    def write(self, offset, data, maxlength=MAX_LENGTH):
        """Write ``data`` at ``offset``, at most ``maxlength`` bytes per call."""
        self._require_open()
        if maxlength <= 0:
            raise ValueError("maxlength must be positive")
        view = memoryview(data).cast("B")
        self._seek(offset, len(view), "write", "to")

        pos = 0
        while pos < len(view):
            chunk = view[pos:pos + maxlength]
            try:
                wrote = self._file.write(chunk)
            except OSError as exc:
                self._offset = None
                raise DiskFileError(
                    f"Could not write {len(view) - pos} bytes to {self._filename} "
                    f"at offset {offset}: {exc.strerror}"
                ) from exc
            if wrote != len(chunk):
                self._offset = None
                raise DiskFileError(
                    f"Could not write {len(view) - pos} bytes to {self._filename} "
                    f"at offset {offset}"
                )
            pos += wrote
            self._offset += wrote
            if self._filesize < self._offset:
                self._filesize = self._offset

    def open(self, filename=None, filesize=None):
        """Open an existing file for reading.

        Without ``filename`` the file's current name is used; without
        ``filesize`` the size is taken from disk.
        """
        self._require_closed()
        if filename is None:
            filename = self._filename
        if filesize is None:
            filesize = get_file_size(filename)
        self._filename = filename
        self._filesize = filesize

        if filesize > MAX_OFFSET:
            raise DiskFileError(f"File size for {filename} is too large.")

        try:
            self._file = open(filename, "rb")
        except OSError as exc:
            raise DiskFileError(
                exc.errno, f"Could not open {filename}: {exc.strerror}", filename
            ) from exc

        self._offset = 0
        self._exists = True

    def read(self, offset, length, maxlength=MAX_LENGTH) -> bytes:
        """Read exactly ``length`` bytes from ``offset``."""
        self._require_open()
        if maxlength <= 0:
            raise ValueError("maxlength must be positive")
        self._seek(offset, length, "read", "from")

        parts = []
        remaining = length
        while remaining > 0:
            want = min(remaining, maxlength)
            try:
                got = self._file.read(want)
            except OSError as exc:
                self._offset = None
                raise DiskFileError(
                    f"Could not read {remaining} bytes from {self._filename} "
                    f"at offset {offset}: {exc.strerror}"
                ) from exc
            if len(got) != want:
                self._offset = None
                raise DiskFileError(
                    f"Could not read {remaining} bytes from {self._filename} "
                    f"at offset {offset}"
                )
            parts.append(got)
            self._offset += want
            remaining -= want
        return b"".join(parts)

    def close(self):
        """Close the file if it is open."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def _free_name(self) -> str:
        index = 1
        while os.path.lexists(f"{self._filename}.{index}"):
            index += 1
        return f"{self._filename}.{index}"

    def rename(self, filename=None):
        """Rename the closed file, by default to the first free "name.N"."""
        self._require_closed()
        if filename is None:
            filename = self._free_name()
        try:
            os.rename(self._filename, filename)
        except OSError as exc:
            raise DiskFileError(
                exc.errno,
                f"{self._filename} cannot be renamed to {filename}",
                self._filename,
            ) from exc
        self._filename = filename

    def delete(self):
        """Delete the closed file from disk."""
        self._require_closed()
        if not self._filename:
            raise DiskFileError("Cannot delete a file without a name")
        try:
            os.unlink(self._filename)
        except OSError as exc:
            raise DiskFileError(
                exc.errno, f"Cannot delete {self._filename}", self._filename
            ) from exc
        self._exists = False

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
        return False

    def __repr__(self):
        state = "open" if self.is_open() else "closed"
        return f"DiskFile({self._filename!r}, {self._filesize}, {state})"


class DiskFileMap:
    """Tracks which disk file object belongs to each file name."""

    def __init__(self):
        self._files: dict[str, DiskFile] = {}

    @staticmethod
    def _name_of(filename) -> str:
        if not filename:
            raise ValueError("a disk file needs a name")
        return filename

    def insert(self, diskfile) -> bool:
        """Register ``diskfile``; False if its name is already taken."""
        name = self._name_of(diskfile.filename)
        if name in self._files:
            return False
        self._files[name] = diskfile
        return True

    def remove(self, diskfile):
        """Forget the entry with the name of ``diskfile``."""
        self._files.pop(self._name_of(diskfile.filename), None)

    def find(self, filename):
        """The disk file registered under ``filename``, or None."""
        return self._files.get(self._name_of(filename))

    def __len__(self):
        return len(self._files)

    def __contains__(self, filename):
        return filename in self._files

    def __iter__(self):
        return iter(self._files.values())