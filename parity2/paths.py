"""Path handling helpers: canonical names, splitting, sizes and wildcard search."""

from __future__ import annotations

import heapq
import os
import stat

__all__ = [
    "get_canonical_pathname",
    "split_filename",
    "split_relative_filename",
    "file_exists",
    "get_file_size",
    "find_files",
    "create_parent_directory",
    "FileSizeCache",
]

_DIRECTORY_MODE = 0o755


def _last_separator(pathname: str) -> int:
    """Index of the last '/', or failing that the last '\\', or -1."""
    where = pathname.rfind("/")
    if where == -1:
        where = pathname.rfind("\\")
    return where


def get_canonical_pathname(filename: str) -> str:
    """Return an absolute form of ``filename``.

    Relative names are joined to the current directory and every "./"
    and "../" component that is followed by a separator is collapsed.
    Names that are empty or already absolute are returned unchanged.
    """
    if not filename or filename.startswith("/"):
        return filename

    try:
        curdir = os.getcwd()
    except OSError:
        return filename

    if not curdir.endswith("/"):
        curdir += "/"
    work = curdir + filename

    parts = work.split("/")
    # parts[0] is the empty root component; only components followed by a
    # separator (all but the last) are candidates for collapsing.
    output = [parts[0]]
    for part in parts[1:-1]:
        if part == ".":
            continue
        if part == "..":
            if len(output) > 1:
                output.pop()
            continue
        output.append(part)
    output.append(parts[-1])
    return "/".join(output)


def split_filename(filename: str) -> tuple[str, str]:
    """Split ``filename`` into its directory (with trailing separator) and name."""
    where = _last_separator(filename)
    if where != -1:
        return filename[:where + 1], filename[where + 1:]
    return "." + os.sep, filename


def split_relative_filename(filename: str, basepath: str) -> str:
    """Return ``filename`` with the first ``len(basepath)`` characters removed."""
    return filename[len(basepath):]


def _stat(filename: str):
    try:
        return os.stat(filename)
    except (OSError, ValueError):
        return None


def file_exists(filename: str) -> bool:
    """Whether ``filename`` names an existing regular file."""
    st = _stat(filename)
    return st is not None and stat.S_ISREG(st.st_mode)


def get_file_size(filename: str) -> int:
    """Size of the regular file ``filename``, or 0 if there is none."""
    st = _stat(filename)
    if st is not None and stat.S_ISREG(st.st_mode):
        return st.st_size
    return 0


def _matches_multiple(name: str, wildcard: str, front: str, back: str) -> bool:
    return (
        len(name) >= len(wildcard)
        and name.startswith(front)
        and name.endswith(back)
    )


def _matches_single(name: str, wildcard: str) -> bool:
    return len(name) == len(wildcard) and all(
        w == "?" or w == n for w, n in zip(wildcard, name)
    )


def _collect(matches: list[str], fullname: str, recursive: bool) -> list[str]:
    """Add ``fullname`` to ``matches`` if it is a file, or its contents if a directory."""
    st = _stat(fullname)
    if st is None:
        return matches
    if stat.S_ISDIR(st.st_mode) and recursive:
        return list(heapq.merge(matches, find_files(fullname, "*", True)))
    if stat.S_ISREG(st.st_mode):
        matches.append(fullname)
    return matches


def find_files(path: str, wildcard: str, recursive: bool = False) -> list[str]:
    """Return the files in ``path`` whose names match ``wildcard``.

    The wildcard holds either one '*' (with a fixed prefix and suffix) or
    any number of '?' characters, each matching a single character.
    Matching directories are searched in full when ``recursive`` is set.
    """
    if not path.endswith("/"):
        path += "/"

    matches: list[str] = []

    where = wildcard.find("*")
    if where == -1:
        where = wildcard.find("?")

    if where == -1:
        return _collect(matches, path + wildcard, recursive)

    front = wildcard[:where]
    multiple = wildcard[where] == "*"
    back = wildcard[where + 1:]

    try:
        names = [entry.name for entry in os.scandir(path)]
    except OSError:
        return matches

    for name in names:
        if multiple:
            matched = _matches_multiple(name, wildcard, front, back)
        else:
            matched = _matches_single(name, wildcard)
        if matched:
            matches = _collect(matches, path + name, recursive)

    return matches


def create_parent_directory(pathname: str) -> None:
    """Make sure the directory that holds ``pathname`` exists.

    Missing directories are created from the top down. An existing entry
    of any type is accepted as it is. Raises OSError when a directory
    cannot be created.
    """
    where = _last_separator(pathname)
    if where == -1:
        return
    path = pathname[:where]
    if not path or _stat(path) is not None:
        return

    create_parent_directory(path)

    try:
        os.mkdir(path, _DIRECTORY_MODE)
    except OSError as exc:
        raise OSError(
            exc.errno,
            f"Could not create the {path} directory: {exc.strerror}",
            path,
        ) from exc


class FileSizeCache:
    """Remembers file sizes so each file is looked up on disk only once."""

    def __init__(self):
        self._cache: dict[str, int] = {}

    def get(self, filename: str) -> int:
        """Size of ``filename``, from the cache when already known."""
        try:
            return self._cache[filename]
        except KeyError:
            size = get_file_size(filename)
            self._cache[filename] = size
            return size