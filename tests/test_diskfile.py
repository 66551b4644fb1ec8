import os
import random

import pytest

from parity2.diskfile import MAX_OFFSET, DiskFile, DiskFileError, DiskFileMap

INPUT1 = b"diskfile_test test1 input1.txt"
INPUT2 = b"diskfile_test test3 input2.txt is longer"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _make(path, contents):
    with open(path, "wb") as handle:
        handle.write(contents)


def test_open_read_close_reopen(workdir):
    _make("input1.txt", INPUT1)
    diskfile = DiskFile()
    assert not diskfile.is_open()
    assert not diskfile.exists

    diskfile.open("input1.txt")
    assert diskfile.is_open()
    assert diskfile.exists
    assert diskfile.filename == "input1.txt"
    assert diskfile.filesize == len(INPUT1)

    assert diskfile.read(0, len(INPUT1)) == INPUT1

    rng = random.Random(345087209)
    for _ in range(100):
        offset = rng.randrange(len(INPUT1) - 1)
        length = 1 + rng.randrange(len(INPUT1) - offset - 1) if len(INPUT1) - offset - 1 > 0 else 1
        assert diskfile.read(offset, length) == INPUT1[offset:offset + length]

    assert diskfile.is_open()
    diskfile.close()
    assert not diskfile.is_open()

    diskfile.open()
    assert diskfile.is_open()
    diskfile.close()
    assert not diskfile.is_open()


def test_create_write_rename_delete(workdir):
    diskfile = DiskFile()
    assert not diskfile.is_open()
    assert not diskfile.exists

    diskfile.create("input2.txt", len(INPUT2))
    assert diskfile.is_open()
    assert diskfile.exists
    assert diskfile.filesize == len(INPUT2)
    assert diskfile.filename == "input2.txt"

    diskfile.write(0, INPUT2)
    diskfile.close()
    assert not diskfile.is_open()

    diskfile.rename("input3.txt")
    assert not os.path.exists("input2.txt")
    assert diskfile.filename == "input3.txt"
    assert diskfile.exists
    assert (workdir / "input3.txt").read_bytes() == INPUT2

    diskfile.delete()
    assert not diskfile.exists
    assert not os.path.exists("input3.txt")


def test_random_order_writes_then_read(workdir):
    rng = random.Random(23461119)
    blocksize = 1
    while blocksize < len(INPUT2):
        with DiskFile() as diskfile:
            diskfile.create("input2.txt", len(INPUT2))
            blockcount = (len(INPUT2) + blocksize - 1) // blocksize
            order = list(range(blockcount))
            rng.shuffle(order)
            for block in order:
                offset = blocksize * block
                diskfile.write(offset, INPUT2[offset:offset + blocksize])

        with DiskFile() as diskfile:
            diskfile.open("input2.txt", len(INPUT2))
            assert diskfile.read(0, len(INPUT2)) == INPUT2

        os.remove("input2.txt")
        blocksize *= 2


def test_map_insert_find_remove(workdir):
    _make("input1.txt", b"diskfile_test test3 input1.txt")
    files = DiskFileMap()
    assert files.find("input1.txt") is None

    first = DiskFile()
    first.open("input1.txt")
    assert files.insert(first) is True
    assert files.find("input1.txt") is first

    second = DiskFile()
    second.open("input1.txt")
    assert files.insert(second) is False
    assert files.find("input1.txt") is first

    files.remove(first)
    assert files.find("input1.txt") is None
    first.close()
    second.close()


def test_map_rejects_empty_name():
    with pytest.raises(ValueError):
        DiskFileMap().find("")


def test_create_fails_when_file_exists(workdir):
    contents = b"diskfile_test test3 input1.txt"
    _make("input1.txt", contents)
    diskfile = DiskFile()
    with pytest.raises(DiskFileError):
        diskfile.create("input1.txt", len(contents))
    assert (workdir / "input1.txt").read_bytes() == contents
    assert not diskfile.is_open()


def test_small_maxlength_round_trip(workdir):
    contents = b"diskfile_test test6 input1.txt"
    with DiskFile() as diskfile:
        diskfile.create("input1.txt", len(contents))
        diskfile.write(0, contents, 2)

    with DiskFile() as diskfile:
        diskfile.open("input1.txt")
        assert diskfile.read(0, len(contents), 2) == contents


def test_mid_file_writes_and_reads_with_maxlength(workdir):
    contents = b"diskfile_test test6 input2.txt is longer"
    with DiskFile() as diskfile:
        diskfile.create("input2.txt", len(contents))
        midpoint = len(contents)
        diskfile.write(midpoint, contents[midpoint:], 3)
        diskfile.write(0, contents[:midpoint], 4)

    with DiskFile() as diskfile:
        diskfile.open("input2.txt")
        midpoint = len(contents) - 2
        tail = diskfile.read(midpoint, len(contents) - midpoint, 4)
        head = diskfile.read(0, midpoint, 3)
        assert head + tail == contents


def test_create_makes_parent_directories(workdir):
    with DiskFile() as diskfile:
        diskfile.create("a/b/out.bin", 4)
        assert diskfile.filename == "a/b/out.bin"
        assert diskfile.filesize == 4
        diskfile.write(0, b"abcd")

    with DiskFile() as reader:
        reader.open("a/b/out.bin")
        assert reader.filesize == 4
        assert reader.read(0, 4) == b"abcd"


def test_create_reserves_size(workdir):
    with DiskFile() as diskfile:
        diskfile.create("sized.bin", 10)
        assert diskfile.filesize == 10

    with DiskFile() as reader:
        reader.open("sized.bin")
        assert reader.filesize == 10
        assert len(reader.read(0, 10)) == 10
        with pytest.raises(DiskFileError):
            reader.read(0, 11)


def test_write_grows_filesize(workdir):
    with DiskFile() as diskfile:
        diskfile.create("grow.bin", 0)
        diskfile.write(0, b"hello")
        assert diskfile.filesize == 5


def test_read_past_end_raises(workdir):
    _make("short.bin", b"abc")
    with DiskFile() as diskfile:
        diskfile.open("short.bin")
        with pytest.raises(DiskFileError):
            diskfile.read(0, 10)
        assert diskfile.read(1, 2) == b"bc"


def test_open_missing_file_raises(workdir):
    diskfile = DiskFile()
    with pytest.raises(DiskFileError):
        diskfile.open("definitely_not_here")
    assert not diskfile.exists


def test_open_too_large_raises(workdir):
    _make("x.bin", b"x")
    with pytest.raises(DiskFileError):
        DiskFile().open("x.bin", MAX_OFFSET + 1)


def test_read_requires_open():
    with pytest.raises(DiskFileError):
        DiskFile().read(0, 1)


def test_delete_requires_closed(workdir):
    _make("keep.bin", b"k")
    diskfile = DiskFile()
    diskfile.open("keep.bin")
    with pytest.raises(DiskFileError):
        diskfile.delete()
    diskfile.close()
    assert os.path.exists("keep.bin")


def test_rename_picks_free_numbered_name(workdir):
    _make("data.bin", b"one")
    _make("data.bin.1", b"taken")
    diskfile = DiskFile()
    diskfile.open("data.bin")
    diskfile.close()
    diskfile.rename()
    assert diskfile.filename == "data.bin.2"
    assert (workdir / "data.bin.2").read_bytes() == b"one"
    assert (workdir / "data.bin.1").read_bytes() == b"taken"


def test_context_manager_closes(workdir):
    _make("ctx.bin", b"c")
    with DiskFile() as diskfile:
        diskfile.open("ctx.bin")
        assert diskfile.is_open()
    assert not diskfile.is_open()