"""Tests for File, the module-level open() and OpenOptions."""

import errno
import io
import os
import stat
import sys

import pytest

import fs_err
from fs_err import UNKNOWN_PATH, File, FsError, OpenOptions, Operation

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX only")


class TestConstructors:
    def test_open_existing(self, tmp_path):
        target = tmp_path / "data.bin"
        target.write_bytes(b"payload")
        with File.open(target) as f:
            assert f.path == str(target)
            assert f.read() == b"payload"
        assert f.closed

    def test_open_missing(self, tmp_path):
        target = tmp_path / "missing.bin"
        with pytest.raises(FileNotFoundError) as exc_info:
            File.open(target)
        err = exc_info.value
        assert isinstance(err, FsError)
        assert err.operation is Operation.OPEN_FILE
        assert str(err).startswith(f"failed to open file '{target}': ")

    def test_create_truncates(self, tmp_path):
        target = tmp_path / "data.bin"
        target.write_bytes(b"old contents")
        with File.create(target) as f:
            f.write(b"new")
        assert target.read_bytes() == b"new"

    def test_create_in_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError) as exc_info:
            File.create(tmp_path / "nope" / "data.bin")
        assert exc_info.value.operation is Operation.CREATE_FILE

    def test_create_new_refuses_existing(self, tmp_path):
        target = tmp_path / "data.bin"
        target.write_bytes(b"")
        with pytest.raises(FileExistsError) as exc_info:
            File.create_new(target)
        assert exc_info.value.operation is Operation.CREATE_FILE
        assert exc_info.value.errno == errno.EEXIST

    def test_create_new_is_readable(self, tmp_path):
        with File.create_new(tmp_path / "fresh.bin") as f:
            f.write(b"abc")
            f.seek(0)
            assert f.read() == b"abc"

    def test_from_fd_has_unknown_path(self, tmp_path):
        target = tmp_path / "data.bin"
        target.write_bytes(b"payload")
        fd = os.open(target, os.O_RDONLY)
        with File.from_fd(fd) as f:
            assert f.path == UNKNOWN_PATH
            assert f.read() == b"payload"

    def test_parts_round_trip(self, tmp_path):
        target = tmp_path / "data.bin"
        target.write_bytes(b"")
        raw = open(target, "rb")
        f = File.from_parts(raw, target)
        file, path = f.into_parts()
        assert file is raw
        assert path == target
        raw.close()

    def test_options_returns_builder(self):
        assert isinstance(File.options(), OpenOptions)


class TestIO:
    def test_lines_and_iteration(self, tmp_path):
        target = tmp_path / "lines.txt"
        target.write_bytes(b"one\ntwo\nthree\n")
        with File.open(target) as f:
            assert f.readline() == b"one\n"
            assert list(f) == [b"two\n", b"three\n"]

    def test_seek_tell_readinto(self, tmp_path):
        target = tmp_path / "data.bin"
        target.write_bytes(b"0123456789")
        with File.open(target) as f:
            f.seek(4)
            assert f.tell() == 4
            buffer = bytearray(3)
            assert f.readinto(buffer) == 3
            assert bytes(buffer) == b"456"

    def test_writelines_flush_and_sync(self, tmp_path):
        target = tmp_path / "data.bin"
        with File.create(target) as f:
            f.writelines([b"a", b"b"])
            f.flush()
            f.sync_all()
            f.sync_data()
        assert target.read_bytes() == b"ab"

    def test_set_len_and_metadata(self, tmp_path):
        target = tmp_path / "data.bin"
        with File.create(target) as f:
            f.write(b"abc")
            f.set_len(10)
            assert f.metadata().st_size == 10
            f.truncate(2)
            assert f.metadata().st_size == 2

    @posix_only
    def test_set_permissions(self, tmp_path):
        target = tmp_path / "data.bin"
        with File.create(target) as f:
            f.set_permissions(0o600)
        assert stat.S_IMODE(target.stat().st_mode) == 0o600

    @posix_only
    def test_read_at_and_write_at(self, tmp_path):
        target = tmp_path / "data.bin"
        with OpenOptions().read().write().create().open(target) as f:
            assert f.write_at(b"hello", 0) == 5
            assert f.read_at(3, 1) == b"ell"
            assert f.tell() == 0

    def test_try_clone_shares_position(self, tmp_path):
        target = tmp_path / "data.bin"
        with OpenOptions().read().write().create().open(target) as f:
            f.write(b"hello")
            f.flush()
            clone = f.try_clone()
            try:
                assert clone.path == f.path
                clone.seek(0)
                assert clone.read() == b"hello"
            finally:
                clone.close()

    def test_attribute_delegation(self, tmp_path):
        target = tmp_path / "data.bin"
        target.write_bytes(b"")
        with File.open(target) as f:
            assert f.mode == "rb"
            assert f.readable()
            assert not f.writable()
            assert f.fileno() == f.file.fileno()


class TestErrors:
    def test_read_error_names_path(self, broken_file):
        f = File.from_parts(broken_file(), "broken.bin")
        with pytest.raises(OSError) as exc_info:
            f.read()
        err = exc_info.value
        assert isinstance(err, FsError)
        assert err.errno == errno.EIO
        assert err.operation is Operation.READ
        assert str(err) == "failed to read from file 'broken.bin': [Errno 5] simulated failure"

    @pytest.mark.parametrize(
        "method, args, operation",
        [
            ("readline", (), Operation.READ),
            ("write", (b"x",), Operation.WRITE),
            ("seek", (0,), Operation.SEEK),
            ("tell", (), Operation.SEEK),
            ("flush", (), Operation.FLUSH),
            ("truncate", (0,), Operation.TRUNCATE),
            ("set_len", (0,), Operation.SET_LEN),
            ("close", (), Operation.CLOSE),
        ],
    )
    def test_each_method_reports_its_operation(self, broken_file, method, args, operation):
        f = File.from_parts(broken_file(errno.ENOSPC), "broken.bin")
        with pytest.raises(FsError) as exc_info:
            getattr(f, method)(*args)
        assert exc_info.value.operation is operation
        assert exc_info.value.context.path == "broken.bin"
        assert exc_info.value.errno == errno.ENOSPC

    def test_unsupported_operation_is_wrapped(self, tmp_path):
        target = tmp_path / "data.bin"
        target.write_bytes(b"")
        with File.open(target) as f:
            with pytest.raises(OSError) as exc_info:
                f.write(b"x")
        assert isinstance(exc_info.value, FsError)
        assert exc_info.value.operation is Operation.WRITE

    def test_fd_errors_report_unknown_path(self, tmp_path):
        target = tmp_path / "data.bin"
        target.write_bytes(b"")
        fd = os.open(target, os.O_RDONLY)
        with File.from_fd(fd) as f:
            with pytest.raises(FsError) as exc_info:
                f.write(b"x")
        assert "'<unknown>'" in str(exc_info.value)


class TestModuleOpen:
    def test_text_round_trip(self, tmp_path):
        target = tmp_path / "notes.txt"
        with fs_err.open(target, "w", encoding="utf-8") as f:
            f.write("line one\n")
        with fs_err.open(target, encoding="utf-8") as f:
            assert f.read() == "line one\n"
            assert f.encoding == "utf-8"

    def test_binary_mode(self, tmp_path):
        target = tmp_path / "data.bin"
        with fs_err.open(target, "wb") as f:
            f.write(b"\x00")
        with fs_err.open(target, "rb") as f:
            assert isinstance(f.file, io.BufferedReader)

    def test_missing_file_reports_open(self, tmp_path):
        with pytest.raises(FileNotFoundError) as exc_info:
            fs_err.open(tmp_path / "missing.txt")
        assert exc_info.value.operation is Operation.OPEN_FILE

    @pytest.mark.parametrize("mode", ["w", "wb", "x", "w+"])
    def test_writing_modes_report_create(self, tmp_path, mode):
        with pytest.raises(FileNotFoundError) as exc_info:
            fs_err.open(tmp_path / "nope" / "f.txt", mode)
        assert exc_info.value.operation is Operation.CREATE_FILE

    def test_append_mode_reports_open(self, tmp_path):
        with pytest.raises(FileNotFoundError) as exc_info:
            fs_err.open(tmp_path / "nope" / "f.txt", "a")
        assert exc_info.value.operation is Operation.OPEN_FILE


class TestOpenOptions:
    def test_no_access_mode_is_invalid(self, tmp_path):
        with pytest.raises(FsError) as exc_info:
            OpenOptions().open(tmp_path / "f.bin")
        assert exc_info.value.errno == errno.EINVAL
        assert exc_info.value.operation is Operation.OPEN_FILE

    def test_create_requires_write(self, tmp_path):
        with pytest.raises(FsError) as exc_info:
            OpenOptions().read().create().open(tmp_path / "f.bin")
        assert exc_info.value.errno == errno.EINVAL

    def test_append_with_truncate_is_invalid(self, tmp_path):
        with pytest.raises(FsError) as exc_info:
            OpenOptions().append().truncate().open(tmp_path / "f.bin")
        assert exc_info.value.errno == errno.EINVAL

    def test_missing_without_create(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            OpenOptions().write().open(tmp_path / "f.bin")

    def test_create_new_existing(self, tmp_path):
        target = tmp_path / "f.bin"
        target.write_bytes(b"")
        with pytest.raises(FileExistsError) as exc_info:
            OpenOptions().write().create_new().open(target)
        assert exc_info.value.context.path == str(target)

    def test_append(self, tmp_path):
        target = tmp_path / "log.txt"
        target.write_bytes(b"one\n")
        with OpenOptions().append().open(target) as f:
            f.write(b"two\n")
        assert target.read_bytes() == b"one\ntwo\n"

    @posix_only
    def test_mode_for_new_file(self, tmp_path):
        target = tmp_path / "secret.bin"
        with OpenOptions().write().create().mode(0o600).open(target):
            pass
        assert stat.S_IMODE(target.stat().st_mode) == 0o600

    def test_file_mode(self):
        assert OpenOptions().read().file_mode() == "rb"
        assert OpenOptions().write().file_mode() == "wb"
        assert OpenOptions().read().write().file_mode() == "r+b"
        assert OpenOptions().append().file_mode() == "ab"
        assert OpenOptions().read().append().file_mode() == "a+b"

    def test_flags(self):
        flags = OpenOptions().write().create().truncate().flags()
        assert flags & os.O_CREAT
        assert flags & os.O_TRUNC
        assert flags & os.O_WRONLY

    def test_custom_flags_cannot_change_access_mode(self):
        flags = OpenOptions().read().custom_flags(os.O_RDWR).flags()
        assert flags & (os.O_WRONLY | os.O_RDWR) == 0

    def test_copy_is_independent(self):
        original = OpenOptions().read()
        clone = original.copy().write()
        assert original.file_mode() == "rb"
        assert clone.file_mode() == "r+b"

    def test_repr(self):
        assert repr(OpenOptions().read().create_new()) == "OpenOptions(read, create_new, mode=0o666)"
