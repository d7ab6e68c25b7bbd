# tests/test_procfs.py
import os

import pytest

from gpu_who.collector import procfs


@pytest.fixture
def fake_proc(tmp_path, monkeypatch):
    """Fake /proc with status files and fd symlinks; psutil only lists pids."""
    pids = []

    def add(pid, name, targets=(), fd_dir=True, status=True):
        pids.append(pid)
        piddir = tmp_path / str(pid)
        piddir.mkdir()
        if status:
            (piddir / "status").write_text(f"Name:\t{name}\nUmask:\t0022\nState:\tS (sleeping)\n")
        if fd_dir:
            (piddir / "fd").mkdir()
            for n, target in enumerate(targets):
                os.symlink(target, piddir / "fd" / str(n))

    monkeypatch.setattr(procfs.psutil, "pids", lambda: list(pids))
    monkeypatch.setattr(procfs.psutil, "PROCFS_PATH", str(tmp_path), raising=False)
    add.root = tmp_path
    return add


def test_snapshot_reads_fds_and_name(fake_proc):
    fake_proc(1432, "Xorg", ["/dev/dri/card0", "/dev/null", "socket:[1234]"])
    (snap,) = procfs.get_processes()
    assert snap.pid == "1432"
    assert snap.name == "Xorg"
    assert sorted(snap.fds) == ["/dev/dri/card0", "/dev/null", "socket:[1234]"]


def test_name_is_truncated_comm(fake_proc):
    # the kernel cuts comm at 15 chars; cmdline keeps the full name
    fake_proc(88, "averyveryverylo", ["/dev/null"])
    (fake_proc.root / "88" / "cmdline").write_bytes(b"averyveryverylongprocessname\x0010\x00")
    (snap,) = procfs.get_processes()
    assert snap.name == "averyveryverylo"


def test_name_from_given_procfs_root(tmp_path, fake_proc):
    other = tmp_path / "other"
    (other / "5" / "fd").mkdir(parents=True)
    (other / "5" / "status").write_text("Name:\tfromother\n")
    fake_proc(5, "fromglobal", fd_dir=False, status=False)
    assert procfs.snapshot_process("5", str(other)).name == "fromother"


def test_status_without_name_line(fake_proc):
    fake_proc(9, "unused", status=False)
    (fake_proc.root / "9" / "status").write_text("State:\tR (running)\n")
    (snap,) = procfs.get_processes()
    assert snap.name == ""


def test_unreadable_fd_omitted(fake_proc):
    fake_proc(7, "bash", ["/dev/pts/0"])
    # a plain file in fd/ cannot be readlink()ed
    (fake_proc.root / "7" / "fd" / "9").write_text("")
    (snap,) = procfs.get_processes()
    assert snap.fds == ("/dev/pts/0",)


def test_vanished_process_skipped(fake_proc):
    fake_proc(1, "systemd", ["/dev/null"])
    fake_proc(2, "gone", fd_dir=False)
    fake_proc(3, "exited", ["/dev/null"], status=False)
    assert [p.pid for p in procfs.get_processes()] == ["1"]


def test_fd_dir_permission_denied_skipped(fake_proc, monkeypatch):
    fake_proc(1, "systemd", ["/dev/null"])
    fake_proc(4, "secret", ["/dev/dri/card0"])
    fake_proc(6, "Xorg", ["/dev/dri/card0"])
    real_listdir = os.listdir
    denied = os.path.join(str(fake_proc.root), "4", "fd")

    def listdir(path):
        if str(path) == denied:
            raise PermissionError(13, "Permission denied", path)
        return real_listdir(path)

    monkeypatch.setattr(procfs.os, "listdir", listdir)
    assert [p.pid for p in procfs.get_processes()] == ["1", "6"]


def test_other_errors_propagate(fake_proc):
    fake_proc(5, "odd", fd_dir=False)
    (fake_proc.root / "5" / "fd").write_text("not a directory")
    with pytest.raises(NotADirectoryError):
        procfs.get_processes()


def test_explicit_procfs_root(tmp_path):
    fds = tmp_path / "42" / "fd"
    fds.mkdir(parents=True)
    os.symlink("/dev/dri/renderD128", fds / "3")
    assert procfs.read_fds("42", str(tmp_path)) == ["/dev/dri/renderD128"]
