# collector/procfs.py
from __future__ import annotations

import logging
import os
from typing import List, Optional

import psutil

from gpu_who.models import ProcessSnapshot

log = logging.getLogger(__name__)


def list_pids() -> List[str]:
    return [str(pid) for pid in psutil.pids()]


def read_fds(pid: str, procfs: Optional[str] = None) -> List[str]:
    """Targets of /proc/<pid>/fd/*. Links that vanish mid-read are dropped."""
    fd_dir = os.path.join(procfs or psutil.PROCFS_PATH, pid, "fd")
    fds: List[str] = []
    for fd in os.listdir(fd_dir):
        try:
            fds.append(os.readlink(os.path.join(fd_dir, fd)))
        except OSError:
            continue
    return fds


def read_name(pid: str, procfs: Optional[str] = None) -> str:
    """`Name:` line of /proc/<pid>/status (the kernel's 15-char comm)."""
    status = os.path.join(procfs or psutil.PROCFS_PATH, pid, "status")
    with open(status, encoding="utf-8", errors="replace") as f:
        for line in f:
            if line.startswith("Name"):
                return line[5:].strip()
    return ""


def snapshot_process(pid: str, procfs: Optional[str] = None) -> ProcessSnapshot:
    fds = read_fds(pid, procfs)
    return ProcessSnapshot(pid=pid, name=read_name(pid, procfs), fds=tuple(fds))


def get_processes(procfs: Optional[str] = None) -> List[ProcessSnapshot]:
    """Snapshot every running process we are allowed to inspect.

    Processes that exit or deny access between listing and reading are
    skipped; any other error propagates.
    """
    processes: List[ProcessSnapshot] = []
    for pid in list_pids():
        try:
            processes.append(snapshot_process(pid, procfs))
        except (FileNotFoundError, PermissionError) as exc:
            log.debug("Skipping pid %s: %s", pid, exc)
    return processes
