# gpu_who/models.py
from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, RootModel

UNKNOWN_VENDOR = "Unknown Manufacturer"
UNKNOWN_DEVICE = "Unknown Device"


# ---------- snapshot records ------------------------------------------
class IdentityRecord(BaseModel):
    """Names resolved for one PCI vendor/device pair.

    The codes are always the raw query values; the names stay None when
    pci.ids has no matching entry.
    """

    model_config = ConfigDict(frozen=True)

    vendor_id: str
    device_id: str
    vendor_name: Optional[str] = None
    device_name: Optional[str] = None

    @property
    def vendor_name_pretty(self) -> str:
        return self.vendor_name if self.vendor_name is not None else UNKNOWN_VENDOR

    @property
    def device_name_pretty(self) -> str:
        return self.device_name if self.device_name is not None else UNKNOWN_DEVICE


class GpuDevice(BaseModel):
    """One physical GPU and the /dev/dri nodes it exposes."""

    pci_path: str
    identity: IdentityRecord
    drm_paths: List[str]

    def contains_path(self, path: str) -> bool:
        return path in self.drm_paths

    @property
    def pci_path_pretty(self) -> str:
        # sysfs link targets look like ../../../0000:03:00.0
        return self.pci_path.replace("../", "")


class ProcessSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    pid: str
    name: str
    fds: Tuple[str, ...] = ()


# ---------- correlation -----------------------------------------------
class GpuProcesses(BaseModel):
    device: GpuDevice
    processes: List[int] = []  # indices into CorrelationResult.processes


class CorrelationResult(BaseModel):
    processes: List[ProcessSnapshot]
    gpus: List[GpuProcesses]

    def users(self, bucket: GpuProcesses) -> List[ProcessSnapshot]:
        """Resolve a bucket's process indices."""
        return [self.processes[i] for i in bucket.processes]


# ---------- JSON report schema ----------------------------------------
class ProcessReport(BaseModel):
    pid: int
    name: str


class GpuReport(BaseModel):
    vendor_id: str
    device_id: str
    vendor_name: Optional[str] = None
    device_name: Optional[str] = None
    pci_path: str
    drm_paths: List[str]
    processes: List[ProcessReport]


class GpuReportList(RootModel[List[GpuReport]]):
    pass
