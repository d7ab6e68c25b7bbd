# collector/drm.py
from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, Optional

from gpu_who import config
from gpu_who.collector import pciids
from gpu_who.models import GpuDevice

log = logging.getLogger(__name__)


def _read_attr(path: str) -> str:
    """Read a sysfs hex attribute like '0x1002\\n' and return '1002'."""
    with open(path, encoding="utf-8", errors="replace") as f:
        value = f.read().strip()
    return value[2:] if value.startswith("0x") else value


def get_gpus(
    dri_dir: str = config.DRI_DIR,
    sysfs_drm: str = config.SYSFS_DRM_DIR,
    pci_ids_paths: Optional[Iterable[str]] = None,
) -> Dict[str, GpuDevice]:
    """Map PCI path -> GpuDevice for every device node under `dri_dir`.

    card0 and renderD128 of the same adapter share one sysfs `device` link
    target and end up in one GpuDevice. Any OSError other than a missing
    vendor/device attribute aborts discovery.
    """
    gpus: Dict[str, GpuDevice] = {}
    pci_ids: Optional[str] = None  # loaded on first new GPU

    with os.scandir(dri_dir) as entries:
        for entry in entries:
            # skip by-path/ and friends
            if entry.is_dir():
                continue

            sysfs_dev = os.path.join(sysfs_drm, entry.name, "device")
            try:
                vendor = _read_attr(os.path.join(sysfs_dev, "vendor"))
                device = _read_attr(os.path.join(sysfs_dev, "device"))
            except FileNotFoundError:
                log.warning("Skipping %s: no PCI vendor/device in sysfs", entry.name)
                continue
            log.info("Found GPU: %s - 0x%s:0x%s", entry.name, vendor, device)

            pci_path = os.readlink(sysfs_dev)
            drm_path = os.path.join(dri_dir, entry.name)

            if pci_path in gpus:
                gpus[pci_path].drm_paths.append(drm_path)
                continue

            if pci_ids is None:
                pci_ids = pciids.load_database(pci_ids_paths)
            gpus[pci_path] = GpuDevice(
                pci_path=pci_path,
                identity=pciids.lookup(vendor, device, pci_ids),
                drm_paths=[drm_path],
            )

    return gpus
