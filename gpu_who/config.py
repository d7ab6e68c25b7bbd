# gpu_who/config.py
from __future__ import annotations

import os
from typing import List, Optional

# *** How to override at runtime:
# export GPU_WHO_LOG_LEVEL=INFO
# export GPU_WHO_PCI_IDS=/opt/hwdata/pci.ids
# gpu-who

LOG_LEVEL = os.getenv("GPU_WHO_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s  %(levelname)s %(message)s"

DRI_DIR = os.getenv("GPU_WHO_DRI_DIR", "/dev/dri")
SYSFS_DRM_DIR = os.getenv("GPU_WHO_SYSFS_DRM", "/sys/class/drm")

# Tried in order, first existing file wins
PCI_IDS_PATHS = (
    "/usr/share/hwdata/pci.ids",  # Arch, Fedora
    "/usr/share/misc/pci.ids",  # Debian, Ubuntu
    "pci.ids",  # local copy
)


def pci_ids_paths(override: Optional[str] = None) -> List[str]:
    """Candidate pci.ids locations, with `override` or $GPU_WHO_PCI_IDS first."""
    extra = override or os.getenv("GPU_WHO_PCI_IDS")
    paths = list(PCI_IDS_PATHS)
    if extra:
        paths.insert(0, extra)
    return paths
