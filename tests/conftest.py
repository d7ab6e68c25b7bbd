import os
from pathlib import Path

import pytest

DATA = Path(__file__).parent / "data"


@pytest.fixture
def pci_ids_file():
    return str(DATA / "pci.ids")


class FakeDrm:
    """/dev/dri + /sys/class/drm lookalike rooted in tmp_path."""

    def __init__(self, root: Path):
        self.dri = root / "dev" / "dri"
        self.sysfs = root / "sys" / "class" / "drm"
        self.devices = root / "sys" / "devices"
        self.dri.mkdir(parents=True)
        (self.dri / "by-path").mkdir()
        self.sysfs.mkdir(parents=True)

    def add_node(self, node, bus, vendor="0x1002", device="0x67df"):
        pci_dir = self.devices / bus
        pci_dir.mkdir(parents=True, exist_ok=True)
        (pci_dir / "vendor").write_text(vendor + "\n")
        (pci_dir / "device").write_text(device + "\n")
        (self.sysfs / node).mkdir()
        # same shape as the kernel's relative link
        os.symlink(f"../../../devices/{bus}", self.sysfs / node / "device")
        (self.dri / node).touch()
        return str(self.dri / node)


@pytest.fixture
def fake_drm(tmp_path):
    return FakeDrm(tmp_path)
