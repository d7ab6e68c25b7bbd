# collector/pciids.py
"""
pci.ids lookup.

The database is line oriented:

    1002  Advanced Micro Devices, Inc. [AMD/ATI]
    <tab>67df  Ellesmere [Radeon RX 470/480/570/570X/580/580X/590]
    <tab><tab>1002 0b31  Radeon RX 580   (subsystem, ignored)

Vendors start at column 0, their devices are indented by one tab and `#`
starts a comment. The first non-indented, non-comment line after a vendor
closes that vendor's device list.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from gpu_who import config
from gpu_who.models import IdentityRecord

log = logging.getLogger(__name__)


def load_database(paths: Optional[Iterable[str]] = None) -> str:
    """Return the content of the first pci.ids candidate that exists.

    Missing files are skipped; any other OSError propagates. Returns an
    empty string (and logs a warning) when no candidate exists.
    """
    for path in config.pci_ids_paths() if paths is None else paths:
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                content = f.read()
        except FileNotFoundError:
            continue
        log.debug("Using pci.ids from %s", path)
        return content

    log.warning("pci.ids file not found, can't translate device id to vendor information")
    return ""


def lookup(vendor: str, device: str, content: str) -> IdentityRecord:
    """Resolve vendor/device codes against pci.ids `content`. Never raises."""
    vendor_name: Optional[str] = None
    device_name: Optional[str] = None

    # only \n separates lines; a \r before it is dropped
    lines = (ln[:-1] if ln.endswith("\r") else ln for ln in content.split("\n"))
    # first prefix match wins
    vendor_line = next((ln for ln in lines if ln.startswith(vendor)), None)

    if vendor_line is not None:
        vendor_name = vendor_line[4:].strip()

        device_prefix = f"\t{device}"
        for line in lines:
            if line.startswith(device_prefix):
                device_name = line[5:].strip()
                break
            if line.startswith("#") or line.startswith("\t"):
                continue
            break  # next vendor or section header

    return IdentityRecord(
        vendor_id=vendor,
        device_id=device,
        vendor_name=vendor_name,
        device_name=device_name,
    )


def resolve(vendor: str, device: str, paths: Optional[Iterable[str]] = None) -> IdentityRecord:
    """Convenience: load pci.ids and look up a single vendor/device pair."""
    return lookup(vendor, device, load_database(paths))
