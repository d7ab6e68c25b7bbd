#!/usr/bin/env python
"""
gpu-who [--json] [--used-only]

Example:
    gpu-who --used-only
    GPU Advanced Micro Devices, Inc. [AMD/ATI] Ellesmere [...] (1002:67df) [0000:03:00.0] is used by:
    (1432) Xorg
    (2210) firefox
"""
from __future__ import annotations

import logging
from typing import Optional

import typer

from gpu_who import config
from gpu_who.collector import correlate, drm, procfs
from gpu_who.report import format_json, format_text

log = logging.getLogger("gpu_who")

app = typer.Typer(add_completion=False, help="Show which processes hold GPU device nodes open.")


def _setup_logging(verbose: bool, debug: bool) -> None:
    level = "DEBUG" if debug else "INFO" if verbose else config.LOG_LEVEL
    logging.basicConfig(level=level, format=config.LOG_FORMAT)
    logging.getLogger().setLevel(level)


@app.command()
def main(
    as_json: bool = typer.Option(False, "--json", help="print JSON instead of text"),
    used_only: bool = typer.Option(False, "--used-only", help="hide GPUs nobody is using"),
    keep_duplicates: bool = typer.Option(
        False, "--keep-duplicates", help="list a process once per descriptor it holds on a GPU"
    ),
    pci_ids: Optional[str] = typer.Option(None, "--pci-ids", help="pci.ids file to try first"),
    dri_dir: str = typer.Option(config.DRI_DIR, "--dri-dir", help="render-device directory"),
    sysfs_drm: str = typer.Option(config.SYSFS_DRM_DIR, "--sysfs-drm", help="sysfs DRM class directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="log discovered GPUs"),
    debug: bool = typer.Option(False, "--debug", help="log skipped processes too"),
) -> None:
    _setup_logging(verbose, debug)
    try:
        gpus = drm.get_gpus(dri_dir, sysfs_drm, config.pci_ids_paths(pci_ids))
        processes = procfs.get_processes()
    except OSError as exc:
        log.error("Scan failed: %s", exc)
        raise typer.Exit(code=1)

    result = correlate.correlate(gpus, processes, dedupe=not keep_duplicates)
    out = format_json(result, used_only) if as_json else format_text(result, used_only)
    if out:
        typer.echo(out)


if __name__ == "__main__":
    app()  # `python -m gpu_who.cli --used-only`
