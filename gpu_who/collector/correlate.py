# collector/correlate.py
from __future__ import annotations

from typing import Dict, List

from gpu_who.models import CorrelationResult, GpuDevice, GpuProcesses, ProcessSnapshot


def correlate(
    gpus: Dict[str, GpuDevice],
    processes: List[ProcessSnapshot],
    dedupe: bool = True,
) -> CorrelationResult:
    """Build the GPU -> processes index.

    Every GPU gets a bucket, used or not. A descriptor belongs to at most one
    GPU since node paths never repeat across GPUs. With `dedupe=False` a
    process holding several descriptors on the same GPU is listed once per
    descriptor.
    """
    buckets = [GpuProcesses(device=dev) for dev in gpus.values()]

    for idx, proc in enumerate(processes):
        for fd in proc.fds:
            for bucket in buckets:
                if bucket.device.contains_path(fd):
                    if not (dedupe and idx in bucket.processes):
                        bucket.processes.append(idx)
                    break

    return CorrelationResult(processes=list(processes), gpus=buckets)
