# gpu_who/report.py
from __future__ import annotations

from typing import List

from gpu_who.models import CorrelationResult, GpuProcesses, GpuReport, GpuReportList, ProcessReport


def _selected(result: CorrelationResult, only_used: bool) -> List[GpuProcesses]:
    return [g for g in result.gpus if g.processes or not only_used]


def format_text(result: CorrelationResult, only_used: bool = False) -> str:
    """One block per GPU, one `(pid) name` line per process using it."""
    lines: List[str] = []
    for gpu in _selected(result, only_used):
        dev = gpu.device
        ident = dev.identity
        lines.append(
            f"GPU {ident.vendor_name_pretty} {ident.device_name_pretty} "
            f"({ident.vendor_id}:{ident.device_id}) [{dev.pci_path_pretty}] is used by:"
        )
        lines.extend(f"({proc.pid}) {proc.name}" for proc in result.users(gpu))
    return "\n".join(lines)


def to_reports(result: CorrelationResult, only_used: bool = False) -> List[GpuReport]:
    reports: List[GpuReport] = []
    for gpu in _selected(result, only_used):
        dev = gpu.device
        reports.append(
            GpuReport(
                vendor_id=dev.identity.vendor_id,
                device_id=dev.identity.device_id,
                vendor_name=dev.identity.vendor_name,
                device_name=dev.identity.device_name,
                pci_path=dev.pci_path_pretty,
                drm_paths=list(dev.drm_paths),
                processes=[ProcessReport(pid=int(p.pid), name=p.name) for p in result.users(gpu)],
            )
        )
    return reports


def format_json(result: CorrelationResult, only_used: bool = False) -> str:
    return GpuReportList(to_reports(result, only_used)).model_dump_json(indent=2)
