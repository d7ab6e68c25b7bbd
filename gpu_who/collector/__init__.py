"""gpu_who.collector
Point-in-time snapshot of GPU device nodes and the processes using them.

Modules
-------
pciids   : pci.ids lookup (vendor/device code -> human-readable names)
drm      : walks /dev/dri + sysfs and groups nodes per physical GPU
procfs   : running processes and their open file-descriptor targets
correlate: matches descriptor targets against GPU device nodes
"""

__all__ = ["pciids", "drm", "procfs", "correlate"]
