"""gpu_who: which processes hold a GPU open right now."""

__version__ = "0.1.0"
