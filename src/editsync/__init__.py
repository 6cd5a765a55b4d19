"""Apply text edits to line buffers and reconcile diagnostic sign overlays."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "errors",
    "merge",
    "project",
    "runtime",
    "signs",
]

__version__ = "0.1.0"
