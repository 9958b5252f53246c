"""JSON Pointer, JSON Patch, JSON Merge Patch and comparison for plain Python data."""

__version__ = "1.5.5"
__all__ = ["pointer", "compare", "patch", "merge"]