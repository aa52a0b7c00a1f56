"""Fixed-width binary record files of athlete statistics: CSV import and export, editing, sorting, splitting and search."""

__version__ = "0.1.0"
__all__ = ["records", "minheap", "binfile", "cli", "split", "preview"]