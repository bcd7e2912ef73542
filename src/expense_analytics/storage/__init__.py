from .snapshot import load_snapshot

__all__ = ["load_snapshot"]
