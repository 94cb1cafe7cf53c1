# ==============================================================================
# Storage Infrastructure
# ==============================================================================
"""
Snapshot store implementations.

Available implementations:
- JsonSnapshotStore: pretty-printed JSON file, atomically replaced on save
"""

from storefront.infrastructure.storage.json_file import JsonSnapshotStore

__all__ = ["JsonSnapshotStore"]
