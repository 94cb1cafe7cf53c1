# ==============================================================================
# CLI Commands Module
# ==============================================================================
"""
CLI commands for the storefront backend.

Commands are organized into separate modules for maintainability:
- analytics.py: dashboard, sessions, and event/insight ingest
- catalog.py: product listing and inventory sync
- config.py: configuration display
- shared.py: colors, box drawing, and logging setup
"""
