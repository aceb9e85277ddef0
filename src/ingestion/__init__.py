"""
Ingestion Layer for the Oceanio tracker.

This package turns upstream tracking responses into canonical DCSA events.

Key Components:
- references: Reference types (bill of lading, booking, container) and their endpoints
- normalization: Shape resolution, event normalization and raw-text correlation
"""
