"""
Provider catalog.

Responsibilities:
- Hold the canonical ProviderRecord schema.
- Load the bundled catalog, or an override export when one is configured.
- Convert raw database exports into the canonical CSV layout.
"""
