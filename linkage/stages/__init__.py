"""Resolution stages: partitioning, localization, link resolution.

Each stage exposes a small function API over in-memory batches and runs
strictly after the previous one within a single pass.
"""
