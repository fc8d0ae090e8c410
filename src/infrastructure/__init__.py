"""
Infrastructure layer - external service integrations.

- storage: Google Cloud Storage listing/metadata and signed URL generation

These wrappers translate between external formats and our domain models.
"""
