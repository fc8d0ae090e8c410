"""
Bucket Video Player - browse and stream videos kept in a cloud storage bucket.

This package contains the complete application:
- core: Framework-agnostic catalog logic (filtering, naming, ordering)
- infrastructure: Google Cloud Storage client and URL signing
- api: FastAPI routes, dependencies and templates
- config: Application configuration
"""

__version__ = "0.1.0"
