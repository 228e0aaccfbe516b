# =============================================================================
# Resume Builder API - Backend Package
# =============================================================================
"""
Resume Builder API

A FastAPI-based backend for creating, versioning, sharing and exporting
resumes. Authentication is delegated to Supabase and persistence to
PostgreSQL through SQLAlchemy.
"""

__version__ = "0.1.0"
