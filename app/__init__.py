# ==============================================================================
# APP PACKAGE INITIALIZATION
# ==============================================================================
# AR Surgical Hub backend with FastAPI
# Supports: PostgreSQL (production), SQLite (local development)
# ==============================================================================

"""
AR Surgical Hub API
===================

Storefront, checkout and back-office API for surgical equipment, running
unchanged on PostgreSQL or a local SQLite file.

Features:
---------
- One statement dialect (``$1, $2, ...`` with RETURNING) for both engines
- Task-scoped transactions that pin a single connection
- Idempotent schema creation and reference-data seeding at startup
- JWT-based admin gate

Usage:
------
    from app.main import app

    # Run with uvicorn
    uvicorn app.main:app --reload
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
