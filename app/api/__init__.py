# ==============================================================================
# API PACKAGE INITIALIZATION
# ==============================================================================

"""
API Module
==========

FastAPI routers and endpoint definitions:
- Dependencies: database access, services, admin gate
- Routers: Users, Catalog, Orders, Reviews, Quotes, Vacancies, Admin
"""

from app.api.router import api_router

__all__ = ["api_router"]
