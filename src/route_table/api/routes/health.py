"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and row table status."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set ROUTE_TABLE_SUPABASE_URL and ROUTE_TABLE_SUPABASE_KEY environment variables.",
            "rows_count": 0,
        }

    try:
        response = supabase.table(settings.rows_table).select("id", count="exact").limit(1).execute()
        rows_count = response.count or 0
        return {
            "configured": True,
            "connected": True,
            "rows_count": rows_count,
            "message": f"Database connected. Found {rows_count} rows in '{settings.rows_table}'.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
