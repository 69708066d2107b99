# core/supabase_client.py

from typing import Optional

from supabase import create_client, Client
from core.config import settings
from core.logging_config import logger


# Tables probed by the DB health check
HEALTH_TABLES = ["roles", "cities", "properties", "units", "tenants"]


# ============================================================
# Supabase Client Factory (ALWAYS service role)
# ============================================================

def get_supabase_client() -> Optional[Client]:
    """
    Creates a Supabase client using the SERVICE ROLE KEY.
    Needed to validate bearer tokens and to read roles / lookup tables
    regardless of row-level security.
    """
    supabase_url = settings.SUPABASE_URL
    supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY

    if not supabase_url or not supabase_key:
        logger.error("Missing Supabase credentials")
        logger.error(f"   URL: {supabase_url}")
        logger.error(f"   SERVICE ROLE KEY: {'SET' if supabase_key else 'MISSING'}")
        return None

    try:
        return create_client(supabase_url, supabase_key)
    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None


# ============================================================
# Ping Supabase for health checks
# ============================================================

def ping_supabase() -> dict:
    """
    Simple connectivity check.
    Does NOT query auth tables.
    """
    client = get_supabase_client()
    if client is None:
        return {"service": "Supabase", "status": "not_configured"}

    results = {}
    for t in HEALTH_TABLES:
        try:
            res = client.table(t).select("*").limit(1).execute()
            results[t] = {
                "status": "ok",
                "rows_found": len(res.data or [])
            }
        except Exception as err:
            results[t] = {"status": "error", "detail": str(err)}

    status = "ok" if all(r["status"] == "ok" for r in results.values()) else "degraded"
    return {
        "service": "Supabase",
        "status": status,
        "tables": results,
    }
