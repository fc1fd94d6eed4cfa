# shopadmin/api/v1/routers/health.py
import time
import subprocess
from fastapi import APIRouter
from shopadmin.core.config import get_settings
from shopadmin.db import mongo
from shopadmin.db.redis import get_redis  # returns Redis instance or None

router = APIRouter(tags=["health"])
START_TIME = time.time()


def _git_sha(short: bool = True) -> str:
    try:
        cmd = ["git", "rev-parse", "--short" if short else "HEAD"]
        return subprocess.check_output(cmd, stderr=subprocess.DEVNULL).decode().strip()
    except Exception:
        return "unknown"


@router.get("/health")
async def health():
    """
    Lenient health check:
    - Mongo ping through Motor
    - GridFS asset bucket reachable, with its file count and public URL base
    - Redis reported as 'skipped' when not configured
    - basic app info plus a global status
    """
    settings = get_settings()
    checks: dict[str, object] = {
        "app_name": settings.APP_NAME,
        "env": settings.APP_ENV,
        "debug": settings.DEBUG,
        "version": settings.GIT_SHA if settings.GIT_SHA != "unknown" else _git_sha(),
        "uptime_seconds": int(time.time() - START_TIME),
    }

    # --- Mongo ---
    try:
        db = mongo.get_db()
        await db.command("ping")
        checks["mongodb"] = "ok"
    except Exception as e:
        checks["mongodb"] = f"error: {e}"

    # --- Asset bucket (GridFS) ---
    try:
        mongo.get_bucket()
        files = await mongo.get_db()[f"{settings.assets_bucket}.files"].estimated_document_count()
        checks["assets"] = "ok"
        checks["asset_files"] = files
    except Exception as e:
        checks["assets"] = f"error: {e}"
    checks["asset_bucket"] = settings.assets_bucket
    checks["asset_base_url"] = settings.ASSET_BASE_URL or "(relative)"

    # --- Redis (optional) ---
    try:
        r = get_redis()
        if r:
            await r.ping()
            checks["redis"] = "ok"
        else:
            checks["redis"] = "skipped"
    except Exception as e:
        checks["redis"] = f"error: {e}"

    def _is_ok(v):
        return v in ("ok", "skipped")

    health_keys = ("mongodb", "assets", "redis")
    status = "ok" if all(_is_ok(checks.get(k)) for k in health_keys) else "error"

    return {"status": status, "checks": checks, "timestamp": int(time.time())}
