"""FastAPI application -- routes for the Wordpal review loop."""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from fastapi import Depends, FastAPI, HTTPException

from server.dependencies import get_runtime, reset_runtime
from server.runtime import Runtime
from server.schemas import OutcomeRequest, StatsResponse, WordResponse
from server.services import review_service
from server.services.review_service import NoWordOnDisplayError
from server.__version__ import __version__
from wordpal.messages import (
    APP_TITLE,
    FAILED_DB_INIT_MESSAGE,
    FAILED_DB_WRITE_MESSAGE,
    GENERIC_RUNTIME_ERR_MESSAGE,
)
from wordpal.session import ReviewSession

logger = logging.getLogger("wordpal")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan: the database is opened lazily on first request."""
    ts = datetime.utcnow().isoformat() + "Z"
    logger.info("[%s] Startup: begin (database opened on first request)", ts)
    yield
    reset_runtime()
    ts_end = datetime.utcnow().isoformat() + "Z"
    logger.info("[%s] Shutdown: complete", ts_end)


app = FastAPI(title=APP_TITLE, version=__version__, lifespan=lifespan)


def _open_session(runtime: Runtime) -> ReviewSession:
    try:
        return runtime.get_session()
    except OSError as e:
        logger.warning("Database unavailable at %s: %s", runtime.paths.db_path, e)
        raise HTTPException(
            status_code=503,
            detail=f"{FAILED_DB_INIT_MESSAGE} ({e!s})",
        )
    except Exception:
        logger.exception("Failed to open session for %s", runtime.paths.db_path)
        raise HTTPException(status_code=500, detail=GENERIC_RUNTIME_ERR_MESSAGE)


@app.get("/health")
def health():
    """Minimal health check. Does not touch the database."""
    return {"ok": True}


# ---- Review ----

@app.get("/review/current", response_model=WordResponse)
def current_word(runtime: Runtime = Depends(get_runtime)):
    with runtime.lock:
        session = _open_session(runtime)
        return review_service.get_current_word(session)


@app.post("/review/outcome", response_model=WordResponse)
def review_outcome(body: OutcomeRequest, runtime: Runtime = Depends(get_runtime)):
    with runtime.lock:
        session = _open_session(runtime)
        try:
            return review_service.record_outcome(session, body.correct)
        except NoWordOnDisplayError as e:
            raise HTTPException(status_code=409, detail=str(e))
        except OSError as e:
            raise HTTPException(
                status_code=500,
                detail=f"{FAILED_DB_WRITE_MESSAGE} ({e!s})",
            )


# ---- Stats ----

@app.get("/stats", response_model=StatsResponse)
def stats(runtime: Runtime = Depends(get_runtime)):
    with runtime.lock:
        session = _open_session(runtime)
        return review_service.get_stats(session)
