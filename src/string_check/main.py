"""FastAPI application for the risk string scanner."""

import logging
import os

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .errors import ConfigError, ScanError
from .models import ScanRequest, ScanResponse
from .service import run_scan

# Configure logging
logging.basicConfig(level=os.environ.get("STRING_CHECK_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="String Check",
    description="Scans a directory for risk URLs and optionally strips them from files",
    version="0.1.0",
)

# CORS - allow common development origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8000",
    ],
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/scan", response_model=ScanResponse)
def scan(request: ScanRequest) -> ScanResponse:
    """
    Scan a directory for risk URLs.

    - **path**: Directory to scan
    - **risk_urls**: Risk strings to look for (or use **config_path**)
    - **replace**: Remove matched strings from files
    - **dry_run**: Compute replacements without writing
    """
    try:
        return run_scan(request)
    except ConfigError as e:
        logger.error(f"Invalid risk list: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except ScanError as e:
        logger.error(f"Scan failed: {e}")
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Scan failed: {e}")
        raise HTTPException(status_code=500, detail=f"Scan failed: {str(e)}")
