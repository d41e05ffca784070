import logging

from fastapi import FastAPI, Request

from statuscheck.api_schemas import ConfigResponse, HealthResponse, StatusCheckResponse
from statuscheck.config import settings
from statuscheck.service import build_checker

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
checker = build_checker()

app = FastAPI(
    title="Status Check",
    version="1.0.0",
    description=(
        "Runs a single HTTP status check against a target URL and reports "
        "status code, latency and a human-readable message."
    ),
)


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health Check",
    description="Liveness endpoint used by probes and orchestration.",
)
def health():
    return {"status": "ok"}


@app.get(
    "/config",
    response_model=ConfigResponse,
    tags=["system"],
    summary="Current Effective Config",
    description="Returns non-secret runtime config values.",
)
def config():
    return {
        "timeout_s": settings.STATUS_CHECK_TIMEOUT_SECONDS,
        "custom_ca_file": bool(settings.STATUS_CHECK_CA_FILE),
    }


@app.get(
    "/status-check",
    response_model=StatusCheckResponse,
    response_model_exclude_none=True,
    response_model_by_alias=True,
    tags=["status"],
    summary="Run Status Check",
    description=(
        "Checks the target given by the url query param. Optional params: "
        "acceptCodes, maxRedirects, headers (JSON), enableInsecure."
    ),
)
async def status_check(request: Request):
    # Raw query string; the decoder owns parsing and validation
    result = await checker.run(request.url.query)
    return result.to_dict()
