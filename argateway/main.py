import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import Any

import filetype
from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response

from argateway.config import settings
from argateway.errors import GatewayError, PayloadTooLarge
from argateway.models.wallet import WalletStats
from argateway.renderer.status_page import render_error_page, render_status_page
from argateway.state import GatewayState, build_state
from argateway.storage.client import ArweaveClient
from argateway.validation.input import validate_mime, validate_size, validate_tx_id

# Room for multipart boundaries and part headers on top of the file itself.
MULTIPART_OVERHEAD = 64 * 1024

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("argateway.main")


async def _log_network_info(client: ArweaveClient) -> None:
    info = await client.get_network_info()
    logger.info("Arweave network info: %s", info)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "gateway", None) is None:
        app.state.gateway = build_state(settings)
    gateway: GatewayState = app.state.gateway
    gateway.runner.spawn(_log_network_info(gateway.client), name="network-info")
    yield
    await gateway.runner.drain()


app = FastAPI(title="Arweave Cache Gateway", version="0.1.0", lifespan=lifespan)


@app.middleware("http")
async def limit_upload_size(request: Request, call_next):
    if request.method == "POST" and request.url.path == "/upload":
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > settings.max_upload_bytes + MULTIPART_OVERHEAD:
            logger.warning("Rejected upload: declared body of %s bytes", declared)
            return JSONResponse(status_code=413, content=_failure(PayloadTooLarge()))
    return await call_next(request)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.monotonic()
    response = await call_next(request)
    logger.info(
        "%s %s -> %s (%dms)",
        request.method,
        request.url.path,
        response.status_code,
        (time.monotonic() - started) * 1000,
    )
    return response


# Registered last so it wraps everything, including early 413s.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PayloadTooLarge)
async def payload_too_large(request: Request, exc: PayloadTooLarge):
    return JSONResponse(status_code=413, content=_failure(exc))


def _success(data: Any) -> dict:
    return {"success": True, "data": data}


def _failure(err: Exception) -> dict:
    return {"success": False, "message": str(err)}


def get_gateway(request: Request) -> GatewayState:
    return request.app.state.gateway


async def upload_file(file: UploadFile = File(...)) -> UploadFile:
    size = file.size
    if size is None:
        file.file.seek(0, 2)
        size = file.file.tell()
        file.file.seek(0)
    validate_size(size, settings.max_upload_bytes)
    return file


async def _refresh_stats(gateway: GatewayState) -> None:
    address, balance = await asyncio.gather(
        gateway.client.get_wallet_address(),
        gateway.client.get_balance(),
    )
    stats = WalletStats.from_balance(address, balance)
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, gateway.stats.save, stats)
    logger.info("Stats snapshot refreshed: %s holds %s AR", stats.address, stats.balance_ar)


async def _refresh_index(gateway: GatewayState) -> None:
    loop = asyncio.get_running_loop()
    # Only the directory scan leaves the loop; the index itself is updated here.
    entries = await loop.run_in_executor(None, lambda: list(gateway.cache.iter_entries()))
    gateway.index.replace(entries)


@app.get("/", response_class=HTMLResponse)
async def status_page(gateway: GatewayState = Depends(get_gateway)):
    try:
        stats = gateway.stats.load()
        html = render_status_page(
            stats,
            gateway.index.entries,
            gateway.index.total_size,
            settings.explorer_url,
            template=settings.page_theme,
        )
    except Exception:
        logger.exception("Failed to render status page")
        return HTMLResponse(content=render_error_page(), status_code=500)

    # Refreshed values show up on the next visit.
    gateway.runner.spawn(_refresh_stats(gateway), name="refresh-stats")
    gateway.runner.spawn(_refresh_index(gateway), name="refresh-index")
    return HTMLResponse(content=html)


@app.get("/tx/{tx_id}")
async def transaction_data(tx_id: str, gateway: GatewayState = Depends(get_gateway)):
    try:
        tx_id = validate_tx_id(tx_id)
        data = await gateway.client.get_data(tx_id)
    except GatewayError as exc:
        logger.info("GET /tx/%s failed: %s", tx_id, exc)
        return Response(status_code=404)

    kind = filetype.guess(data)
    media_type = kind.mime if kind else "application/octet-stream"
    return Response(content=data, media_type=media_type)


@app.get("/status/{tx_id}")
async def transaction_status(tx_id: str, gateway: GatewayState = Depends(get_gateway)):
    try:
        tx_id = validate_tx_id(tx_id)
        status = await gateway.client.get_status(tx_id)
    except GatewayError as exc:
        logger.info("GET /status/%s failed: %s", tx_id, exc)
        return _failure(exc)
    return _success(status)


@app.post("/upload")
async def upload(
    file: UploadFile = Depends(upload_file),
    gateway: GatewayState = Depends(get_gateway),
):
    logger.info("Received file %s (%s, %s bytes), ready to post", file.filename, file.content_type, file.size)
    try:
        mime = validate_mime(file.content_type)
        data = await file.read()
        tx_id = await gateway.client.post(data, mime)
    except GatewayError as exc:
        logger.warning("Upload failed: %s", exc)
        return _failure(exc)

    gateway.index.add(tx_id, len(data))
    return _success(tx_id)
