# goldradar: app.py
# HTTP surface do widget de ouro (XAU/CNH por grama).

from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from loguru import logger
from starlette.concurrency import run_in_threadpool

from services import config
from services.rendering import render_placeholder_png
from services.widget import build_widget

app = FastAPI()

# --- Health & status ---
@app.get("/")
async def root():
    return PlainTextResponse("goldradar up")

@app.get("/status")
async def status():
    return JSONResponse({"ok": True, "version": config.VERSION})

# --- Widget ---
@app.get("/widget")
async def widget(smooth: Optional[str] = None):
    try:
        w = await build_widget(smooth)
    except Exception as e:
        logger.exception("widget error: {}", e)
        return JSONResponse({"ok": False, "error": str(e)}, status_code=500)
    return JSONResponse(w.to_dict())

@app.get("/widget/chart.png")
async def widget_chart(smooth: Optional[str] = None):
    try:
        w = await build_widget(smooth)
    except Exception as e:
        logger.exception("chart error: {}", e)
        return JSONResponse({"ok": False, "error": str(e)}, status_code=500)
    png = w.chart_png or await run_in_threadpool(render_placeholder_png)
    return Response(content=png, media_type="image/png")

# --- graceful shutdown logging ---
@app.on_event("shutdown")
async def on_shutdown():
    logger.info("shutdown complete")
