"""FastAPI demo content server and server-thread launcher.

When no embedded source is configured, the resizer loads this server's demo
page, so the override styles act on a same-origin document with the chrome
they are written to hide.
"""

from __future__ import annotations

import threading
import time
import traceback
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse

from server.server_html_contents import get_demo_page_html


def create_app(*, title: str = "Demo page", quit_flag: Optional[threading.Event] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Endpoints:
    - GET  /        demo page
    - GET  /health  readiness probe
    - POST /quit    ask the UI to close (sets quit_flag; the UI polls it)
    """
    app = FastAPI()

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse(get_demo_page_html(title=title))

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({"ok": True})

    @app.post("/quit")
    async def quit_app() -> JSONResponse:
        """
        Request application shutdown.

        The server does not exit the process; it signals the UI thread through
        quit_flag so the window closes and tears the resizer down cleanly.
        """
        if quit_flag is None:
            return JSONResponse({"ok": False, "error": "quit not supported"}, status_code=409)
        quit_flag.set()
        return JSONResponse({"ok": True})

    return app


def run_server_in_thread(
    *,
    host: str,
    port: int,
    title: str = "Demo page",
    quit_flag: Optional[threading.Event] = None,
) -> threading.Thread:
    """
    Run the demo server in a daemon thread.

    `log_level="error"` keeps console noise low next to the Qt event loop.
    """
    app = create_app(title=title, quit_flag=quit_flag)

    def _run() -> None:
        try:
            uvicorn.run(app, host=host, port=port, log_level="error")
        except Exception:
            print(f"[server] demo server on {host}:{port} stopped with an error", flush=True)
            traceback.print_exc()

    t = threading.Thread(target=_run, name="demo-server", daemon=True)
    t.start()
    return t


def wait_until_ready(base_url: str, *, timeout_sec: float = 5.0, poll_sec: float = 0.05) -> bool:
    """
    Poll GET /health until it answers {"ok": true} or the timeout expires.

    Returns:
        bool: True when the server is reachable; False on timeout.
    """
    url = f"{base_url.rstrip('/')}/health"
    deadline = time.monotonic() + float(timeout_sec)

    with httpx.Client(timeout=max(0.1, float(poll_sec) * 4)) as client:
        while True:
            try:
                res = client.get(url, headers={"Cache-Control": "no-store"})
                if res.status_code == 200 and res.json().get("ok") is True:
                    return True
            except (httpx.HTTPError, ValueError):
                pass
            if time.monotonic() >= deadline:
                return False
            time.sleep(float(poll_sec))
