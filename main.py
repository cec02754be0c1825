"""Application composition root for the window resizer demo.

This module wires together:
- Config loading (+ CLI overrides)
- The demo content server thread (when no embedded source is configured)
- The Qt resizer window

Shutdown is coordinated through a single quit flag shared by the window
(close button) and the server (/quit).
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import sys
import threading
from typing import List, Optional

from config.config import AppConfig, load_config
from server.server import run_server_in_thread, wait_until_ready
from ui.ui_logic import run_resizer_ui


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="windowresizer")
    p.add_argument("--config", default="./config/config.json", help="Path to config.json.")
    p.add_argument("--src", default=None, help="Address loaded into the embedded view (skips the demo server).")
    p.add_argument("--initial-width", type=int, default=None, help="Seed width; switches to initial-width mode.")
    p.add_argument("--min-width", type=int, default=None, help="Content floor for the track in fill mode.")
    p.add_argument("--zoom", type=float, default=None, help="Zoom factor injected into the embedded page.")
    p.add_argument("--height", default=None, help="Block height, e.g. 420 or 420px.")
    p.add_argument("--dedupe-styles", action="store_true", help="Replace the injected style block instead of appending.")
    g = p.add_mutually_exclusive_group()
    g.add_argument("--mobile", action="store_true", help="Force the mobile variant.")
    g.add_argument("--desktop", action="store_true", help="Force the desktop variant.")
    p.add_argument("--debug", action="store_true", help="Print resizer diagnostics.")
    return p.parse_args(argv)


def apply_cli_overrides(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return a copy of cfg with every CLI flag that was given applied on top."""
    changes = {}
    if args.src is not None:
        changes["iframe_src"] = str(args.src)
    if args.initial_width is not None:
        changes["iframe_initial_width"] = int(args.initial_width)
    if args.min_width is not None:
        changes["min_width"] = int(args.min_width)
    if args.zoom is not None:
        changes["iframe_zoom"] = float(args.zoom)
    if args.height is not None:
        changes["height"] = str(args.height)
    if args.dedupe_styles:
        changes["dedupe_styles"] = True
    if args.mobile:
        changes["force_mobile"] = True
    elif args.desktop:
        changes["force_mobile"] = False
    if args.debug:
        changes["debug"] = True
    return replace(cfg, **changes)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Application entry point.

    - Load config and apply CLI overrides.
    - Start the demo content server when no source is configured, and point the
      embedded view at it once it answers.
    - Run the resizer window (Qt event loop) in the main thread.
    """
    args = _parse_args(argv)

    try:
        cfg = apply_cli_overrides(load_config(args.config), args)
        options = cfg.resizer_options().validated()
    except (OSError, ValueError) as e:
        print(f"ERROR: invalid configuration: {e}", file=sys.stderr)
        return 2

    quit_flag = threading.Event()

    if options.iframe_src is None and cfg.server_enabled:
        # If the server binds to 0.0.0.0 the view cannot load "http://0.0.0.0:PORT"; use loopback.
        host_for_ui = "127.0.0.1" if cfg.server_host == "0.0.0.0" else str(cfg.server_host)
        base_url = f"http://{host_for_ui}:{int(cfg.server_port)}"

        run_server_in_thread(
            host=cfg.server_host,
            port=cfg.server_port,
            title=options.iframe_title or "Demo page",
            quit_flag=quit_flag,
        )
        if not wait_until_ready(base_url):
            print(f"[server] demo server at {base_url} did not become ready; loading it anyway", flush=True)
        elif cfg.debug:
            print(f"[server] demo page at {base_url}/", flush=True)
        options = replace(options, iframe_src=f"{base_url}/")

    run_resizer_ui(
        options=options,
        on_close=quit_flag.set,
        quit_flag=quit_flag,
        title=cfg.window_title,
        width=cfg.window_width,
        height=cfg.window_height,
        mobile_breakpoint_px=cfg.mobile_breakpoint_px,
        force_mobile=cfg.force_mobile,
        debug=cfg.debug,
    )

    quit_flag.set()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
