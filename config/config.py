"""Configuration schema and JSON validation helpers.

`load_config` validates and normalizes runtime settings from `config/config.json`
into an immutable `AppConfig`, so the UI and server modules can assume a coherent
shape instead of re-checking values.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from resizer.models import DEFAULT_HEIGHT, DEFAULT_MOBILE_BREAKPOINT_PX, MIN_WIDTH, ResizerOptions, parse_px


@dataclass(frozen=True)
class AppConfig:
    """
    Validated application configuration loaded from a JSON file.

    Expected JSON structure (overview):

    {
      "server": { "enabled": true, "host": "127.0.0.1", "port": 8736 },
      "resizer": {
        "height": "420px",
        "min_width": 200,
        "iframe_zoom": 1,
        "iframe_src": null,
        "iframe_initial_width": null,
        "iframe_title": "Example",
        "dedupe_styles": false
      },
      "window": {
        "title": "window resizer",
        "width": 1100,
        "height": 560,
        "mobile_breakpoint_px": 640,
        "force_mobile": null
      },
      "debug": false
    }

    Only "server" is required; "resizer" and "window" fall back to the component defaults.
    """

    # -----------------------------
    # Demo content server
    # -----------------------------
    server_enabled: bool
    server_host: str
    server_port: int

    # -----------------------------
    # Resizer block
    # -----------------------------
    height: Union[str, int]
    min_width: int
    iframe_zoom: float
    iframe_src: Optional[str]
    iframe_initial_width: Optional[int]
    iframe_title: Optional[str]
    dedupe_styles: bool

    # -----------------------------
    # Host window
    # -----------------------------
    window_title: str
    window_width: int
    window_height: int
    mobile_breakpoint_px: int
    force_mobile: Optional[bool]

    debug: bool

    def resizer_options(self) -> ResizerOptions:
        return ResizerOptions(
            height=self.height,
            min_width=self.min_width,
            iframe_zoom=self.iframe_zoom,
            iframe_src=self.iframe_src,
            iframe_initial_width=self.iframe_initial_width,
            iframe_title=self.iframe_title,
            dedupe_styles=self.dedupe_styles,
        )


def _require_obj(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    """
    Require `raw[key]` to exist and be a JSON object (dict).
    """
    v = raw.get(key)
    if not isinstance(v, dict):
        raise ValueError(f"Missing or invalid '{key}' object in config")
    return v


def _opt_obj(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Optional JSON object; missing/None => empty dict."""
    v = raw.get(key)
    if v is None:
        return {}
    if isinstance(v, dict):
        return v
    raise ValueError(f"Missing or invalid '{key}' object in config (expected object)")


def _require_num(v: Any, key: str) -> float:
    """
    Require a JSON number (int/float) and normalize to float.

    bool is rejected even though it is an int subclass in Python.
    """
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ValueError(f"Missing or invalid '{key}' (expected number)")
    return float(v)


def _require_str(v: Any, key: str) -> str:
    """Require a non-empty string."""
    if not isinstance(v, str) or not v.strip():
        raise ValueError(f"Missing or invalid '{key}' (expected non-empty string)")
    return v


def _opt_bool(v: Any, key: str, default: bool) -> bool:
    """
    Optional boolean with default.

    Prevents accidental configs like "true"/"false" (strings) from silently passing.
    """
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    raise ValueError(f"Missing or invalid '{key}' (expected boolean)")


def _opt_tristate(v: Any, key: str) -> Optional[bool]:
    """Optional boolean where null means 'not set'."""
    if v is None or isinstance(v, bool):
        return v
    raise ValueError(f"Missing or invalid '{key}' (expected boolean or null)")


def _opt_int(v: Any, key: str, default: int) -> int:
    """
    Optional integer with default. Fractional JSON numbers are truncated by int().
    """
    if v is None:
        return default
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return int(v)
    raise ValueError(f"Missing or invalid '{key}' (expected number)")


def _opt_str(v: Any, key: str, default: Optional[str]) -> Optional[str]:
    """
    Optional string with default.

    Rules:
    - Missing/None => default
    - Present => must be a non-empty string
    """
    if v is None:
        return default
    if isinstance(v, str) and v.strip():
        return v
    raise ValueError(f"Missing or invalid '{key}' (expected non-empty string)")


def load_config(path: Union[str, Path]) -> AppConfig:
    """
    Load and validate config from a JSON file and return an `AppConfig`.

    Raises:
        ValueError: missing keys, invalid types, or failed constraints.
        OSError: file cannot be opened/read.
        json.JSONDecodeError: invalid JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw: Dict[str, Any] = json.load(f)

    if not isinstance(raw, dict):
        raise ValueError("Config root must be a JSON object")

    server = _require_obj(raw, "server")
    resizer = _opt_obj(raw, "resizer")
    window = _opt_obj(raw, "window")

    # ---- Server ----
    server_enabled = _opt_bool(server.get("enabled"), "server.enabled", True)
    server_host = _require_str(server.get("host"), "server.host").strip()
    server_port = int(_require_num(server.get("port"), "server.port"))
    if not (0 < server_port < 65536):
        raise ValueError("server.port must be in 1..65535")

    # ---- Resizer ----
    # Height is accepted as a number of pixels or a css px string; validated here, kept as written.
    height_raw = resizer.get("height", DEFAULT_HEIGHT)
    if isinstance(height_raw, bool) or not isinstance(height_raw, (str, int, float)):
        raise ValueError("Missing or invalid 'resizer.height' (expected pixel length)")
    if parse_px(height_raw, key="resizer.height") <= 0:
        raise ValueError("resizer.height must be > 0")
    height: Union[str, int] = height_raw if isinstance(height_raw, str) else int(height_raw)

    min_width = _opt_int(resizer.get("min_width"), "resizer.min_width", MIN_WIDTH)
    if min_width < 0:
        raise ValueError("resizer.min_width must be >= 0")

    iframe_zoom = _require_num(resizer.get("iframe_zoom", 1), "resizer.iframe_zoom")
    if iframe_zoom <= 0:
        raise ValueError("resizer.iframe_zoom must be > 0")

    iframe_src = _opt_str(resizer.get("iframe_src"), "resizer.iframe_src", None)

    initial_raw = resizer.get("iframe_initial_width")
    iframe_initial_width: Optional[int] = None
    if initial_raw is not None:
        iframe_initial_width = int(_require_num(initial_raw, "resizer.iframe_initial_width"))
        if iframe_initial_width < 0:
            raise ValueError("resizer.iframe_initial_width must be >= 0")

    iframe_title = _opt_str(resizer.get("iframe_title"), "resizer.iframe_title", None)
    dedupe_styles = _opt_bool(resizer.get("dedupe_styles"), "resizer.dedupe_styles", False)

    # ---- Window ----
    window_title = _opt_str(window.get("title"), "window.title", "window resizer") or "window resizer"
    window_width = _opt_int(window.get("width"), "window.width", 1100)
    window_height = _opt_int(window.get("height"), "window.height", 560)
    if window_width <= 0 or window_height <= 0:
        raise ValueError("window.width and window.height must be > 0")
    mobile_breakpoint_px = _opt_int(
        window.get("mobile_breakpoint_px"), "window.mobile_breakpoint_px", DEFAULT_MOBILE_BREAKPOINT_PX
    )
    if mobile_breakpoint_px < 0:
        raise ValueError("window.mobile_breakpoint_px must be >= 0")
    force_mobile = _opt_tristate(window.get("force_mobile"), "window.force_mobile")

    debug = _opt_bool(raw.get("debug"), "debug", False)

    return AppConfig(
        server_enabled=server_enabled,
        server_host=server_host,
        server_port=server_port,
        height=height,
        min_width=min_width,
        iframe_zoom=iframe_zoom,
        iframe_src=iframe_src,
        iframe_initial_width=iframe_initial_width,
        iframe_title=iframe_title,
        dedupe_styles=dedupe_styles,
        window_title=window_title,
        window_width=window_width,
        window_height=window_height,
        mobile_breakpoint_px=mobile_breakpoint_px,
        force_mobile=force_mobile,
        debug=debug,
    )
