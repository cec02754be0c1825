# server/server_html_contents.py
from __future__ import annotations

import html


def get_demo_page_html(*, title: str) -> str:
    """
    Demo docs page served to the embedded view.

    It carries the same page chrome as a real docs site (sidebar container,
    safe-area padding element, footer) so the injected overrides have something
    to hide, and a width readout to show the resize in action.
    """
    t = html.escape(str(title))

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <title>{t}</title>
  <style>
    :root {{
      --bg: #ffffff;
      --text: #11181c;
      --muted: #687076;
      --border: rgba(0,0,0,0.08);
      --accent: #006fee;
    }}
    * {{ box-sizing: border-box; }}
    body {{
      margin: 0;
      font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Arial;
      background: var(--bg);
      color: var(--text);
    }}
    #__next {{ display: flex; flex-direction: column; min-height: 100vh; }}
    .layout {{ display: flex; flex: 1; }}
    .nextra-sidebar-container {{
      width: 220px;
      flex-shrink: 0;
      border-right: 1px solid var(--border);
      padding: 16px;
      color: var(--muted);
    }}
    main {{ flex: 1; padding: 20px; }}
    .card {{
      border: 1px solid var(--border);
      border-radius: 14px;
      padding: 16px;
      margin-bottom: 14px;
    }}
    .readout {{
      font-variant-numeric: tabular-nums;
      font-weight: 700;
      color: var(--accent);
    }}
    .cols {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(160px, 1fr)); gap: 12px; }}
    footer {{
      border-top: 1px solid var(--border);
      padding: 16px;
      color: var(--muted);
    }}
  </style>
</head>
<body>
  <div id="__next">
    <div class="layout">
      <aside class="nextra-sidebar-container">
        <p>Getting started</p>
        <p>Components</p>
        <p>Customization</p>
      </aside>
      <main>
        <div class="card">
          <h1>{t}</h1>
          <p>Viewport width: <span class="readout" id="vw">-</span></p>
        </div>
        <div class="cols">
          <div class="card">One</div>
          <div class="card">Two</div>
          <div class="card">Three</div>
          <div class="card">Four</div>
        </div>
      </main>
    </div>
    <div class="nx-pb-[env(safe-area-inset-bottom)]"></div>
    <footer>Demo footer</footer>
  </div>
  <script>
    (function () {{
      var el = document.getElementById("vw");
      function update() {{ el.textContent = window.innerWidth + "px"; }}
      window.addEventListener("resize", update);
      update();
    }})();
  </script>
</body>
</html>
"""
