"""Simple web interface for GPX slope profiles."""

import base64
import io
import logging
import re

from flask import Flask, render_template_string, request, send_file, abort

from gpx_slope import __version_date__, get_git_hash
from gpx_slope.charts import MIME_TYPES, SUPPORTED_FORMATS, render_chart, render_profile
from gpx_slope.config import get_defaults
from gpx_slope.formatters import format_elevation_range, format_meters, format_slope_range
from gpx_slope.models import ProcessingOptions
from gpx_slope.parser import ParseError
from gpx_slope.pipeline import compute

logger = logging.getLogger(__name__)

app = Flask(__name__)
# The hidden gpx_text field holds a whole GPX document
app.config["MAX_FORM_MEMORY_SIZE"] = 16 * 1024 * 1024

STATUS_READY = "Upload a GPX file to begin."
STATUS_OK = "GPX processed successfully."
STATUS_NO_FILE = "No file selected."

HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{% if result %}{{ result.title }} | {% endif %}GPX Slope Profile</title>
    <style>
        body { font-family: Inter, sans-serif; background: #0f1b21; color: #e9f0f2; margin: 0; padding: 20px; }
        .container { max-width: 1200px; margin: 0 auto; }
        form { display: flex; flex-wrap: wrap; gap: 12px; align-items: end; margin-bottom: 16px; }
        label { display: flex; flex-direction: column; font-size: 0.85em; gap: 4px; }
        .status { margin: 8px 0 16px; color: #a9b7bd; }
        .status.error { color: #ff6b6b; }
        .status.warn { color: #ffcc66; }
        .kpis { display: flex; gap: 24px; margin-bottom: 16px; }
        .kpi-value { font-size: 1.4em; font-weight: 600; }
        .chart img { width: 100%; background: white; border-radius: 6px; margin-bottom: 16px; }
        footer { font-size: 0.75em; color: #6b7b80; margin-top: 24px; }
    </style>
</head>
<body>
<div class="container">
    <h1>GPX Slope Profile</h1>
    <form method="post" enctype="multipart/form-data" action="/">
        <label>GPX file <input type="file" name="gpx" accept=".gpx,application/gpx+xml,application/xml"></label>
        {% if gpx_text %}<input type="hidden" name="gpx_text" value="{{ gpx_text }}">{% endif %}
        <label>Title <input type="text" name="title" value="{{ form.title }}"></label>
        <label>Min step (m) <input type="number" name="min_step" min="0" max="50" step="0.5" value="{{ form.min_step }}"></label>
        <label>Smoothing
            <select name="smooth">
                <option value="on" {% if form.smooth %}selected{% endif %}>On</option>
                <option value="off" {% if not form.smooth %}selected{% endif %}>Off</option>
            </select>
        </label>
        <label>Window <input type="number" name="smooth_window" min="1" max="101" step="2" value="{{ form.smooth_window }}"></label>
        <button type="submit">Process</button>
        <button type="submit" formaction="/export/png" {% if not result %}disabled{% endif %}>Export PNG</button>
        <button type="submit" formaction="/export/svg" {% if not result %}disabled{% endif %}>Export SVG</button>
    </form>
    <div class="status {{ status_kind }}" id="status">{{ status }}</div>
    {% if result %}
    <h2>{{ result.title }}</h2>
    <div class="kpis">
        <div><div>Points</div><div class="kpi-value" id="kPoints">{{ result.points }}</div></div>
        <div><div>Distance</div><div class="kpi-value" id="kDist">{{ result.distance }}</div></div>
        <div><div>Min / max elevation</div><div class="kpi-value" id="kMinMax">{{ result.elevation_range }}</div></div>
        <div><div>Slope range</div><div class="kpi-value">{{ result.slope_range }}</div></div>
    </div>
    {% if result.slope_svg %}
    <div class="chart"><img id="chartSlope" alt="Slope" src="data:image/svg+xml;base64,{{ result.slope_svg }}"></div>
    {% endif %}
    {% if result.elevation_svg %}
    <div class="chart"><img id="chartElevation" alt="Elevation" src="data:image/svg+xml;base64,{{ result.elevation_svg }}"></div>
    {% endif %}
    {% endif %}
    <footer>{{ version_date }} ({{ git_hash }})</footer>
</div>
</body>
</html>
"""


def _form_values(defaults: dict) -> dict:
    """Read processing settings from the request form, falling back to defaults."""
    form = request.form
    smooth = form.get("smooth")
    return {
        "title": form.get("title", ""),
        "min_step": form.get("min_step") or defaults["min_step"],
        "smooth": defaults["smooth"] if smooth is None else smooth == "on",
        "smooth_window": form.get("smooth_window") or defaults["smooth_window"],
    }


def _options_from_form(values: dict) -> ProcessingOptions:
    return ProcessingOptions(
        min_step=values["min_step"],
        smooth=values["smooth"],
        smooth_window=values["smooth_window"],
        title=values["title"] or None,
    )


def _uploaded_text() -> str | None:
    """Return the uploaded GPX as text, or None if no file was sent.

    Without a new upload, the GPX carried over from the last rendered page
    is used; browsers do not resend a file input after a reload.
    """
    upload = request.files.get("gpx")
    if upload is not None and upload.filename:
        return upload.read().decode("utf-8", errors="replace")
    return request.form.get("gpx_text") or None


def _svg_b64(series, line_color: str, area_color: str | None = None) -> str | None:
    if series is None:
        return None
    svg = render_chart(series, fmt="svg", line_color=line_color, area_color=area_color)
    return base64.b64encode(svg).decode("ascii")


def _render(
    form: dict,
    status: str,
    status_kind: str = "",
    result: dict | None = None,
    gpx_text: str = "",
    code: int = 200,
):
    html = render_template_string(
        HTML_TEMPLATE,
        form=form,
        status=status,
        status_kind=status_kind,
        result=result,
        gpx_text=gpx_text,
        version_date=__version_date__,
        git_hash=get_git_hash(),
    )
    return html, code


@app.route("/", methods=["GET", "POST"])
def index():
    defaults = get_defaults()
    if request.method == "GET":
        form = {
            "title": "",
            "min_step": defaults["min_step"],
            "smooth": defaults["smooth"],
            "smooth_window": defaults["smooth_window"],
        }
        return _render(form, STATUS_READY, "warn")

    form = _form_values(defaults)
    text = _uploaded_text()
    if text is None:
        return _render(form, STATUS_NO_FILE, "warn")

    try:
        profile = compute(text, _options_from_form(form))
    except ParseError as e:
        logger.warning("GPX upload rejected: %s", e)
        return _render(form, f"Error processing GPX: {e}", "error")

    form["title"] = profile.title
    result = {
        "title": profile.title,
        "points": profile.point_count,
        "distance": format_meters(profile.stats.total_distance),
        "elevation_range": format_elevation_range(profile.stats),
        "slope_range": format_slope_range(profile.stats),
        "slope_svg": _svg_b64(profile.slope_chart, defaults["slope_line_color"]),
        "elevation_svg": _svg_b64(
            profile.elevation_chart,
            defaults["elevation_line_color"],
            defaults["elevation_area_color"],
        ),
    }
    return _render(form, STATUS_OK, "", result, gpx_text=text)


def _download_name(title: str, fmt: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", title).strip("_") or "profile"
    return f"{slug}.{fmt}"


@app.route("/export/<fmt>", methods=["POST"])
def export(fmt: str):
    """Recompute the uploaded GPX and return both charts as an image file."""
    if fmt not in SUPPORTED_FORMATS:
        abort(404)

    defaults = get_defaults()
    form = _form_values(defaults)
    text = _uploaded_text()
    if text is None:
        return STATUS_NO_FILE, 400

    try:
        profile = compute(text, _options_from_form(form))
    except ParseError as e:
        return f"Error processing GPX: {e}", 400

    data = render_profile(
        profile,
        fmt=fmt,
        slope_line_color=defaults["slope_line_color"],
        elevation_line_color=defaults["elevation_line_color"],
        elevation_area_color=defaults["elevation_area_color"],
    )
    return send_file(
        io.BytesIO(data),
        mimetype=MIME_TYPES[fmt],
        as_attachment=True,
        download_name=_download_name(profile.title, fmt),
    )


def main():
    """Run the web server."""
    import os
    port = int(os.environ.get("PORT", 5050))
    print("Starting GPX Slope web server...")
    print(f"Open http://localhost:{port} in your browser")
    app.run(host="0.0.0.0", port=port, debug=True)


if __name__ == "__main__":
    main()
