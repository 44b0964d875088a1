"""
GeoCompact Web Application.

A FastAPI web server that accepts GeoJSON uploads, compresses them, and
returns the smaller document as a download. Recent compressions are kept in
a small history file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import HTMLResponse, Response

from . import __version__
from .compressor import compress_async, validate
from .history import HistoryStore
from .options import CompressionOptions

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_PATH = Path.home() / ".geocompact" / "history.json"
ALLOWED_EXTENSIONS = (".json", ".geojson")


def get_history_store() -> HistoryStore:
    return HistoryStore(os.environ.get("GEOCOMPACT_HISTORY", DEFAULT_HISTORY_PATH))


app = FastAPI(
    title="GeoCompact",
    description="Shrink GeoJSON files by rounding coordinates, simplifying lines and dropping empty values",
    version=__version__,
)


# HTML template for the upload page
HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>GeoCompact</title>
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: linear-gradient(135deg, #11998e 0%, #38ef7d 100%);
            min-height: 100vh;
            display: flex;
            justify-content: center;
            align-items: center;
            margin: 0;
        }

        .container {
            background: white;
            border-radius: 20px;
            box-shadow: 0 20px 60px rgba(0, 0, 0, 0.3);
            padding: 40px;
            max-width: 520px;
            width: 100%;
        }

        h1 { text-align: center; color: #333; }
        .subtitle { text-align: center; color: #666; margin-bottom: 24px; }
        .options { display: grid; grid-template-columns: 1fr 1fr; gap: 12px; margin: 20px 0; }
        .submit-btn {
            width: 100%;
            padding: 15px;
            background: #11998e;
            color: white;
            border: none;
            border-radius: 10px;
            font-size: 1.1em;
            cursor: pointer;
        }
        .error { color: #c0392b; display: none; margin-top: 16px; }
        .error.visible { display: block; }
        .stats { display: none; margin-top: 20px; }
        .stats.visible { display: grid; grid-template-columns: 1fr 1fr; gap: 10px; }
        .stat-value { font-size: 1.4em; font-weight: 600; color: #11998e; }
        .stat-label { color: #666; font-size: 0.85em; }
    </style>
</head>
<body>
    <div class="container">
        <h1>GeoCompact</h1>
        <p class="subtitle">Make your GeoJSON files smaller</p>

        <form id="upload-form" enctype="multipart/form-data">
            <input type="file" id="file-input" name="file" accept=".json,.geojson">
            <div class="options">
                <label>Precision <input type="number" id="precision" min="1" max="10" value="6"></label>
                <label><input type="checkbox" id="simplify" checked> Simplify lines</label>
                <label>Tolerance <input type="number" id="epsilon" step="0.00001" value="0.0001"></label>
                <label><input type="checkbox" id="sanitize" checked> Clean properties</label>
            </div>
            <button type="submit" class="submit-btn" id="submit-btn">Compress</button>
        </form>

        <div class="error" id="error"></div>

        <div class="stats" id="stats">
            <div><div class="stat-value" id="stat-original">-</div><div class="stat-label">Original</div></div>
            <div><div class="stat-value" id="stat-compressed">-</div><div class="stat-label">Compressed</div></div>
            <div><div class="stat-value" id="stat-ratio">-</div><div class="stat-label">Ratio</div></div>
            <div><div class="stat-value" id="stat-saved">-</div><div class="stat-label">Saved</div></div>
        </div>
    </div>

    <script>
        const form = document.getElementById('upload-form');
        const error = document.getElementById('error');
        const stats = document.getElementById('stats');

        form.addEventListener('submit', async (e) => {
            e.preventDefault();
            error.classList.remove('visible');
            stats.classList.remove('visible');

            const fileInput = document.getElementById('file-input');
            if (!fileInput.files.length) {
                error.textContent = 'Please select a file';
                error.classList.add('visible');
                return;
            }

            const formData = new FormData();
            formData.append('file', fileInput.files[0]);
            const params = new URLSearchParams({
                precision: document.getElementById('precision').value,
                simplify: document.getElementById('simplify').checked,
                simplify_epsilon: document.getElementById('epsilon').value,
                sanitize_properties: document.getElementById('sanitize').checked,
            });

            try {
                const response = await fetch('/compress?' + params, { method: 'POST', body: formData });
                if (!response.ok) {
                    const data = await response.json();
                    throw new Error(data.detail || 'Failed to process file');
                }

                const statsData = JSON.parse(response.headers.get('X-Stats') || '{}');
                document.getElementById('stat-original').textContent = statsData.original_size + ' B';
                document.getElementById('stat-compressed').textContent = statsData.compressed_size + ' B';
                document.getElementById('stat-ratio').textContent = statsData.compression_ratio + '%';
                document.getElementById('stat-saved').textContent = statsData.saved_percentage + '%';
                stats.classList.add('visible');

                const blob = await response.blob();
                const url = window.URL.createObjectURL(blob);
                const a = document.createElement('a');
                a.href = url;
                a.download = response.headers.get('Content-Disposition')?.split('filename=')[1]?.replace(/"/g, '') || 'compressed.geojson';
                document.body.appendChild(a);
                a.click();
                window.URL.revokeObjectURL(url);
                a.remove();
            } catch (err) {
                error.textContent = err.message;
                error.classList.add('visible');
            }
        });
    </script>
</body>
</html>
"""


async def read_upload(file: UploadFile) -> bytes:
    """Read an uploaded GeoJSON file, rejecting bad extensions and empty files."""
    filename = file.filename or "unknown"
    ext = Path(filename).suffix.lower()

    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail="Unsupported file format. Please upload a .json or .geojson file."
        )

    content = await file.read()

    if not content:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    return content


@app.get("/", response_class=HTMLResponse)
@app.head("/")
async def index():
    """Serve the main upload page."""
    return HTML_TEMPLATE


@app.post("/compress")
async def compress_file(
    file: UploadFile = File(...),
    precision: int = Query(6),
    simplify: bool = Query(True),
    simplify_epsilon: float = Query(0.0001),
    sanitize_properties: bool = Query(True),
):
    """
    Compress an uploaded GeoJSON file.

    Returns the compressed document as a download, with size statistics
    in the X-Stats header.
    """
    content = await read_upload(file)

    try:
        options = CompressionOptions(
            precision=precision,
            simplify=simplify,
            simplify_epsilon=simplify_epsilon,
            sanitize_properties=sanitize_properties,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result = await compress_async(content, options)
    except Exception as e:
        logger.exception("Compression of %s failed", file.filename)
        raise HTTPException(
            status_code=500,
            detail=f"Error processing file: {str(e)}"
        )

    if not result.ok:
        raise HTTPException(status_code=400, detail=result.error)

    base_name = Path(file.filename or "unknown").stem
    get_history_store().add(
        name=file.filename or base_name,
        geojson=result.compressed,
        original_size=result.original_size,
        compressed_size=result.compressed_size,
        compression_ratio=result.compression_ratio,
    )

    headers = {
        "Content-Disposition": f'attachment; filename="{base_name}_compressed.geojson"',
        "X-Stats": json.dumps(result.stats())
    }

    return Response(
        content=result.compressed.encode("utf-8"),
        media_type="application/geo+json",
        headers=headers
    )


@app.post("/validate")
async def validate_file(file: UploadFile = File(...)):
    """Check whether an uploaded file is GeoJSON the compressor accepts."""
    content = await read_upload(file)
    return validate(content).to_dict()


@app.get("/history")
async def list_history():
    """Recent compressions, newest first."""
    return [item.to_dict() for item in get_history_store().list()]


@app.get("/history/{item_id}")
async def get_history_item(item_id: str):
    item = get_history_store().get(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="History item not found.")
    return item.to_dict()


@app.delete("/history/{item_id}")
async def delete_history_item(item_id: str):
    if not get_history_store().remove(item_id):
        raise HTTPException(status_code=404, detail="History item not found.")
    return {"deleted": item_id}


@app.delete("/history")
async def clear_history():
    get_history_store().clear()
    return {"cleared": True}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "geocompact"}


def main(host: Optional[str] = None, port: Optional[int] = None):
    """Run the application with uvicorn."""
    import uvicorn
    uvicorn.run(
        app,
        host=host or os.environ.get("GEOCOMPACT_HOST", "0.0.0.0"),
        port=port or int(os.environ.get("GEOCOMPACT_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
