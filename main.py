from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse
from fastapi.middleware.cors import CORSMiddleware
import os
import logging
import traceback
from typing import Optional
from uuid import uuid4

from image_combiner.errors import FormatMismatchError, ImageDecodeError, UnsupportedFormatError
from image_combiner.pipeline import combine_files
from image_combiner.utils import configure_logging, load_config

cfg = load_config()
configure_logging(cfg)
logger = logging.getLogger(__name__)


APP_DIR = os.path.dirname(os.path.abspath(__file__))
INPUT_DIR = os.getenv("INPUT_DIR") or os.path.join(APP_DIR, cfg["paths"]["input_dir"])
OUTPUTS_DIR = os.getenv("OUTPUTS_DIR") or os.path.join(APP_DIR, cfg["paths"]["output_dir"])

app = FastAPI(title="Image Combiner Backend", version="0.1.0")

logger.info("Initializing FastAPI application")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def ensure_dirs() -> None:
    """Ensure upload and output directories exist."""
    try:
        os.makedirs(INPUT_DIR, exist_ok=True)
        os.makedirs(OUTPUTS_DIR, exist_ok=True)
        logger.debug(f"Directories ensured: INPUT_DIR={INPUT_DIR}, OUTPUTS_DIR={OUTPUTS_DIR}")
    except Exception as e:
        logger.error(f"Failed to ensure directories: {e}")
        logger.error(traceback.format_exc())
        raise


async def _store_upload(file: UploadFile) -> str:
    if not file.filename:
        logger.error("Upload failed: filename missing")
        raise HTTPException(status_code=400, detail="Filename missing")

    base_name = os.path.basename(file.filename)
    name, ext = os.path.splitext(base_name)
    dest_path = os.path.join(INPUT_DIR, f"{name}_{uuid4().hex[:8]}{ext}")
    try:
        with open(dest_path, "wb") as f:
            total_bytes = 0
            while True:
                chunk = await file.read(1024 * 1024)
                if not chunk:
                    break
                f.write(chunk)
                total_bytes += len(chunk)
        logger.info(f"Upload stored: {file.filename} -> {dest_path} ({total_bytes} bytes)")
    finally:
        await file.close()
    return dest_path


@app.get("/health")
def health() -> dict:
    logger.info("Health check endpoint called")
    return {"status": "ok"}


def _output_name(output_name: Optional[str], ext: str) -> str:
    if output_name is None:
        return f"combined_{uuid4().hex[:8]}{ext}"
    out_name = os.path.basename(output_name.strip())
    if not out_name.strip("."):
        logger.error(f"Invalid output name: {output_name!r}")
        raise HTTPException(status_code=400, detail="Invalid output name")
    return out_name


def _remove_uploads(paths) -> None:
    for p in paths:
        try:
            os.remove(p)
            logger.debug(f"Removed upload: {p}")
        except FileNotFoundError:
            continue


@app.post("/combine")
async def combine_endpoint(
    image_1: UploadFile = File(...),
    image_2: UploadFile = File(...),
    output_name: Optional[str] = Form(None),
):
    """Combine two uploaded images and return the result in their common format."""
    logger.info(f"Combine endpoint called with files: {image_1.filename}, {image_2.filename}")
    uploads = []
    try:
        out_name = _output_name(output_name, os.path.splitext(image_1.filename or "")[1])
        ensure_dirs()
        uploads.append(await _store_upload(image_1))
        uploads.append(await _store_upload(image_2))
        out_path = os.path.join(OUTPUTS_DIR, out_name)

        result = await run_in_threadpool(combine_files, uploads[0], uploads[1], out_path)
        logger.info(f"Combine successful: {out_path} ({result.width}x{result.height})")
        return FileResponse(out_path, filename=out_name, headers={
            "X-Image-Width": str(result.width),
            "X-Image-Height": str(result.height),
        })

    except HTTPException:
        raise
    except (FormatMismatchError, UnsupportedFormatError, ImageDecodeError) as e:
        logger.warning(f"Rejected combine request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error in combine: {e}")
        logger.error(traceback.format_exc())
        raise HTTPException(status_code=500, detail=f"Combine failed: {e}")
    finally:
        _remove_uploads(uploads)


@app.get("/output/{filename}")
def download_output(filename: str):
    safe_name = os.path.basename(filename)
    path = os.path.join(OUTPUTS_DIR, safe_name)
    if not os.path.isfile(path):
        logger.error(f"Output not found: {path}")
        raise HTTPException(status_code=404, detail="File not found")
    logger.info(f"Serving output: {path}")
    return FileResponse(path, filename=safe_name)


if __name__ == "__main__":
    import uvicorn
    try:
        port = int(os.getenv("PORT", "8000"))
        reload = os.getenv("RELOAD", "0") == "1"
        logger.info(f"Starting FastAPI server on port {port}, reload={reload}")
        uvicorn.run("main:app", host="0.0.0.0", port=port, reload=reload)
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        logger.error(traceback.format_exc())
        raise
