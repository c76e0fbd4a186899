# main.py — mask video generator: ffmpeg render -> Supabase Storage

import os
import asyncio

import uvicorn
from fastapi import FastAPI, Request, Depends
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from config import Settings, get_settings
from models import MaskRequest, MaskVideoResult, REQUIRED_FIELDS
from storage import MaskStorage, get_storage
from utils import mask_filename, mb_text, render_mask_video, read_bytes, remove_quietly
from workers import start_cleanup_task

SERVICE_NAME = "mask-video-generator"

app = FastAPI(title="Mask Video Generator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    settings = get_settings()
    os.makedirs(settings.tmp_dir, exist_ok=True)
    asyncio.create_task(start_cleanup_task(settings))
    print(f"🚀 Mask video generator running on port {settings.port}")


@app.get("/health")
def health():
    return {"status": "ok", "service": SERVICE_NAME}


@app.post("/create-mask-video")
async def create_mask_video(
    request: Request,
    settings: Settings = Depends(get_settings),
    storage: MaskStorage = Depends(get_storage),
):
    try:
        body = await request.json()
    except ValueError:
        body = None

    # zero counts as missing
    if not isinstance(body, dict) or not all(body.get(k) for k in REQUIRED_FIELDS):
        return JSONResponse({"error": "Missing required parameters"}, status_code=400)

    try:
        req = MaskRequest(**{k: body[k] for k in REQUIRED_FIELDS})
    except ValidationError as e:
        return JSONResponse({"error": "Invalid parameters", "details": str(e)}, status_code=400)

    print("🎬 Creating mask video:", {k: body[k] for k in REQUIRED_FIELDS})

    filename = mask_filename()
    output_path = os.path.join(settings.tmp_dir, filename)

    try:
        # fail on a bad Supabase config before spending time in ffmpeg
        storage.connect()

        print("⚙️ Running ffmpeg...")
        await render_mask_video(req, output_path, settings.ffmpeg_bin, timeout=settings.encode_timeout_sec)
        print("✅ Mask video rendered:", output_path)

        data = await asyncio.to_thread(read_bytes, output_path)

        print("☁️ Uploading to Supabase Storage...")
        await asyncio.to_thread(storage.upload, filename, data)
        public_url = storage.public_url(filename)
        print("✅ Mask video uploaded:", public_url)

        result = MaskVideoResult(
            mask_video_url=public_url,
            file_size_mb=mb_text(len(data)),
            duration_sec=body["video_duration_sec"],
            dimensions=req.dimensions,
        )
        return JSONResponse(result.model_dump())

    except Exception as e:
        print(f"❌ /create-mask-video error: {e}")
        return JSONResponse(
            {"error": "Failed to create mask video", "details": str(e)},
            status_code=500,
        )
    finally:
        await asyncio.to_thread(remove_quietly, output_path)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
