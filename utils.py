# utils.py — ffmpeg helpers, scratch names, sizes

import os, time, uuid, asyncio
from typing import List, Tuple

from models import MaskRequest

MASK_PREFIX = "mask_"
MASK_EXT = ".mp4"
MASK_FPS = 30
MASK_PIX_FMT = "yuv420p"
MASK_PRESET = "ultrafast"
MASK_CRF = 28
MASK_THREADS = 2


def mask_filename() -> str:
    return f"{MASK_PREFIX}{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}{MASK_EXT}"


def mb_text(size_bytes: int) -> str:
    return f"{size_bytes / (1024 * 1024):.2f}"


def _num(x) -> str:
    # 2.0 -> "2", 2.5 -> "2.5"
    return str(int(x)) if float(x).is_integer() else str(x)


def build_mask_cmd(req: MaskRequest, out_path: str, ffmpeg_bin: str = "ffmpeg") -> List[str]:
    source = f"color=c=black:s={req.video_width}x{req.video_height}:d={_num(req.video_duration_sec)}"
    band = (
        f"drawbox=y={req.mask_y_start}:color=white@1:"
        f"width={req.video_width}:height={req.mask_height}:t=fill"
    )
    return [
        ffmpeg_bin, "-hide_banner", "-loglevel", "error",
        "-f", "lavfi", "-i", source,
        "-vf", band,
        "-r", str(MASK_FPS), "-pix_fmt", MASK_PIX_FMT,
        "-threads", str(MASK_THREADS),
        "-preset", MASK_PRESET, "-crf", str(MASK_CRF),
        "-y", out_path,
    ]


async def _run(cmd, timeout=600) -> Tuple[int, str]:
    proc = await asyncio.create_subprocess_exec(
        *cmd, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
    )
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        return (1, f"Timed out after {timeout}s")
    out = (stdout or b"").decode(errors="ignore") + "\n" + (stderr or b"").decode(errors="ignore")
    return proc.returncode, out.strip()


async def render_mask_video(req: MaskRequest, out_path: str, ffmpeg_bin: str = "ffmpeg", timeout=600):
    """Run ffmpeg for one mask video. Raises RuntimeError if nothing usable came out."""
    cmd = build_mask_cmd(req, out_path, ffmpeg_bin)
    code, err = await _run(cmd, timeout=timeout)
    if code != 0 or not os.path.exists(out_path):
        raise RuntimeError(f"ffmpeg failed (exit {code}): {err[:500]}")


def read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def remove_quietly(path: str) -> bool:
    try:
        os.remove(path)
        return True
    except OSError:
        return False
