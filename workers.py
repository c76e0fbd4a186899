# workers.py — background tasks (sweep leftover scratch files)

import os, time, asyncio

from config import Settings
from utils import MASK_PREFIX, MASK_EXT


def cleanup_once(tmp_dir: str, max_age_sec: int) -> int:
    cutoff = time.time() - max_age_sec
    removed = 0
    try:
        names = os.listdir(tmp_dir)
    except OSError:
        return 0
    for name in names:
        if not (name.startswith(MASK_PREFIX) and name.endswith(MASK_EXT)):
            continue
        path = os.path.join(tmp_dir, name)
        try:
            if os.path.isfile(path) and os.path.getmtime(path) < cutoff:
                os.remove(path); removed += 1
        except OSError:
            pass
    if removed:
        print(f"🧹 Removed {removed} stale mask files from {tmp_dir}")
    return removed


async def start_cleanup_task(settings: Settings):
    while True:
        await asyncio.to_thread(cleanup_once, settings.tmp_dir, settings.scratch_max_age_sec)
        await asyncio.sleep(settings.clean_interval_sec)
