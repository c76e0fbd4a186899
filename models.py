# models.py — pydantic models for the mask endpoint
from typing import Any

from pydantic import BaseModel, Field

REQUIRED_FIELDS = (
    "video_width",
    "video_height",
    "video_duration_sec",
    "mask_y_start",
    "mask_y_end",
)


class MaskRequest(BaseModel):
    video_width: int = Field(..., gt=0, description="pixels")
    video_height: int = Field(..., gt=0, description="pixels")
    video_duration_sec: float = Field(..., gt=0, description="seconds")
    mask_y_start: int = Field(..., ge=0, description="top edge of the band, pixels")
    mask_y_end: int = Field(..., ge=0, description="bottom edge of the band, pixels")

    @property
    def mask_height(self) -> int:
        # start/end ordering is left to ffmpeg
        return self.mask_y_end - self.mask_y_start

    @property
    def dimensions(self) -> str:
        return f"{self.video_width}x{self.video_height}"


class MaskVideoResult(BaseModel):
    success: bool = True
    mask_video_url: str
    file_size_mb: str
    duration_sec: Any  # echoed verbatim from the request body
    dimensions: str
