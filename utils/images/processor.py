"""
Image processing utilities for Brand Audit.

Screenshots are re-encoded as JPEG and bounded in size before they are
sent to Claude or returned to the caller.
"""

import base64
import io

from PIL import Image


def encode_screenshot(
    screenshot_bytes: bytes,
    max_dimension: int = 1800,
    quality: int = 80,
    max_file_size: int = 5_242_880,
) -> str:
    """
    Downscale (keeping aspect ratio) and JPEG-compress a screenshot.

    Args:
        screenshot_bytes: Raw screenshot bytes (any format Pillow reads)
        max_dimension: Maximum width/height in pixels
        quality: Starting JPEG quality
        max_file_size: Claude's per-image limit (5 MB)

    Returns:
        Base64-encoded JPEG
    """
    image = Image.open(io.BytesIO(screenshot_bytes))
    width, height = image.size

    if width > max_dimension or height > max_dimension:
        scale = max_dimension / max(width, height)
        image = image.resize(
            (max(1, int(width * scale)), max(1, int(height * scale))),
            Image.Resampling.LANCZOS,
        )

    # JPEG doesn't support transparency
    if image.mode == "RGBA":
        rgb_image = Image.new("RGB", image.size, (255, 255, 255))
        rgb_image.paste(image, mask=image.split()[3])
        image = rgb_image
    elif image.mode != "RGB":
        image = image.convert("RGB")

    buffer = io.BytesIO()
    while True:
        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=quality, optimize=True)
        if buffer.tell() <= max_file_size or quality <= 30:
            break
        quality -= 10

    return base64.b64encode(buffer.getvalue()).decode("utf-8")
