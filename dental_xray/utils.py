# dental_xray/utils.py
from io import BytesIO
from typing import List, Tuple

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from .errors import InputError
from .schemas import Coordinates, Finding


def percent_box_to_pixels(coords: Coordinates, size: Tuple[int, int]) -> Tuple[int, int, int, int]:
    """Convert a percentage box to [x_min, y_min, x_max, y_max] pixels, clamped to the image."""
    w, h = size
    x_min = max(0, int(w * coords.x / 100))
    y_min = max(0, int(h * coords.y / 100))
    x_max = min(w - 1, int(w * (coords.x + coords.width) / 100))
    y_max = min(h - 1, int(h * (coords.y + coords.height) / 100))
    return x_min, y_min, x_max, y_max


def load_image(image_bytes: bytes) -> Image.Image:
    try:
        with BytesIO(image_bytes) as bio:
            img = Image.open(bio)
            img.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise InputError("Invalid image file", detail=str(exc)) from exc
    return img.convert("RGBA")


def draw_findings_on_image(image_bytes: bytes, findings: List[Finding], outline_width: int = 3) -> bytes:
    """
    Draw each finding's box and caption on the image and return PNG bytes.

    Finding coordinates are percentages of the image bounds, so boxes scale
    with whatever resolution was uploaded.
    """
    img = load_image(image_bytes)
    font = ImageFont.load_default()
    outline_color = (255, 0, 0, 255)
    fill_color = (255, 0, 0, 40)

    for finding in findings:
        x_min, y_min, x_max, y_max = percent_box_to_pixels(finding.coordinates, img.size)

        # translucent fill goes on its own layer
        overlay = Image.new("RGBA", img.size, (255, 255, 255, 0))
        ImageDraw.Draw(overlay).rectangle([x_min, y_min, x_max, y_max], fill=fill_color)
        img = Image.alpha_composite(img, overlay)
        draw = ImageDraw.Draw(img)

        for i in range(outline_width):
            draw.rectangle([x_min - i, y_min - i, x_max + i, y_max + i], outline=outline_color)

        text = f"{finding.type} ({finding.confidence}%)"
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        text_w, text_h = right - left, bottom - top
        text_x = x_min
        text_y = max(0, y_min - text_h - 4)

        draw.rectangle([text_x, text_y, text_x + text_w + 6, text_y + text_h + 4], fill=(0, 0, 0, 160))
        draw.text((text_x + 3, text_y + 2), text, fill=(255, 255, 255, 255), font=font)

    with BytesIO() as out_bio:
        img.convert("RGB").save(out_bio, format="PNG")
        return out_bio.getvalue()
