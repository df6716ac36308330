"""Local placeholder renderer used when no remote engine can produce an image."""
import io
import uuid
from datetime import datetime, timezone
from typing import Tuple

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFont

from app.core.exceptions import FallbackRenderError
from app.core.logging import get_logger
from app.core.utils.image import to_data_url
from app.domain.entities.image import GeneratedImage
from app.domain.interfaces.generation.image_engine import ImageGenerationEngine
from app.domain.value_objects.attributes import MakeupStyle
from app.domain.value_objects.generation import GenerationEngine, GenerationRequest

logger = get_logger(__name__)

BASE_WIDTH = 512

STYLE_GRADIENTS = {
    MakeupStyle.NATURAL: ("#F5D5B8", "#F4B2A7"),
    MakeupStyle.GLAMOUR: ("#D4AF37", "#DC143C"),
    MakeupStyle.CUTE: ("#FFC0CB", "#FF7F50"),
    MakeupStyle.MATURE: ("#C8A2C8", "#8E4585"),
}


def gradient_colors(request: GenerationRequest) -> Tuple[str, str]:
    """Top and bottom gradient colors: the plan palette when present, else the style's."""
    if request.plan is not None:
        palette = request.plan.color_palette
        return palette.foundation, palette.blush
    return STYLE_GRADIENTS[request.style]


def render_placeholder(request: GenerationRequest) -> bytes:
    """Draw a vertical gradient with a caption and return PNG bytes.

    The output depends only on the request, so identical requests give
    identical images.
    """
    width = BASE_WIDTH
    height = max(1, round(BASE_WIDTH / request.aspect_ratio.ratio))
    top, bottom = (np.array(ImageColor.getrgb(color), dtype=np.float64) for color in gradient_colors(request))

    weights = np.linspace(0.0, 1.0, height)[:, None]
    rows = (top * (1 - weights) + bottom * weights).round().astype(np.uint8)
    pixels = np.repeat(rows[:, None, :], width, axis=1)

    img = Image.fromarray(pixels)
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    caption = [f"{request.style.value.capitalize()} makeup preview"]
    analysis = request.analysis
    if analysis.face_shape is not None and analysis.skin_tone is not None:
        caption.append(f"{analysis.face_shape.value} face / {analysis.skin_tone.value} skin")
    caption.append(f"occasion: {request.occasion.value}")

    y = height // 2 - 10 * len(caption)
    for line in caption:
        left, _, right, _ = draw.textbbox((0, 0), line, font=font)
        draw.text(((width - (right - left)) // 2, y), line, fill=(255, 255, 255), font=font)
        y += 20

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


class LocalPlaceholderRenderer(ImageGenerationEngine):
    """Always-configured engine that renders a placeholder locally."""

    name = GenerationEngine.LOCAL_FALLBACK

    @property
    def configured(self) -> bool:
        return True

    async def generate(self, prompt: str, request: GenerationRequest) -> GeneratedImage:
        try:
            png = render_placeholder(request)
        except Exception as e:
            logger.error("Placeholder rendering failed", error=str(e), exc_info=True)
            raise FallbackRenderError(f"Failed to render placeholder image: {e}")

        return GeneratedImage(
            id=str(uuid.uuid4()),
            url=to_data_url(png, "image/png"),
            prompt=prompt,
            engine=self.name.value,
            quality=request.quality.value,
            generated_at=datetime.now(timezone.utc),
            metadata={"placeholder": True, "aspect_ratio": request.aspect_ratio.value},
        )
