"""CLI tool for face analysis and makeup planning with visualization."""
import argparse
import asyncio
import base64
import mimetypes
import sys
from pathlib import Path
from typing import Optional, Tuple

import cv2
import numpy as np

from app.core.exceptions import CameraError, MakeupAIError
from app.core.logging import get_logger, setup_logging
from app.domain.entities.analysis import FaceAnalysisResult
from app.domain.value_objects.attributes import MakeupStyle, Occasion
from app.domain.value_objects.generation import GenerationRequest
from app.services.capture import CameraCapture
from app.services.detection import CompositeFaceDetector
from app.services.feature_extraction import FeatureExtractor
from app.services.generation import ImageGenerationOrchestrator
from app.services.image_processing import ImageProcessor
from app.services.makeup_analysis import MakeupAnalysisService
from app.services.recommendation import RecommendationEngine

logger = get_logger(__name__)

BOX_COLOR = (0, 180, 0)  # BGR
TEXT_COLOR = (255, 255, 255)


def draw_analysis(image: np.ndarray, analysis: FaceAnalysisResult) -> np.ndarray:
    """
    Draw the face box and classified attributes on a BGR image.

    Args:
        image: Image as decoded by cv2
        analysis: Analysis of the same image

    Returns:
        Annotated copy of the image
    """
    img_draw = image.copy()
    if not analysis.face_detected or analysis.bounding_box is None:
        cv2.putText(img_draw, "No face detected", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 0, 255), 2)
        return img_draw

    height, width = img_draw.shape[:2]
    left, top, box_width, box_height = analysis.bounding_box.to_pixels(width, height)
    cv2.rectangle(img_draw, (left, top), (left + box_width, top + box_height), BOX_COLOR, 3)

    for point in analysis.keypoints or []:
        cv2.circle(img_draw, (int(point.x * width), int(point.y * height)), 3, BOX_COLOR, -1)

    label = (
        f"{analysis.face_shape.value} / {analysis.skin_tone.value} "
        f"({analysis.confidence:.2f})"
    )
    font_scale = 0.6
    thickness = 2
    (text_width, text_height), _ = cv2.getTextSize(
        label, cv2.FONT_HERSHEY_SIMPLEX, font_scale, thickness
    )
    padding = 10
    label_top = max(0, top - text_height - padding * 2)
    cv2.rectangle(
        img_draw,
        (left, label_top),
        (left + text_width + padding, label_top + text_height + padding * 2),
        BOX_COLOR,
        -1
    )
    cv2.putText(
        img_draw,
        label,
        (left + padding // 2, label_top + text_height + padding),
        cv2.FONT_HERSHEY_SIMPLEX,
        font_scale,
        TEXT_COLOR,
        thickness
    )
    return img_draw


def read_image(image_path: Optional[str], camera_index: Optional[int]) -> Tuple[bytes, str, Path]:
    """Load the photo to analyze from a file or a camera frame.

    Returns:
        Raw bytes, their MIME type and the base path for output files
    """
    if camera_index is not None:
        with CameraCapture(device_index=camera_index) as camera:
            data = camera.capture_frame()
        return data, "image/jpeg", Path.cwd() / "camera.jpg"

    image_file = Path(image_path)
    if not image_file.exists():
        raise FileNotFoundError(f"Image file not found: {image_path}")
    mime_type = mimetypes.guess_type(image_file.name)[0] or "application/octet-stream"
    return image_file.read_bytes(), mime_type, image_file


def build_service() -> MakeupAnalysisService:
    return MakeupAnalysisService(
        processor=ImageProcessor(),
        detector=CompositeFaceDetector(),
        extractor=FeatureExtractor(),
        engine=RecommendationEngine(),
        orchestrator=ImageGenerationOrchestrator(),
    )


async def analyze_face(
    image_path: Optional[str],
    style: str,
    occasion: str,
    region: Optional[str] = None,
    camera_index: Optional[int] = None,
    generate: bool = False,
    save_output: bool = True,
) -> None:
    """
    Analyze a face photo and print its makeup plan.

    Args:
        image_path: Path to the image file, ignored when camera_index is set
        style: Requested look
        occasion: Occasion for the look
        region: Regional style preference
        camera_index: Capture the photo from this camera instead of a file
        generate: Also render an "after" image
        save_output: Whether to save the annotated image
    """
    try:
        image_bytes, mime_type, base_path = read_image(image_path, camera_index)

        service = build_service()
        await service.detector.initialize()
        outcome = await service.analyze(
            image_bytes, mime_type, region=region, style=style, occasion=occasion
        )
    except (FileNotFoundError, CameraError, MakeupAIError) as e:
        logger.error("Face analysis failed", error=str(e))
        sys.exit(1)

    analysis = outcome.analysis
    plan = outcome.plan
    logger.info(
        "Face analysis completed",
        face_detected=analysis.face_detected,
        confidence=f"{analysis.confidence:.2f}",
        detector=analysis.detector.value,
        face_shape=analysis.face_shape.value if analysis.face_shape else None,
        skin_tone=analysis.skin_tone.value if analysis.skin_tone else None,
        seasonal_type=analysis.seasonal_type.value if analysis.seasonal_type else None,
    )
    logger.info(
        "Makeup plan",
        style=plan.overall.style,
        suitability=plan.overall.suitability,
        total_time=plan.total_time,
        difficulty=plan.difficulty.value,
    )
    for i, suggestion in enumerate(plan.suggestions, 1):
        logger.info(
            f"Step {i}: {suggestion.title}",
            description=suggestion.description,
            difficulty=suggestion.difficulty.value,
            time=suggestion.time_estimate,
        )

    if save_output:
        # Draw on the upright, resized image the box was measured on
        asset = service.processor.process(image_bytes, mime_type)
        img = cv2.cvtColor(service.processor.load_pixels(asset), cv2.COLOR_RGB2BGR)
        output_path = base_path.parent / f"{base_path.stem}_analyzed.jpg"
        cv2.imwrite(str(output_path), draw_analysis(img, analysis))
        logger.info("Saved annotated image", path=str(output_path))

    if generate:
        result = await service.generate_image(
            GenerationRequest(
                analysis=analysis,
                plan=plan,
                style=outcome.style,
                occasion=outcome.occasion,
                region=outcome.region,
                reference_image=image_bytes,
            ),
            on_progress=lambda p: logger.info("Generation progress", stage=p.stage, progress=p.progress),
        )
        if not result.success:
            logger.error("Image generation failed", error=result.error)
            sys.exit(1)

        image = result.images[0]
        logger.info("Image generated", engine=result.engine.value,
                    processing_time_ms=result.processing_time_ms)
        if image.url.startswith("data:"):
            header, encoded = image.url.split(",", 1)
            extension = mimetypes.guess_extension(header[5:].split(";")[0]) or ".png"
            output_path = base_path.parent / f"{base_path.stem}_after{extension}"
            output_path.write_bytes(base64.b64decode(encoded))
            logger.info("Saved generated image", path=str(output_path))
        else:
            logger.info("Generated image available", url=image.url)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Analyze a face photo and suggest makeup")
    parser.add_argument("image_path", nargs="?", help="Path to the image file")
    parser.add_argument(
        "--style",
        choices=[s.value for s in MakeupStyle],
        default=MakeupStyle.NATURAL.value,
        help="Requested look"
    )
    parser.add_argument(
        "--occasion",
        choices=[o.value for o in Occasion],
        default=Occasion.DAILY.value,
        help="Occasion for the look"
    )
    parser.add_argument("--region", help="Regional style preference, e.g. japan or korea")
    parser.add_argument(
        "--camera",
        type=int,
        nargs="?",
        const=0,
        default=None,
        help="Capture the photo from a camera (optionally give the device index)"
    )
    parser.add_argument(
        "--generate",
        action="store_true",
        help="Also generate an after image"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Don't save the annotated image"
    )
    args = parser.parse_args()
    if args.image_path is None and args.camera is None:
        parser.error("an image path or --camera is required")

    setup_logging()
    asyncio.run(analyze_face(
        args.image_path,
        style=args.style,
        occasion=args.occasion,
        region=args.region,
        camera_index=args.camera,
        generate=args.generate,
        save_output=not args.no_save,
    ))


if __name__ == "__main__":
    main()
