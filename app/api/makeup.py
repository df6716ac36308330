"""Makeup analysis API endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.api.models.analysis import AnalysisResponse, EnginesResponse, GenerationRequestBody
from app.core.exceptions import DecodeError, ImageValidationError
from app.core.logging import get_logger
from app.domain.entities.image import RejectionReason
from app.domain.value_objects.attributes import MakeupStyle, Occasion
from app.domain.value_objects.generation import GenerationResult
from app.infrastructure.dependencies import get_analysis_service, get_generation_orchestrator
from app.services.generation import ImageGenerationOrchestrator
from app.services.makeup_analysis import MakeupAnalysisService

logger = get_logger(__name__)
router = APIRouter(
    tags=["makeup"],
    responses={
        400: {"description": "Invalid request"},
        500: {"description": "Internal server error"}
    }
)

REJECTION_STATUS = {
    RejectionReason.UNSUPPORTED_TYPE.value: 415,
    RejectionReason.TOO_LARGE.value: 413,
    RejectionReason.EMPTY_FILE.value: 400,
}


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    summary="Analyze a face photo",
    description="Detects the face, classifies face shape and skin tone, and builds a makeup plan.",
    responses={
        413: {
            "description": "File too large",
            "content": {
                "application/json": {
                    "example": {"detail": "File is too large. Please upload an image of 5MB or less."}
                }
            },
        },
        415: {
            "description": "Unsupported file type",
            "content": {
                "application/json": {
                    "example": {"detail": "Unsupported file type. Please upload a JPEG, PNG or WebP image."}
                }
            },
        },
        422: {
            "description": "Image could not be decoded",
            "content": {
                "application/json": {
                    "example": {"detail": "The uploaded file could not be read as an image."}
                }
            },
        },
    },
)
async def analyze_face(
    file: UploadFile = File(..., description="Face photo (JPEG, PNG or WebP)"),
    region: Optional[str] = Form(None, description="Regional style preference, e.g. japan or korea"),
    style: MakeupStyle = Form(MakeupStyle.NATURAL),
    occasion: Occasion = Form(Occasion.DAILY),
    service: MakeupAnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    """Analyze an uploaded face photo.

    Args:
        file: Uploaded image
        region: Regional style preference
        style: Requested look
        occasion: Occasion for the look
        service: Analysis service provided by dependency injection

    Returns:
        AnalysisResponse containing the analysis and makeup plan

    Raises:
        HTTPException: If the upload is rejected or processing fails
    """
    data = await file.read()
    try:
        outcome = await service.analyze(
            data,
            file.content_type or "",
            region=region,
            style=style,
            occasion=occasion,
        )
        return AnalysisResponse.from_service_response(outcome)

    except ImageValidationError as e:
        logger.warning("Upload rejected", reason=e.reason, filename=file.filename)
        raise HTTPException(status_code=REJECTION_STATUS.get(e.reason, 400), detail=str(e))
    except DecodeError as e:
        logger.error("Invalid image data", error=str(e), filename=file.filename)
        raise HTTPException(
            status_code=422,
            detail="The uploaded file could not be read as an image."
        )
    except Exception as e:
        logger.error("Unexpected error during face analysis",
                     error=str(e), exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred while processing the request"
        )


@router.post(
    "/generate",
    response_model=GenerationResult,
    summary="Generate an after image",
    description=(
        "Renders the planned look with the first available engine. Falls back to a local "
        "placeholder, so success is false only when even the placeholder fails."
    ),
)
async def generate_image(
    body: GenerationRequestBody,
    orchestrator: ImageGenerationOrchestrator = Depends(get_generation_orchestrator),
) -> GenerationResult:
    """Generate an "after" image for an analysis.

    Args:
        body: Analysis, plan and output preferences
        orchestrator: Generation orchestrator provided by dependency injection

    Returns:
        GenerationResult with the generated image or an error message
    """
    try:
        return await orchestrator.generate(body.to_domain())
    except Exception as e:
        logger.error("Unexpected error during image generation",
                     error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="An unexpected error occurred.")


@router.get(
    "/engines",
    response_model=EnginesResponse,
    summary="List image generation engines",
)
async def list_engines(
    orchestrator: ImageGenerationOrchestrator = Depends(get_generation_orchestrator),
) -> EnginesResponse:
    """List the engines a generation request can currently use."""
    return EnginesResponse(
        engines=orchestrator.available_engines(),
        has_real_engine=orchestrator.has_real_engine(),
        estimated_seconds=orchestrator.estimated_seconds(has_reference_image=False),
    )
