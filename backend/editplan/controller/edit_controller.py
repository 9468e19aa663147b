"""API routes for instruction planning and single-step image edits."""

from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from editplan.handlers.error_handler import INTERNAL_ERROR_MESSAGE, InvalidInputError
from editplan.models.edit_image import EditRequest
from editplan.models.instructions import InstructionRequest, InstructionResult
from editplan.services.edit_service.editor import ImageEditor
from editplan.services.edit_service.main import ImageEditing as ie
from editplan.services.gemini_client import GeminiClient
from editplan.services.instruction_service.main import InstructionPlanning as ip
from editplan.services.instruction_service.planner import InstructionPlanner
from editplan.utility.logger import AppLogger

router = APIRouter(tags=["Edit"])
logger = AppLogger.get_logger(__name__)


@router.post(
    "/generateInstructions",
    response_model=InstructionResult,
    response_model_exclude_none=True,
)
def generate_instructions(
    payload: InstructionRequest,
    build_planner: Callable[[], InstructionPlanner] = Depends(ip.get_planner_factory),
) -> InstructionResult:
    """Break a free-text editing request into ordered natural-language steps."""
    try:
        service = build_planner()
        return service.generate_instructions(payload.user_input, payload.options)
    except InvalidInputError:
        raise
    except Exception as e:
        logger.error(f"Error generating instructions: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )


@router.post("/editImage")
def edit_image(
    payload: EditRequest,
    build_editor: Callable[[], ImageEditor] = Depends(ie.get_editor_factory),
) -> JSONResponse:
    """
    Apply one instruction to a base64 PNG.
    The body is Gemini's response, unmodified.
    """
    try:
        service = build_editor()
        resp = service.edit_image(payload.prompt, payload.image)
        return JSONResponse(content=GeminiClient.to_payload(resp))
    except InvalidInputError:
        raise
    except Exception as e:
        logger.error(f"Error editing image: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )
