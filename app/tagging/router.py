from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api.schemas import ErrorOut
from app.core.llm.deps import get_completion_client
from app.core.settings import get_settings
from app.tagging.prompt import PromptConfig, get_prompt_config
from app.tagging.schemas import TaggingRequest
from app.tagging.service import CompletionClient, TaggingService

router = APIRouter(prefix="/api", tags=["tags"])
logger = logging.getLogger("app.tagging")


@router.post(
    "/tags",
    summary="Generate tags",
    description=(
        "Send `input` to the configured Azure OpenAI deployment with a JSON-schema constrained "
        "response format. The model's JSON object is returned at the top level together with "
        "`usage` (raw token counts) and `pricing` (USD/THB cost breakdown), either of which may "
        "be null."
    ),
    responses={
        400: {"model": ErrorOut, "description": "Missing `input` or malformed body."},
        413: {"model": ErrorOut, "description": "Request body exceeds the configured size limit."},
        500: {"model": ErrorOut, "description": "Configuration error or unusable model output."},
    },
)
async def create_tags(
    payload: TaggingRequest,
    request: Request,
    llm_client: CompletionClient = Depends(get_completion_client),
    prompt_config: PromptConfig = Depends(get_prompt_config),
) -> JSONResponse:
    """
    Generate tags for one piece of content.

    TaggingError raised anywhere in the pipeline is rendered by the app-level handler.
    The input and the model output are never logged.
    """

    settings = get_settings()
    svc = TaggingService(
        llm_client=llm_client,
        prompt_config=prompt_config,
        deployment=settings.azure_openai_deployment_name,
    )
    result = await svc.generate_tags(payload)

    logger.info(
        "Tags generated",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "deployment": settings.azure_openai_deployment_name,
        },
    )
    return JSONResponse(content=result)
