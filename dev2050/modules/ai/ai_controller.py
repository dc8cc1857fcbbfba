# dev2050/modules/ai/ai_controller.py

from fastapi import APIRouter, Depends, HTTPException, Request, status

from dev2050.common.feature_flags import require_beta_features
from dev2050.common.rate_limit import limiter
from dev2050.common.utils.global_messages import GlobalMessages
from dev2050.modules.ai import ai_service, schemas

router = APIRouter(prefix="/ai", tags=["ai"])

@router.get("/quote", response_model=schemas.QuoteResponse)
@limiter.limit("20/minute")
async def get_quote(request: Request):
    """
    Motivational quote for the home page banner. Always answers, falling back
    to a canned quote when the model is unavailable.
    """
    quote = await ai_service.get_motivational_quote()
    return schemas.QuoteResponse(quote=quote)

@router.post("/answer", response_model=schemas.AIAnswerResponse, dependencies=[Depends(require_beta_features)])
@limiter.limit("20/minute")
async def get_answer(request: Request, body: schemas.AIAnswerRequest):
    answer = await ai_service.get_ai_answer(body.query)
    return schemas.AIAnswerResponse(answer=answer)

@router.post("/chat", response_model=schemas.ChatResponse, dependencies=[Depends(require_beta_features)])
@limiter.limit("20/minute")
async def chat(request: Request, body: schemas.ChatRequest):
    reply = await ai_service.chat(body.messages)
    return schemas.ChatResponse(
        message=schemas.ChatMessage(role=schemas.ChatRole.MODEL, content=reply)
    )

@router.post("/json-generator", response_model=schemas.JsonGeneratorResponse, dependencies=[Depends(require_beta_features)])
@limiter.limit("10/minute")
async def generate_json(request: Request, body: schemas.JsonGeneratorRequest):
    generated = await ai_service.generate_request_body(body.prompt)
    if generated is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=GlobalMessages.JSON_GENERATION_FAILED
        )
    return schemas.JsonGeneratorResponse(body=generated)
