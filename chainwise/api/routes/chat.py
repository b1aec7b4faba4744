from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger

from chainwise.api.dependencies import (
    get_ai_service,
    get_ledger,
    get_user_id,
    limiter,
    load_account,
)
from chainwise.core.config import settings
from chainwise.core.exceptions import ChainWiseError
from chainwise.core.personas import AI_PERSONAS, get_persona
from chainwise.core.tiers import ensure_tier_access
from chainwise.schemas.chat import ChatRequest, ChatResponse, PersonaInfo
from chainwise.services.credit_service import CreditLedger, credit_hold
from chainwise.services.openai_service import AIService

router = APIRouter()


@router.post("/api/chat", response_model=ChatResponse)
@limiter.limit(settings.RATE_LIMIT_CHAT)
async def chat(
    request: Request,
    chat_request: ChatRequest,
    user_id: str = Depends(get_user_id),
    ai_service: AIService = Depends(get_ai_service),
    ledger: CreditLedger = Depends(get_ledger),
):
    """
    ChainWise AI chat endpoint.

    Validates the persona and the caller's tier, holds the persona's credit
    cost, generates a response and charges the hold. Fallback answers are not
    charged unless CHARGE_FALLBACK_RESPONSES is set.
    """
    account = await load_account(ledger, user_id)
    try:
        persona = get_persona(chat_request.persona)
        ensure_tier_access(account.tier, persona.required_tier, f"{persona.display_name} persona")

        async with credit_hold(ledger, user_id, persona.credit_cost, f"chat:{persona.id}") as hold:
            generation = await ai_service.generate_chat(
                persona.id,
                chat_request.message,
                [m.model_dump() for m in chat_request.conversation_history],
                max_tokens=chat_request.max_tokens,
                temperature=chat_request.temperature,
            )
            if generation.fallback and not settings.CHARGE_FALLBACK_RESPONSES:
                hold.waive()

        return ChatResponse(
            response=generation.text,
            persona=persona.id,
            credits_used=0 if hold.waived else hold.amount,
            credits_remaining=hold.remaining,
            fallback=generation.fallback,
        )

    except ChainWiseError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        logger.error(f"Chat API error: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail="Sorry, I encountered an error. Please try again.",
        )


@router.get("/api/chat/personas", response_model=list[PersonaInfo])
async def list_personas():
    return [
        PersonaInfo(
            id=persona.id,
            name=persona.display_name,
            description=persona.description,
            tier=persona.required_tier,
            credit_cost=persona.credit_cost,
            model=persona.model,
        )
        for persona in AI_PERSONAS.values()
    ]
