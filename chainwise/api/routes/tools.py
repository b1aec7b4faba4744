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
from chainwise.core.premium_tools import PREMIUM_TOOLS, get_premium_tool, tools_for_tier
from chainwise.core.tiers import ensure_tier_access
from chainwise.schemas.tools import ToolInfo, ToolRequest, ToolResponse
from chainwise.services.credit_service import CreditLedger, credit_hold
from chainwise.services.openai_service import AIService

router = APIRouter()


@router.get("/api/tools", response_model=list[ToolInfo])
async def list_tools(tier: str | None = None):
    """Premium tool catalogue, optionally limited to what ``tier`` can run."""
    tools = tools_for_tier(tier) if tier else list(PREMIUM_TOOLS.values())
    return [
        ToolInfo(
            id=tool.tool_id,
            name=tool.display_name,
            tier=tool.required_tier,
            credit_cost=tool.credit_cost,
            output_format=tool.output_format,
        )
        for tool in tools
    ]


@router.post("/api/tools/{tool_id}", response_model=ToolResponse)
@limiter.limit(settings.RATE_LIMIT_TOOLS)
async def run_tool(
    request: Request,
    tool_id: str,
    tool_request: ToolRequest,
    user_id: str = Depends(get_user_id),
    ai_service: AIService = Depends(get_ai_service),
    ledger: CreditLedger = Depends(get_ledger),
):
    account = await load_account(ledger, user_id)
    try:
        tool = get_premium_tool(tool_id)
        ensure_tier_access(account.tier, tool.required_tier, tool.display_name)

        async with credit_hold(ledger, user_id, tool.credit_cost, f"tool:{tool.tool_id}") as hold:
            generation = await ai_service.generate_premium_tool(
                tool.tool_id,
                tool_request.input,
                account.tier,
                max_tokens=tool_request.max_tokens,
            )
            if generation.fallback and not settings.CHARGE_FALLBACK_RESPONSES:
                hold.waive()

        return ToolResponse(
            tool=tool.tool_id,
            response=generation.text,
            credits_used=0 if hold.waived else hold.amount,
            credits_remaining=hold.remaining,
            fallback=generation.fallback,
        )

    except ChainWiseError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        logger.error(f"Premium tool {tool_id} failed: {str(e)}")
        raise HTTPException(status_code=500, detail="Tool execution failed. Please try again.")
