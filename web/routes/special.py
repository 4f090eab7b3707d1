"""
특수 항목 API 라우터

POST /api/special/debts                              - 부채 생성
POST /api/special/investments                        - 투자 생성
POST /api/special/goals                              - 저축 목표 생성
GET  /api/special/{entity_type}/{user_id}/{entity_id} - 항목 조회
"""

from typing import cast

from fastapi import APIRouter, Depends

from core.types import EntityType
from wallet.special import (
    DebtHandler,
    GoalHandler,
    InvestmentHandler,
    SpecialEntityHandler,
)
from web.dependencies import get_special_handlers
from web.models.requests import (
    DebtCreateRequest,
    GoalCreateRequest,
    InvestmentCreateRequest,
)
from web.models.responses import SpecialEntityResponse

router = APIRouter(prefix="/api/special", tags=["Special"])

Handlers = dict[EntityType, SpecialEntityHandler]


@router.post("/debts", response_model=SpecialEntityResponse)
async def create_debt(
    request: DebtCreateRequest,
    handlers: Handlers = Depends(get_special_handlers),
) -> SpecialEntityResponse:
    """부채 생성"""
    handler = cast(DebtHandler, handlers[EntityType.DEBT])
    debt = await handler.create(**request.model_dump())
    return SpecialEntityResponse(entity_type=EntityType.DEBT.value, entity=debt.to_dict())


@router.post("/investments", response_model=SpecialEntityResponse)
async def create_investment(
    request: InvestmentCreateRequest,
    handlers: Handlers = Depends(get_special_handlers),
) -> SpecialEntityResponse:
    """투자 생성"""
    handler = cast(InvestmentHandler, handlers[EntityType.INVESTMENT])
    investment = await handler.create(**request.model_dump())
    return SpecialEntityResponse(
        entity_type=EntityType.INVESTMENT.value,
        entity=investment.to_dict(),
    )


@router.post("/goals", response_model=SpecialEntityResponse)
async def create_goal(
    request: GoalCreateRequest,
    handlers: Handlers = Depends(get_special_handlers),
) -> SpecialEntityResponse:
    """저축 목표 생성"""
    handler = cast(GoalHandler, handlers[EntityType.GOAL])
    goal = await handler.create(**request.model_dump())
    return SpecialEntityResponse(entity_type=EntityType.GOAL.value, entity=goal.to_dict())


@router.get("/{entity_type}/{user_id}/{entity_id}", response_model=SpecialEntityResponse)
async def get_special_entity(
    entity_type: EntityType,
    user_id: str,
    entity_id: str,
    handlers: Handlers = Depends(get_special_handlers),
) -> SpecialEntityResponse:
    """항목 조회 (다른 사용자 항목은 404)"""
    entity = await handlers[entity_type].require(user_id, entity_id)
    return SpecialEntityResponse(entity_type=entity_type.value, entity=entity.to_dict())
