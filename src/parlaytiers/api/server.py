"""FastAPI surface for triggering and reading tiered parlay runs."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import Depends, FastAPI, Header, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware

from parlaytiers import __version__
from parlaytiers.api.schemas import GenerateRequest, GenerateResponse, ParlayResponse
from parlaytiers.config import get_api_access_key
from parlaytiers.db.repository import ParlayRepository
from parlaytiers.errors import InsufficientPoolError, PersistenceError
from parlaytiers.parlays.tiers import TIER_ORDER
from parlaytiers.scheduling.jobs import run_daily_job

app = FastAPI(
    title="Parlay Tiers API",
    version=__version__,
    description="Generates and lists tiered parlays for a slate.",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_repository() -> ParlayRepository:
    return ParlayRepository()


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    expected = get_api_access_key()
    if not x_api_key or x_api_key != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


RepositoryDep = Annotated[ParlayRepository, Depends(get_repository)]
APIKeyDep = Annotated[None, Depends(require_api_key)]
DateQuery = Annotated[date | None, Query()]
TierQuery = Annotated[str | None, Query()]
LimitQuery = Annotated[int, Query(ge=1, le=200)]


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/generate", response_model=GenerateResponse)
def generate(
    payload: GenerateRequest,
    _: APIKeyDep,
    repository: RepositoryDep,
) -> GenerateResponse:
    unknown = [tier for tier in payload.tiers or [] if tier not in TIER_ORDER]
    if unknown:
        raise HTTPException(status_code=422, detail=f"Unknown tiers: {', '.join(unknown)}")
    try:
        summary = run_daily_job(
            payload.pool_path,
            target_date=payload.target_date,
            tiers=payload.tiers,
            repository=repository,
        )
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=f"Pool file not found: {exc.filename}") from exc
    except InsufficientPoolError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": "Insufficient prop pool", "pool_size": exc.pool_size},
        ) from exc
    except PersistenceError as exc:
        raise HTTPException(
            status_code=500,
            detail={"error": str(exc), **exc.summary.to_dict()},
        ) from exc
    return GenerateResponse(**summary)


@app.get("/parlays", response_model=list[ParlayResponse])
def list_parlays(
    _: APIKeyDep,
    repository: RepositoryDep,
    parlay_date: DateQuery = None,
    tier: TierQuery = None,
    limit: LimitQuery = 50,
) -> list[ParlayResponse]:
    rows = repository.list_parlays(parlay_date=parlay_date, tier=tier, limit=limit)
    return [ParlayResponse.model_validate(row) for row in rows]
