from fastapi import APIRouter

from bookstore.domain.schemas import StatusOut

router = APIRouter(tags=["health"])


@router.get("/health", response_model=StatusOut)
def health():
    return {"status": "ok"}
