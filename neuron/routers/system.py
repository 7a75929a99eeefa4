from fastapi import APIRouter, Depends

from neuron.auth.rbac import PUBLIC

router = APIRouter(
    tags=["system"],
)


@router.get("/health")
def health(_access=Depends(PUBLIC)) -> dict[str, str]:
    return {"status": "ok"}
