"""Menu API: sidebar entries and page access for the caller's permissions."""

from typing import List

from fastapi import APIRouter, Depends

from neuron.auth.rbac import AUTHENTICATED
from neuron.schemas.auth import TokenClaims
from neuron.schemas.menu import PageAccessRead, SidebarItemRead
from neuron.services.menu_service import MenuService

router = APIRouter(
    prefix="/menu",
    tags=["menu"],
)


@router.get("/sidebar", response_model=List[SidebarItemRead])
def get_sidebar(
    claims: TokenClaims = Depends(AUTHENTICATED),
) -> List[SidebarItemRead]:
    return MenuService().get_sidebar(claims)


@router.get("/pages/{slug}/access", response_model=PageAccessRead)
def check_page_access(
    slug: str,
    claims: TokenClaims = Depends(AUTHENTICATED),
) -> PageAccessRead:
    """Unknown slugs are reported as not accessible."""
    return MenuService().check_page_access(claims, slug)
