"""Sidebar and page access derived from the caller's permission snapshot."""

from __future__ import annotations

from typing import List, Optional

from neuron.constants.menu import SIDEBAR_ITEMS, SidebarItem
from neuron.schemas.auth import TokenClaims
from neuron.schemas.menu import PageAccessRead, SidebarItemRead


class MenuService:
    def get_sidebar(self, claims: TokenClaims) -> List[SidebarItemRead]:
        return [
            SidebarItemRead(label=item.label, slug=item.slug, icon=item.icon)
            for item in SIDEBAR_ITEMS
            if self._allows(claims, item)
        ]

    def check_page_access(self, claims: TokenClaims, slug: str) -> PageAccessRead:
        item = self._find(slug)
        return PageAccessRead(has_access=item is not None and self._allows(claims, item))

    def _find(self, slug: str) -> Optional[SidebarItem]:
        return next((item for item in SIDEBAR_ITEMS if item.slug == slug), None)

    def _allows(self, claims: TokenClaims, item: SidebarItem) -> bool:
        if item.required_permission is None:
            return True
        return claims.has_permission(item.required_permission)
