"""
Pager view model.

Turns a PaginationDescriptor into the controls a template (or a JSON
client) renders: previous, one control per page window entry, next.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from src.common.pagination import ELLIPSIS, PaginationDescriptor


@dataclass(frozen=True)
class PagerControl:
    """
    One pager button.

    `page` is the page the control navigates to; None for ellipsis controls.
    """

    label: str
    page: Optional[int]
    disabled: bool = False
    current: bool = False
    kind: str = "page"  # page | ellipsis | previous | next

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "page": self.page,
            "disabled": self.disabled,
            "current": self.current,
            "kind": self.kind,
        }


@dataclass(frozen=True)
class PagerView:
    previous: PagerControl
    pages: List[PagerControl]
    next: PagerControl

    def to_dict(self) -> Dict[str, Any]:
        return {
            "previous": self.previous.to_dict(),
            "pages": [control.to_dict() for control in self.pages],
            "next": self.next.to_dict(),
        }


def build_pager(pagination: Optional[PaginationDescriptor]) -> Optional[PagerView]:
    """
    Build the pager for a descriptor.

    Returns None when there is at most one page (nothing to render).
    """
    if pagination is None or pagination.pages <= 1:
        return None

    controls: List[PagerControl] = []
    for entry in pagination.window():
        if entry == ELLIPSIS:
            controls.append(PagerControl(label=ELLIPSIS, page=None, disabled=True, kind="ellipsis"))
        else:
            controls.append(
                PagerControl(label=str(entry), page=entry, current=entry == pagination.page)
            )

    return PagerView(
        previous=PagerControl(
            label="Previous",
            page=pagination.page - 1,
            disabled=not pagination.has_prev,
            kind="previous",
        ),
        pages=controls,
        next=PagerControl(
            label="Next",
            page=pagination.page + 1,
            disabled=not pagination.has_next,
            kind="next",
        ),
    )
