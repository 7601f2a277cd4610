"""Registry of quick-fix procedures keyed by stable fix id."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from diag_assist.fixes import transforms


@dataclass(frozen=True, slots=True)
class FixProcedure:
    """A named text rewrite that resolves one diagnosed issue."""

    fix_id: str
    description: str
    transform: Callable[[str], str]


_PROCEDURES: dict[str, FixProcedure] = {
    procedure.fix_id: procedure
    for procedure in (
        FixProcedure(
            fix_id="fix_handles_caps",
            description=(
                "Rename Handles.*Cap calls to *HandleCap and add EventType.Repaint "
                "to four-argument calls."
            ),
            transform=transforms.fix_handles_caps,
        ),
        FixProcedure(
            fix_id="fix_hdrp_include",
            description="Point the HDRP ShaderVariables.hlsl include at SRP Core.",
            transform=transforms.fix_hdrp_include,
        ),
        FixProcedure(
            fix_id="fix_urp_texel_redef",
            description=(
                "Remove manual _CameraDepthTexture declarations and include "
                "DeclareDepthTexture.hlsl after the URP Core include."
            ),
            transform=transforms.fix_urp_texel_redef,
        ),
    )
}


def get_fix(fix_id: str) -> FixProcedure | None:
    """Return the procedure registered under ``fix_id``, if any."""
    return _PROCEDURES.get(fix_id)


def list_fixes() -> list[FixProcedure]:
    """Return all registered procedures in declaration order."""
    return list(_PROCEDURES.values())
