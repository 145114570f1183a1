from __future__ import annotations

from levefit.core.config import Settings
from levefit.economy.checkout.errors import PixCodeNotFoundError


def get_pix_code(settings: Settings, kit: str) -> str:
    codes = {
        "1_pote": settings.pix_code_1_pote,
        "3_potes": settings.pix_code_3_potes,
        "5_potes": settings.pix_code_5_potes,
    }
    code = codes.get(kit)
    if not code:
        raise PixCodeNotFoundError(kit)
    return code
