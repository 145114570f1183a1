from __future__ import annotations

from html import escape

from levefit.db.models.profiles import Profile
from levefit.economy.habits.kits import kit_duration_days

KIT_POTS: dict[str, int] = {
    "1_pote": 1,
    "2_potes": 2,
    "3_potes": 3,
    "5_potes": 5,
}


def kit_label(kit_type: str | None) -> str:
    if kit_type is None:
        return "Não informado"
    pots = KIT_POTS.get(kit_type)
    if pots is None:
        return kit_type
    noun = "Pote" if pots == 1 else "Potes"
    return f"{pots} {noun} ({kit_duration_days(kit_type)} dias)"


def build_new_user_email(profile: Profile) -> tuple[str, str]:
    subject = "🆕 Novo usuário cadastrado no LeveFit!"
    html = (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        '<h1 style="color: #16a34a;">🎉 Novo Usuário!</h1>'
        f"<p><strong>Nome:</strong> {escape(profile.name or '')}</p>"
        f"<p><strong>Email:</strong> {escape(profile.email or '')}</p>"
        f"<p><strong>Kit:</strong> {escape(kit_label(profile.kit_type))}</p>"
        '<p style="color: #92400e;">⚠️ <strong>Ação necessária:</strong> '
        "Este usuário precisa ser aprovado para acessar o app.</p>"
        "</div>"
    )
    return subject, html
