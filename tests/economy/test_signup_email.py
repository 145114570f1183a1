from __future__ import annotations

from uuid import uuid4

from levefit.db.models.profiles import Profile
from levefit.economy.habits.signup_email import build_new_user_email, kit_label


def test_kit_label() -> None:
    assert kit_label("1_pote") == "1 Pote (30 dias)"
    assert kit_label("5_potes") == "5 Potes (150 dias)"
    assert kit_label("custom") == "custom"
    assert kit_label(None) == "Não informado"


def test_new_user_email_escapes_user_input() -> None:
    profile = Profile(user_id=uuid4(), name="<b>Ana</b>", email="ana@example.com", kit_type="1_pote")

    subject, html = build_new_user_email(profile)

    assert "Novo usuário" in subject
    assert "&lt;b&gt;Ana&lt;/b&gt;" in html
    assert "<b>Ana</b>" not in html
    assert "precisa ser aprovado" in html
