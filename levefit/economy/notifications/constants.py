from __future__ import annotations

NOTIFICATION_TYPE_TEST = "test"
NOTIFICATION_TYPE_CAPSULE = "capsule"
NOTIFICATION_TYPE_WATER = "water"
NOTIFICATION_TYPE_TREATMENT_END = "treatment_end"
NOTIFICATION_TYPE_DAILY_SUMMARY = "daily_summary"

BULK_NOTIFICATION_TYPES = frozenset(
    {
        NOTIFICATION_TYPE_CAPSULE,
        NOTIFICATION_TYPE_WATER,
        NOTIFICATION_TYPE_TREATMENT_END,
        NOTIFICATION_TYPE_DAILY_SUMMARY,
    }
)
NOTIFICATION_TYPES = BULK_NOTIFICATION_TYPES | {NOTIFICATION_TYPE_TEST}

CAPSULE_WINDOW_MINUTES = 5
WATER_FIRST_REMINDER_FROM_HOUR = 7
WATER_FIRST_REMINDER_UNTIL_HOUR = 22
TREATMENT_END_WINDOW_DAYS = 5

MILESTONE_NOTIFICATIONS: dict[int, tuple[str, str]] = {
    1: ("🎉 Bem-vinda ao LeveFit!", "Seu processo começa hoje 💚"),
    3: ("💊 Dia 3!", "Seu corpo já está se adaptando ✨"),
    5: ("🏅 Primeira conquista!", "Continue firme 💚"),
    7: ("✅ Semana 1 concluída!", "Ótimo começo 👏"),
    10: ("💚 Dia 10!", "Constância gera resultado."),
    14: ("🌱 2 semanas completas!", "Seu corpo responde."),
    18: ("👀 Falta pouco…", "Continue registrando no app."),
    21: ("🔓 Dia 21!", "Você está muito perto 🎁"),
    23: ("🎯 Quase lá!", "Complete suas conquistas."),
    25: ("🎁 Benefício desbloqueado!", "Não interrompa seus resultados."),
}

TEST_TITLE = "🔔 Teste de Notificação"
TEST_BODY = "As notificações push estão funcionando! 🎉"
CAPSULE_TITLE = "💊 Hora do LeveFit!"
CAPSULE_BODY = "Não esqueça de tomar sua cápsula LeveFit hoje!"
WATER_TITLE = "💧 Beba Água!"
WATER_BODY = "É hora de se hidratar! Beba um copo de água."
TREATMENT_END_TITLE = "🎯 Reta final do tratamento!"
TREATMENT_END_BODY = "Você está nos últimos dias! Continue firme no seu objetivo!"
DAILY_SUMMARY_TITLE = "📊 Resumo do Dia, {name}!"
DAILY_SUMMARY_BODY = (
    "Dia {treatment_day} de tratamento | {capsule_days} cápsulas | Água: {water_percent}%"
)
DAILY_SUMMARY_FALLBACK_NAME = "Usuária"
