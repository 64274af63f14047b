"""
Reminder Prompts

System instructions, user prompts and fixed titles for scheduled
reminders and wearable health alerts.

Titles are fixed per category and locale; only the body is generated.
"""

from fitcoach.services.snapshot import ActivitySnapshot


LANGUAGE_NAMES = {
    "es": "Spanish",
    "en": "English",
}

REMINDER_TITLES = {
    "es": {
        "workout": "💪 Hora de Entrenar",
        "hydration": "💧 Momento de Hidratarse",
        "rest": "😴 Tiempo de Descanso",
    },
    "en": {
        "workout": "💪 Time to Train",
        "hydration": "💧 Time to Hydrate",
        "rest": "😴 Time to Rest",
    },
}

HEALTH_ALERT_TITLES = {
    "es": {
        "low_steps": "¡Tiempo de moverse!",
        "high_heart_rate": "Frecuencia cardíaca elevada",
        "low_heart_rate": "Frecuencia cardíaca baja",
        "short_sleep": "Sueño insuficiente",
    },
    "en": {
        "low_steps": "Time to move!",
        "high_heart_rate": "Elevated heart rate",
        "low_heart_rate": "Low heart rate",
        "short_sleep": "Not enough sleep",
    },
}

HEALTH_ALERT_CONTEXTS = {
    "es": {
        "low_steps": "Has dado {value:,.0f} pasos hoy",
        "high_heart_rate": "Tu frecuencia cardíaca está en {value:g} bpm",
        "low_heart_rate": "Tu frecuencia cardíaca está en {value:g} bpm",
        "short_sleep": "Solo dormiste {value:.1f} horas anoche",
    },
    "en": {
        "low_steps": "You have taken {value:,.0f} steps today",
        "high_heart_rate": "Your heart rate is {value:g} bpm",
        "low_heart_rate": "Your heart rate is {value:g} bpm",
        "short_sleep": "You only slept {value:.1f} hours last night",
    },
}

_REMINDER_TASKS = {
    "workout": (
        "Write a motivating, personalised reminder to work out. "
        "Be specific, based on their recent activity."
    ),
    "hydration": "Write a friendly reminder to drink water. Keep it motivating.",
    "rest": "Write an empathetic reminder about the importance of rest and recovery.",
}


def build_reminder_system_prompt(locale: str) -> str:
    language = LANGUAGE_NAMES.get(locale, "English")
    return (
        "You are FitCoach AI, a motivating fitness coach. "
        f"You write short, personalised reminders. Respond in {language}, "
        "concisely and encouragingly, in at most two sentences."
    )


def build_user_context(snapshot: ActivitySnapshot) -> str:
    """Describe level, points and recent activities in plain text."""
    last = snapshot.last_activity_at
    lines = [
        f"User at level {snapshot.level} with {snapshot.total_points} points.",
        f"Recent activities: {len(snapshot.recent_activities)}",
        f"Last activity: {last.isoformat() if last else 'no recent activity'}",
    ]
    for activity in snapshot.recent_activities:
        description = activity.description or "no description"
        lines.append(
            f"- {activity.activity_type}: {description} ({activity.points_earned} points)"
        )
    return "\n".join(lines)


def build_reminder_prompt(reminder_type: str, snapshot: ActivitySnapshot) -> str:
    task = _REMINDER_TASKS.get(reminder_type, _REMINDER_TASKS["workout"])
    return (
        f"{task}\n\n"
        f"User context:\n{build_user_context(snapshot)}\n\n"
        "Keep it to two lines at most."
    )


def build_health_system_prompt(locale: str) -> str:
    language = LANGUAGE_NAMES.get(locale, "English")
    return (
        "You are a friendly health assistant who writes motivating, useful messages. "
        f"Respond in {language}, concisely (at most two sentences) and encouragingly."
    )


def build_health_prompt(title: str, context: str, priority: str) -> str:
    tone = "urgent but reassuring" if priority == "high" else "motivating"
    return f"Write a {tone} message about: {title}. Context: {context}"
