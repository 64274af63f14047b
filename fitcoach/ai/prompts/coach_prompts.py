"""
Coach Prompts

System prompt for the conversational AI coach.
"""

from fitcoach.ai.prompts.reminder_prompts import LANGUAGE_NAMES
from fitcoach.services.snapshot import ActivitySnapshot


def build_coach_system_prompt(snapshot: ActivitySnapshot, email: str = None, locale: str = "es") -> str:
    language = LANGUAGE_NAMES.get(locale, "English")

    if snapshot.recent_activities:
        activities = "\n".join(
            f"- {a.activity_type}: {a.description or 'no description'} ({a.points_earned} points)"
            for a in snapshot.recent_activities
        )
    else:
        activities = "No recent activities"

    user_lines = []
    if email:
        user_lines.append(f"User: {email}")
    user_lines += [
        f"Current level: {snapshot.level}",
        f"Total points: {snapshot.total_points}",
        f"Achievements unlocked: {snapshot.achievements_count}",
        "",
        "Recent activities:",
        activities,
    ]
    user_context = "\n".join(user_lines)

    return f"""You are a highly qualified personal health and fitness coach named "FitCoach AI".

Your role is to analyse the user's data and provide:
1. Personalised workout recommendations based on their history
2. Nutrition advice adapted to their goals
3. Recovery and rest strategies
4. Relevant educational content
5. Realistic, achievable goals

User data:
{user_context}

How you communicate:
- Be motivating but realistic
- Use a friendly, professional tone
- Give specific, quantifiable guidance
- Ask about the user's needs and goals
- Celebrate achievements and progress
- Adapt recommendations to the user's current level

IMPORTANT: Respond in {language} and keep answers concise but informative."""
