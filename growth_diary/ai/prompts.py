from typing import Any, Dict, List, Union

SYSTEM_PROMPT = (
    "You are a supportive personal productivity coach. Provide brief, actionable tips "
    "(2-3 sentences each) to help users achieve their goals and complete their tasks. "
    "Be encouraging but practical."
)

TODO_TIPS = [
    "🎯 Start with the most important task first - tackling it early gives you momentum for the rest of the day.",
    "⏱️ Try the Pomodoro technique: 25 minutes of focused work, then a 5-minute break.",
    "✂️ If a task feels overwhelming, break it into smaller, manageable steps.",
    "🚫 Turn off notifications and find a quiet space to minimize distractions.",
    "🎁 Reward yourself after completing difficult tasks to build positive habits.",
]

GOAL_TIPS = [
    "📅 Schedule dedicated time blocks for your goals - treat them like important meetings.",
    "🪜 Focus on progress, not perfection. Small steps forward are still steps forward.",
    "📊 Review your goals weekly to stay aligned and adjust your approach if needed.",
    "👥 Share your goals with someone who can hold you accountable.",
    "🎯 Visualize achieving your goal - imagine how it will feel when you succeed.",
]

MOTIVATION_TIPS = [
    "💪 Remember: you don't have to feel motivated to take action. Action often creates motivation.",
    "🌱 Start with just 2 minutes. Often, getting started is the hardest part.",
    "📝 Write down one thing you're grateful for - it shifts your mindset positively.",
    "🔄 Progress isn't always linear. Bad days are part of the journey.",
    "⭐ You've overcome challenges before. You have the strength to do it again.",
]


def curated_tips_for(context: str) -> List[str]:
    if context == "todos":
        return TODO_TIPS
    if context == "goals":
        return GOAL_TIPS
    return MOTIVATION_TIPS


def build_prompt(context: str, items: Union[List[Dict[str, Any]], Dict[str, Any]]) -> str:
    """Turn the user's todos, goals or counters into a coaching request."""
    if context == "todos":
        lines = ["I have these tasks to complete today:"]
        for i, item in enumerate(items if isinstance(items, list) else [], start=1):
            lines.append(f"{i}. {item.get('title', '')} (Priority: {item.get('priority', 'medium')})")
        lines.append("")
        lines.append("Give me 3 practical tips to help me complete these tasks efficiently.")
        return "\n".join(lines)

    if context == "goals":
        lines = ["I'm working on these goals:"]
        for i, item in enumerate(items if isinstance(items, list) else [], start=1):
            lines.append(
                f"{i}. {item.get('title', '')} (Progress: {item.get('progress', 0)}%, Type: {item.get('goal_type', '')})"
            )
        lines.append("")
        lines.append("Give me 3 actionable tips to make progress on these goals this week.")
        return "\n".join(lines)

    counts = items if isinstance(items, dict) else {}
    return (
        f"I'm feeling unmotivated today. I have {counts.get('pendingCount', 0)} tasks pending and "
        f"{counts.get('goalCount', 0)} active goals. Give me an encouraging message and 2-3 practical "
        "tips to get started."
    )
