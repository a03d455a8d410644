import random
from datetime import datetime
from typing import Dict, List, Optional

QUOTES: List[Dict[str, str]] = [
    {"text": "The secret of getting ahead is getting started.", "author": "Mark Twain"},
    {"text": "It does not matter how slowly you go as long as you do not stop.", "author": "Confucius"},
    {"text": "Success is not final, failure is not fatal: it is the courage to continue that counts.", "author": "Winston Churchill"},
    {"text": "The only way to do great work is to love what you do.", "author": "Steve Jobs"},
    {"text": "Believe you can and you're halfway there.", "author": "Theodore Roosevelt"},
    {"text": "The future belongs to those who believe in the beauty of their dreams.", "author": "Eleanor Roosevelt"},
    {"text": "Don't watch the clock; do what it does. Keep going.", "author": "Sam Levenson"},
    {"text": "Everything you've ever wanted is on the other side of fear.", "author": "George Addair"},
    {"text": "The only impossible journey is the one you never begin.", "author": "Tony Robbins"},
    {"text": "Start where you are. Use what you have. Do what you can.", "author": "Arthur Ashe"},
    {"text": "Push yourself, because no one else is going to do it for you.", "author": "Unknown"},
    {"text": "Great things never come from comfort zones.", "author": "Unknown"},
    {"text": "Success doesn't just find you. You have to go out and get it.", "author": "Unknown"},
    {"text": "The harder you work for something, the greater you'll feel when you achieve it.", "author": "Unknown"},
    {"text": "Don't stop when you're tired. Stop when you're done.", "author": "Unknown"},
    {"text": "Wake up with determination. Go to bed with satisfaction.", "author": "Unknown"},
    {"text": "Do something today that your future self will thank you for.", "author": "Sean Patrick Flanery"},
    {"text": "Little things make big days.", "author": "Unknown"},
    {"text": "It's going to be hard, but hard does not mean impossible.", "author": "Unknown"},
    {"text": "Don't wait for opportunity. Create it.", "author": "Unknown"},
    {"text": "The key to success is to focus on goals, not obstacles.", "author": "Unknown"},
    {"text": "You don't have to be great to start, but you have to start to be great.", "author": "Zig Ziglar"},
    {"text": "The way to get started is to quit talking and begin doing.", "author": "Walt Disney"},
    {"text": "I find that the harder I work, the more luck I seem to have.", "author": "Thomas Jefferson"},
    {"text": "Success usually comes to those who are too busy to be looking for it.", "author": "Henry David Thoreau"},
    {"text": "All progress takes place outside the comfort zone.", "author": "Michael John Bobak"},
    {"text": "You miss 100% of the shots you don't take.", "author": "Wayne Gretzky"},
    {"text": "Whether you think you can or think you can't, you're right.", "author": "Henry Ford"},
    {"text": "The only person you are destined to become is the person you decide to be.", "author": "Ralph Waldo Emerson"},
    {"text": "Action is the foundational key to all success.", "author": "Pablo Picasso"},
    {"text": "A year from now you may wish you had started today.", "author": "Karen Lamb"},
    {"text": "Small daily improvements over time lead to stunning results.", "author": "Robin Sharma"},
    {"text": "Discipline is the bridge between goals and accomplishment.", "author": "Jim Rohn"},
    {"text": "What you do today can improve all your tomorrows.", "author": "Ralph Marston"},
    {"text": "Be so good they can't ignore you.", "author": "Steve Martin"},
    {"text": "The best time to plant a tree was 20 years ago. The second best time is now.", "author": "Chinese Proverb"},
]

# keyword stems per part of the day
MORNING_KEYWORDS = ("start", "begin", "today")
AFTERNOON_KEYWORDS = ("keep", "continu", "work")
EVENING_KEYWORDS = ("success", "great", "achieve")


def keywords_for_hour(hour: int):
    if hour < 12:
        return MORNING_KEYWORDS
    if hour < 17:
        return AFTERNOON_KEYWORDS
    return EVENING_KEYWORDS


def quotes_for_hour(hour: int) -> List[Dict[str, str]]:
    keywords = keywords_for_hour(hour)
    matching = [q for q in QUOTES if any(k in q["text"].lower() for k in keywords)]
    return matching or QUOTES


def get_motivational_quote(now: Optional[datetime] = None) -> Dict[str, str]:
    """Pick a quote suited to the local time of day."""
    hour = (now or datetime.now()).hour
    return random.choice(quotes_for_hour(hour))


def get_random_quote() -> Dict[str, str]:
    return random.choice(QUOTES)
