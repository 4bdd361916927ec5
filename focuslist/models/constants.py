"""Constants for focuslist.

This module centralizes all magic numbers and default values used throughout the application.
"""

from focuslist.models.user_preferences import Theme, DefaultView


# Todo limits
MAX_TODO_TEXT_LENGTH = 500
MAX_TAGS = 10
MAX_TAG_LENGTH = 30

# Thread limits
MAX_THREAD_TITLE_LENGTH = 200
MAX_MESSAGE_LENGTH = 5000

# Assistant
AGENT_CONTEXT_TODO_LIMIT = 10
RECENT_MESSAGES_LIMIT = 10

# Dashboard
RECENT_TODOS_LIMIT = 20
ANALYTICS_WINDOW_MS = 7 * 24 * 60 * 60 * 1000

# Reminder email lists at most this many todos
REMINDER_EMAIL_TODO_LIMIT = 5

# Preference defaults
DEFAULT_EMAIL_NOTIFICATIONS_ENABLED = True
DEFAULT_AI_ASSISTANT_ENABLED = True
DEFAULT_THEME = Theme.SYSTEM
DEFAULT_VIEW = DefaultView.ALL

# Email subjects
EMAIL_SUBJECT_WELCOME = "Welcome to Distraction-Free Todos!"
EMAIL_SUBJECT_TODO_REMINDER = "You have pending todos"
EMAIL_SUBJECT_WEEKLY_SUMMARY = "Your weekly todo summary"

# Rate limits, keyed by operation name (periods in milliseconds)
MINUTE_MS = 60_000
HOUR_MS = 60 * MINUTE_MS

RATE_LIMITS = {
    "createTodo": {"kind": "token bucket", "rate": 20, "period": MINUTE_MS, "capacity": 5},
    "updateTodo": {"kind": "token bucket", "rate": 50, "period": MINUTE_MS, "capacity": 10},
    "deleteTodo": {"kind": "token bucket", "rate": 30, "period": MINUTE_MS, "capacity": 5},
    "sendMessage": {"kind": "token bucket", "rate": 10, "period": MINUTE_MS, "capacity": 2},
    "createThread": {"kind": "token bucket", "rate": 5, "period": MINUTE_MS, "capacity": 2},
    "updateThread": {"kind": "token bucket", "rate": 20, "period": MINUTE_MS, "capacity": 5},
    "deleteThread": {"kind": "token bucket", "rate": 30, "period": MINUTE_MS, "capacity": 5},
    "updatePreferences": {"kind": "token bucket", "rate": 20, "period": MINUTE_MS, "capacity": 5},
    # Prevent email spam
    "sendEmail": {"kind": "fixed window", "rate": 10, "period": HOUR_MS},
}
