"""HTML bodies for focuslist's transactional emails."""

import os
from html import escape
from typing import List, Optional

from focuslist.models.todo import Todo, TodoPriority
from focuslist.models.constants import REMINDER_EMAIL_TODO_LIMIT

SITE_URL = os.getenv("SITE_URL", "http://localhost:3000")

_BASE_STYLE = """
      body { font-family: Inter, system-ui, sans-serif; line-height: 1.6; color: #0f172a; }
      .container { max-width: 600px; margin: 0 auto; padding: 20px; }
      .content { background: #ffffff; padding: 30px; border-radius: 8px; }
      .button { display: inline-block; background: #6366f1; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; margin-top: 20px; }
"""


def _page(body: str, extra_style: str = "") -> str:
    return f"""<!DOCTYPE html>
<html>
  <head>
    <style>{_BASE_STYLE}{extra_style}</style>
  </head>
  <body>
    <div class="container">
{body}
    </div>
  </body>
</html>
"""


def welcome_email_html(user_name: Optional[str] = None) -> str:
    greeting = f"Hi {escape(user_name)}" if user_name else "Hello"
    return _page(
        f"""      <div class="content">
        <h1>Welcome to Distraction-Free Todos!</h1>
        <p>{greeting},</p>
        <p>Thanks for joining Distraction-Free Todos! We're excited to help you stay organized and productive.</p>
        <ul>
          <li>Create and manage your personal todo list</li>
          <li>Get help from the assistant</li>
          <li>Receive reminders and weekly summaries</li>
        </ul>
        <p>Your todos are private. Only you can see them.</p>
        <a href="{escape(SITE_URL)}" class="button">Get Started</a>
      </div>
      <p>You're receiving this email because you signed up for Distraction-Free Todos.</p>"""
    )


def _priority_marker(todo: Todo) -> str:
    if todo.priority == TodoPriority.HIGH:
        return "[high] "
    if todo.priority == TodoPriority.MEDIUM:
        return "[medium] "
    return ""


def todo_reminder_email_html(active_count: int, todos: List[Todo]) -> str:
    """Reminder listing at most five todos, with a count of the rest."""
    items = "\n".join(
        f'          <li style="margin: 10px 0;">{_priority_marker(todo)}{escape(todo.text)}</li>'
        for todo in todos[:REMINDER_EMAIL_TODO_LIMIT]
    )
    plural = "" if active_count == 1 else "s"
    more = ""
    if active_count > REMINDER_EMAIL_TODO_LIMIT:
        more = f"\n        <p><em>And {active_count - REMINDER_EMAIL_TODO_LIMIT} more...</em></p>"
    return _page(
        f"""      <div class="content">
        <h2>You have {active_count} active todo{plural}</h2>
        <p>Here are your pending tasks:</p>
        <ul>
{items}
        </ul>{more}
        <a href="{escape(SITE_URL)}" class="button">View All Todos</a>
      </div>"""
    )


def weekly_summary_email_html(total_created: int, total_completed: int, active_count: int) -> str:
    stats = [("Created", total_created), ("Completed", total_completed), ("Active", active_count)]
    cells = "\n".join(
        f'          <div class="stat"><div class="stat-value">{value}</div>'
        f'<div class="stat-label">{label}</div></div>'
        for label, value in stats
    )
    return _page(
        f"""      <div class="content">
        <h2>Your Weekly Todo Summary</h2>
        <p>Here's what you accomplished this week:</p>
        <div style="text-align: center;">
{cells}
        </div>
        <p>Keep up the great work!</p>
        <a href="{escape(SITE_URL)}" class="button">View Your Todos</a>
      </div>""",
        extra_style="""
      .stat { display: inline-block; margin: 20px; text-align: center; }
      .stat-value { font-size: 36px; font-weight: bold; color: #6366f1; }
      .stat-label { color: #475569; font-size: 14px; }
""",
    )
