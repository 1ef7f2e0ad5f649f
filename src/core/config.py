"""
Application configuration.

Values are read from environment variables (prefixed with TRIVIA_), falling back to sensible defaults for local play.
"""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    database_url: str = "sqlite:///trivia.db"
    sql_echo: bool = False
    # Real time between two timer ticks. Only lowered in tests.
    timer_tick_seconds: float = 1.0
    # Run round timers as asyncio tasks (needs a running event loop).
    auto_schedule_timers: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            database_url=os.environ.get("TRIVIA_DATABASE_URL", cls.database_url),
            sql_echo=_env_bool("TRIVIA_SQL_ECHO", cls.sql_echo),
            timer_tick_seconds=float(
                os.environ.get("TRIVIA_TIMER_TICK_SECONDS", cls.timer_tick_seconds)
            ),
            auto_schedule_timers=_env_bool(
                "TRIVIA_AUTO_SCHEDULE_TIMERS", cls.auto_schedule_timers
            ),
        )
