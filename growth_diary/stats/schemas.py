from typing import List, Literal
from pydantic import BaseModel

Period = Literal["day", "week", "month"]


class StreakInfo(BaseModel):
    current: int
    longest: int


class TodayTodos(BaseModel):
    total: int
    completed: int


class ActiveGoalSummary(BaseModel):
    goal_type: str
    count: int
    avg_progress: float


class DashboardStats(BaseModel):
    todayTodos: TodayTodos
    overdueTodos: int
    activeGoals: List[ActiveGoalSummary]
    recentJournals: int
    streak: int
