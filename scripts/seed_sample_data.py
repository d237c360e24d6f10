import argparse
import asyncio

from loguru import logger

from lifeflow.db import init_db
from lifeflow.datastore import DataStore
from lifeflow.services.auth_service import AuthClient
from lifeflow.services.task_service import TaskService
from lifeflow.services.habit_service import HabitService
from lifeflow.services.goal_service import GoalService


async def main(email: str, tasks: int, habits: int, goals: int):
    await init_db()
    store = DataStore()

    auth = AuthClient(store)
    token = await auth.login(email)
    user_id = auth.user.id

    for _ in range(tasks):
        await TaskService.add_sample_task(store, user_id)
    for _ in range(habits):
        await HabitService.add_sample_habit(store, user_id)
    for _ in range(goals):
        await GoalService.add_sample_goal(store, user_id)

    logger.info("Seeded {} tasks, {} habits, {} goals for {}", tasks, habits, goals, email)
    print(f"Bearer token for {email}: {token}")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Add sample tasks, habits and goals for a user")
    parser.add_argument("email")
    parser.add_argument("--tasks", type=int, default=4)
    parser.add_argument("--habits", type=int, default=3)
    parser.add_argument("--goals", type=int, default=2)
    args = parser.parse_args()
    asyncio.run(main(args.email, args.tasks, args.habits, args.goals))
