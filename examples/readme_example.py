from dataclasses import dataclass, field
from enum import Enum

from cowbinder import Binder, CowStats


class TaskStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class Task:
    description: str
    status: TaskStatus = TaskStatus.PENDING
    notes: list[str] = field(default_factory=list)


def progress(plan: Binder[str, Task]) -> None:
    """Advance every task in the plan by one status."""
    for name in list(plan.keys()):
        task = plan.read_mut(name).value
        if task.status == TaskStatus.PENDING:
            task.status = TaskStatus.IN_PROGRESS
        elif task.status == TaskStatus.IN_PROGRESS:
            task.status = TaskStatus.COMPLETED


def main() -> None:
    stats = CowStats()
    plan: Binder[str, Task] = Binder(observer=stats)
    plan.insert_front("collect", Task("Collect data"))
    plan.insert_after("collect", "analyze", Task("Analyze data"))
    plan.insert_after("analyze", "report", Task("Generate report"))

    # Keep a baseline before working on the plan; nothing is cloned yet
    baseline = plan.copy()
    print(f"Clones after snapshot: {stats.clones}")

    progress(plan)
    progress(plan)
    plan.insert_after("analyze", "review", Task("Review findings"))

    print(f"Clones after two rounds of work: {stats.clones}")
    for name, task in plan.items():
        print(f"  plan     {name:<8} {task.status.value}")
    for name, task in baseline.items():
        print(f"  baseline {name:<8} {task.status.value}")


if __name__ == "__main__":
    main()
