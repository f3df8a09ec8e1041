from sfpulse.scheduler.scheduler_service import scheduler_service, SchedulerService

__all__ = [
    "scheduler_service",
    "SchedulerService",
]
