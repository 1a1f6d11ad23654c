from .run_result import RunResult, ViolationReport

__all__ = [
    "RunResult",
    "ViolationReport",
]
