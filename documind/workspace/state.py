from enum import Enum

from documind.logging.logger import Log
from documind.workspace.exceptions import InvalidTransitionError


class AnalysisStatus(str, Enum):
    IDLE = "IDLE"
    ANALYZING = "ANALYZING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


class AnalysisStateMachine:
    """Tracks IDLE -> ANALYZING -> COMPLETED | ERROR for one workspace."""

    _TRANSITIONS: dict[str, tuple[frozenset[AnalysisStatus], AnalysisStatus]] = {
        "start": (
            frozenset({AnalysisStatus.IDLE, AnalysisStatus.COMPLETED, AnalysisStatus.ERROR}),
            AnalysisStatus.ANALYZING,
        ),
        "succeed": (frozenset({AnalysisStatus.ANALYZING}), AnalysisStatus.COMPLETED),
        "fail": (frozenset({AnalysisStatus.ANALYZING}), AnalysisStatus.ERROR),
    }

    def __init__(self) -> None:
        self._status = AnalysisStatus.IDLE

    @property
    def status(self) -> AnalysisStatus:
        return self._status

    def start(self) -> None:
        self._apply("start")

    def succeed(self) -> None:
        self._apply("succeed")

    def fail(self) -> None:
        self._apply("fail")

    def reset(self) -> None:
        self._status = AnalysisStatus.IDLE

    def _apply(self, event: str) -> None:
        allowed, target = self._TRANSITIONS[event]
        if self._status not in allowed:
            raise InvalidTransitionError(
                f"Cannot {event} while {self._status.value}"
            )
        Log.debug(f"Analysis status {self._status.value} -> {target.value}")
        self._status = target
