from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Iterable, Mapping, Sequence, Optional
from app.schemas.assignment import Assignment, Submission

class AssignmentRepo(ABC):
    @abstractmethod
    async def create(self, assignment: Assignment) -> str:
        """Inserisce un assignment (id già generato nel service) e ritorna l'ID."""
        raise NotImplementedError

    @abstractmethod
    async def find_all(self) -> Sequence[Assignment]:
        """Tutti gli assignment, dal più recente."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_status(self, statuses: Iterable[str]) -> Sequence[Assignment]:
        """Assignment con status in `statuses`, dal più recente."""
        raise NotImplementedError

    @abstractmethod
    async def find_one(self, assignment_id: str) -> Optional[Assignment]:
        """Ritorna un assignment per ID, oppure None se non esiste."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, assignment_id: str, fields: Mapping[str, Any]) -> Optional[Assignment]:
        """Applica solo i campi passati. Ritorna l'assignment aggiornato o None."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, assignment_id: str) -> bool:
        """Cancella un assignment con le sue submission. True se qualcosa è stato cancellato."""
        raise NotImplementedError

    @abstractmethod
    async def push_submission(self, assignment_id: str, submission: Submission, ts: datetime) -> bool:
        """Append atomico in coda alle submission. False se l'assignment non esiste."""
        raise NotImplementedError

    @abstractmethod
    async def mark_submission_reviewed(
        self, assignment_id: str, submission_id: str, ts: datetime
    ) -> Optional[Submission]:
        """Imposta reviewed=True sulla sola submission indicata e aggiorna updatedAt.
        Ritorna None se assignment o submission non esistono."""
        raise NotImplementedError
