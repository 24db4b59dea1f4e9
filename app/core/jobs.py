from threading import Lock

from app.models.schemas import JobRecord


class JobRegistry:
    def __init__(self) -> None:
        self._jobs: dict[str, JobRecord] = {}
        self._guard = Lock()

    def add(self, record: JobRecord) -> None:
        with self._guard:
            self._jobs[record.job_id] = record

    def get(self, job_id: str) -> JobRecord | None:
        with self._guard:
            return self._jobs.get(job_id)

    def update(self, job_id: str, **changes) -> JobRecord:
        with self._guard:
            record = self._jobs[job_id].model_copy(update=changes)
            self._jobs[job_id] = record
            return record

    def __len__(self) -> int:
        with self._guard:
            return len(self._jobs)


registry = JobRegistry()
