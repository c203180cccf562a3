"""File-backed job registry the plugin iterates over."""

import json
from pathlib import Path
from typing import Any, Callable, List, Optional
from .models import JobView, JobState


class JobRegistry:
    """JSON file holding the host's live job list."""

    def __init__(self, data_dir: str = ".xfactor"):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.jobs_file = self.data_dir / "jobs.json"

        if not self.jobs_file.exists():
            self._write_json(self.jobs_file, [])

    def _write_json(self, file_path: Path, data: Any) -> None:
        """Write data to JSON file with atomic write."""
        temp_file = file_path.with_suffix(".tmp")
        with open(temp_file, "w") as f:
            json.dump(data, f, indent=2, default=str)
        temp_file.replace(file_path)

    def _read_json(self, file_path: Path) -> Any:
        if not file_path.exists():
            return []
        with open(file_path, "r") as f:
            return json.load(f)

    def _save(self, jobs: List[JobView]) -> None:
        self._write_json(self.jobs_file, [job.model_dump(mode="json") for job in jobs])

    def get_job(self, job_id: str) -> Optional[JobView]:
        """Get a job by ID."""
        for job_data in self._read_json(self.jobs_file):
            if job_data["id"] == job_id:
                return JobView(**job_data)
        return None

    def add_job(self, job: JobView) -> None:
        """Add a new job to the registry."""
        jobs = self.get_all_jobs()
        jobs.append(job)
        self._save(jobs)

    def update_job(self, job: JobView) -> None:
        """Update an existing job."""
        jobs = self.get_all_jobs()
        for i, existing in enumerate(jobs):
            if existing.id == job.id:
                jobs[i] = job
                self._save(jobs)
                return
        raise ValueError(f"Job {job.id} not found")

    def get_all_jobs(self) -> List[JobView]:
        return [JobView(**job_data) for job_data in self._read_json(self.jobs_file)]

    def get_jobs_by_state(self, state: JobState) -> List[JobView]:
        return [job for job in self.get_all_jobs() if job.state == state]

    def for_each(self, visitor: Callable[[JobView], None]) -> int:
        """Call ``visitor`` on every job and persist what it changed.

        Returns the number of jobs visited.
        """
        jobs = self.get_all_jobs()
        for job in jobs:
            visitor(job)
        self._save(jobs)
        return len(jobs)
