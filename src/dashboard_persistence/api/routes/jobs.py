"""Job endpoints: submit a save/load and poll it for status and ``loadedData``."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from dashboard_persistence.models import JobState, JobStatus, TaskConfiguration
from dashboard_persistence.services.persistence_service import DashboardPersistenceService

log = logging.getLogger(__name__)

router = APIRouter(tags=["jobs"])


class JobRequest(BaseModel):
    """Task inputs as the dashboard sends them; omitted fields take defaults."""

    model_config = ConfigDict(populate_by_name=True)

    directory: Optional[str] = None
    operation: Optional[str] = None
    data_key: Optional[str] = Field(default=None, alias="dataKey")
    json_data: str = Field(default="", alias="jsonData")

    def to_config(self) -> TaskConfiguration:
        return TaskConfiguration(
            directory=self.directory,
            operation=self.operation,
            data_key=self.data_key,
            payload=self.json_data,
        )


class JobAccepted(BaseModel):
    """Response confirming the job was scheduled."""

    job_id: str
    status: JobState = JobState.QUEUED
    message: str = "Persistence job has been queued."


class JobDetail(JobStatus):
    """Job snapshot plus the data a Load published, if any."""

    loaded_data: Optional[str] = Field(default=None, serialization_alias="loadedData")


def _service(req: Request) -> DashboardPersistenceService:
    return req.app.state.service


@router.post("/jobs", response_model=JobAccepted, status_code=202)
async def submit_job(request: JobRequest, req: Request) -> JobAccepted:
    """Schedule a save or load and return immediately with a job ID."""
    job = _service(req).submit(request.to_config())
    return JobAccepted(job_id=job.job_id, status=job.state)


@router.get("/jobs/{job_id}", response_model=JobDetail)
async def get_job(job_id: str, req: Request) -> JobDetail:
    """Current state, log and ``loadedData`` for a job."""
    service = _service(req)
    status = service.job(job_id).status()
    return JobDetail(**status.model_dump(), loaded_data=service.loaded_data(job_id))


@router.delete("/jobs/{job_id}", response_model=JobStatus)
async def retire_job(job_id: str, req: Request) -> JobStatus:
    """Forget a finished job once the caller has read its outcome."""
    status = _service(req).retire(job_id)
    log.info(f"Retired job {job_id} ({status.state.value})")
    return status
