from __future__ import annotations

from typing import Any, Dict, Optional

from ..errors import BadRequestError
from ..jobs import AsyncJobPoller, JobHandle, JobPoller, JobStatus, UpdateCallback

INGESTION_SOURCES = ("dropbox", "google_drive", "s3")


class BloqsResource:
    """Bulk folder ingestion into a bloq (knowledge base).

    Ingestion runs server-side; `ingest_folder` returns a job description
    whose `job_id` can be handed to `wait_for_ingestion`.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def ingest_folder(
        self,
        bloq_id: int,
        source: str,
        path: str,
        *,
        recursive: bool = False,
        file_types: Optional[list[str]] = None,
        list_name: Optional[str] = None,
        target_list_id: Optional[int] = None,
        create_lists: Optional[bool] = None,
        include_images: bool = False,
        image_detail_level: str = "high",
    ) -> Dict[str, Any]:
        if source not in INGESTION_SOURCES:
            raise BadRequestError(f"Unsupported source {source!r}; expected one of {', '.join(INGESTION_SOURCES)}")
        body: Dict[str, Any] = {"source": source, "path": path, "recursive": recursive}
        if file_types:
            body["file_types"] = list(file_types)
        if list_name is not None:
            body["list_name"] = list_name
        if target_list_id is not None:
            body["target_list_id"] = target_list_id
        if create_lists is not None:
            body["create_lists"] = create_lists
        if include_images:
            body["include_images"] = True
            body["image_detail_level"] = image_detail_level
        return self._client.post(f"/api/v1/bloqs/{bloq_id}/ingest-folder", body)

    def get_ingestion_status(self, job_id: JobHandle) -> JobStatus:
        payload = self._client.get(f"/api/v1/ingestion-jobs/{job_id}/status")
        return JobStatus.from_payload(payload)

    def list_ingestion_jobs(self, bloq_id: int, **options: Any) -> Any:
        return self._client.get(f"/api/v1/bloqs/{bloq_id}/ingestion-jobs", options)

    def cancel_ingestion_job(self, job_id: JobHandle) -> Any:
        return self._client.post(f"/api/v1/ingestion-jobs/{job_id}/cancel")

    def retry_failed_files(self, job_id: JobHandle) -> Any:
        return self._client.post(f"/api/v1/ingestion-jobs/{job_id}/retry")

    def wait_for_ingestion(
        self,
        job_id: JobHandle,
        on_update: Optional[UpdateCallback] = None,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> JobStatus:
        """Block until the job completes; see `JobPoller.wait_for`."""
        s = self._client.settings
        poller = JobPoller(self.get_ingestion_status)
        return poller.wait_for(
            job_id,
            on_update=on_update,
            poll_interval=s.poll_interval if poll_interval is None else poll_interval,
            timeout=s.poll_timeout if timeout is None else timeout,
        )


class AsyncBloqsResource:
    def __init__(self, client: Any) -> None:
        self._client = client

    async def get_ingestion_status(self, job_id: JobHandle) -> JobStatus:
        payload = await self._client.get(f"/api/v1/ingestion-jobs/{job_id}/status")
        return JobStatus.from_payload(payload)

    async def wait_for_ingestion(
        self,
        job_id: JobHandle,
        on_update: Optional[UpdateCallback] = None,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> JobStatus:
        s = self._client.settings
        poller = AsyncJobPoller(self.get_ingestion_status)
        return await poller.wait_for(
            job_id,
            on_update=on_update,
            poll_interval=s.poll_interval if poll_interval is None else poll_interval,
            timeout=s.poll_timeout if timeout is None else timeout,
        )
