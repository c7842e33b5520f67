"""
Jobs page: list, search and create job postings
"""
from dataclasses import asdict

import structlog

from app.core.exceptions import StoreError
from app.jobs.schemas import JobCard, JobRow, JobsView
from app.pages.controller import PageController
from app.pages.forms import CreateForm, FormField
from app.pages.listing import SearchableList

logger = structlog.get_logger()

JOB_FORM_FIELDS = (
    FormField("title", "Job title", required=True),
    FormField("department", "Department"),
    FormField("location", "Location"),
    FormField("description", "Description", required=True),
    FormField("requirements", "Requirements"),
)


def job_card(job: JobRow) -> JobCard:
    return JobCard(
        id=job.id,
        title=job.title,
        department=job.department or None,
        location=job.location or None,
        status=job.status,
        badge_variant="default" if job.status == "open" else "secondary",
        description=job.description,
        created_at=job.created_at,
    )


class JobsPage(PageController):
    name = "jobs"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.jobs: SearchableList[JobRow] = SearchableList(
            ("title", "department", "location"),
            empty_title="No jobs found",
            create_hint="Create your first job posting",
        )
        self.form = CreateForm(JOB_FORM_FIELDS)

    async def load(self):
        lifetime = self.lifetime
        try:
            result = await self.store.table("jobs").select("*", order_by="created_at", ascending=False)
        except StoreError as e:
            if self.is_stale(lifetime):
                return
            logger.warning("jobs_load_failed", error=e.message)
            self.notifier.error("Failed to load jobs")
            return
        if self.is_stale(lifetime):
            return
        self.jobs.set_rows([JobRow.model_validate(row) for row in result.rows])
        logger.debug("jobs_loaded", count=len(self.jobs.rows))

    async def create_job(self) -> bool:
        """Submit the draft as a new job owned by the signed-in user"""
        if self.session is None:
            return False
        owner = self.session.user.id
        lifetime = self.lifetime

        async def insert(record):
            result = await self.store.table("jobs").insert({**record, "created_by": owner})
            logger.info("job_created", job_id=result.rows[0]["id"], title=record["title"])

        created = await self.form.submit(insert, lifetime)
        if self.is_stale(lifetime):
            return created
        if not created:
            self.notifier.error(self.form.error or "Failed to create job")
            return False
        self.notifier.success("Job created successfully!")
        await self.load()
        return True

    async def set_status(self, job_id: str, status: str) -> bool:
        """Open or close a posting; only rows the caller may edit are touched"""
        if self.session is None:
            return False
        lifetime = self.lifetime
        try:
            result = await self.store.table("jobs").update({"status": status}, id=job_id)
        except StoreError as e:
            if not self.is_stale(lifetime):
                self.notifier.error(e.message)
            return False
        if self.is_stale(lifetime):
            return bool(result.rows)
        if not result.rows:
            self.notifier.error("Job not found or not editable")
            return False
        logger.info("job_status_updated", job_id=job_id, status=status)
        self.notifier.success(f"Job marked as {status}")
        await self.load()
        return True

    def view(self) -> JobsView:
        empty = self.jobs.empty_state()
        return JobsView(
            search=self.jobs.search,
            total=len(self.jobs.rows),
            jobs=[job_card(job) for job in self.jobs.filtered()],
            empty_state=asdict(empty) if empty else None,
            dialog=self.form.as_dict(),
            notifications=self.notifier.as_list(),
        )
