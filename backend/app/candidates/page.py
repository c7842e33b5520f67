"""
Candidates page: list, search and add candidates
"""
from dataclasses import asdict

import structlog

from app.candidates.schemas import CandidateCard, CandidateRow, CandidatesView
from app.core.exceptions import StoreError
from app.pages.controller import PageController
from app.pages.forms import CreateForm, FieldKind, FormField
from app.pages.listing import SearchableList

logger = structlog.get_logger()

CANDIDATE_FORM_FIELDS = (
    FormField("full_name", "Full name", required=True),
    FormField("email", "Email", required=True, kind=FieldKind.EMAIL),
    FormField("phone", "Phone"),
    FormField("location", "Location"),
    FormField("linkedin_url", "LinkedIn URL"),
    FormField("experience_years", "Years of experience", kind=FieldKind.INTEGER),
)


def candidate_card(candidate: CandidateRow) -> CandidateCard:
    experience = None
    if candidate.experience_years:
        experience = f"{candidate.experience_years} years of experience"
    return CandidateCard(
        id=candidate.id,
        full_name=candidate.full_name,
        email=candidate.email,
        experience=experience,
        phone=candidate.phone or None,
        location=candidate.location or None,
        resume_url=candidate.resume_url or None,
        created_at=candidate.created_at,
    )


class CandidatesPage(PageController):
    name = "candidates"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.candidates: SearchableList[CandidateRow] = SearchableList(
            ("full_name", "email", "location"),
            empty_title="No candidates found",
            create_hint="Add your first candidate",
        )
        self.form = CreateForm(CANDIDATE_FORM_FIELDS)

    async def load(self):
        lifetime = self.lifetime
        try:
            result = await self.store.table("candidates").select("*", order_by="created_at", ascending=False)
        except StoreError as e:
            if self.is_stale(lifetime):
                return
            logger.warning("candidates_load_failed", error=e.message)
            self.notifier.error("Failed to load candidates")
            return
        if self.is_stale(lifetime):
            return
        self.candidates.set_rows([CandidateRow.model_validate(row) for row in result.rows])

    async def create_candidate(self) -> bool:
        if self.session is None:
            return False
        lifetime = self.lifetime

        async def insert(record):
            result = await self.store.table("candidates").insert(record)
            logger.info("candidate_created", candidate_id=result.rows[0]["id"])

        created = await self.form.submit(insert, lifetime)
        if self.is_stale(lifetime):
            return created
        if not created:
            self.notifier.error(self.form.error or "Failed to add candidate")
            return False
        self.notifier.success("Candidate added successfully!")
        await self.load()
        return True

    def view(self) -> CandidatesView:
        empty = self.candidates.empty_state()
        return CandidatesView(
            search=self.candidates.search,
            total=len(self.candidates.rows),
            candidates=[candidate_card(c) for c in self.candidates.filtered()],
            empty_state=asdict(empty) if empty else None,
            dialog=self.form.as_dict(),
            notifications=self.notifier.as_list(),
        )
