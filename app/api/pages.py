from pathlib import Path
from typing import Literal, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.client.meetings import ViewClientError, items
from app.client.view import DecisionExpansion, decision_views, find_decision, summarize
from app.core.config import settings
from app.core.dependencies import IdentityResolverDependency, MeetingsClientDependency

TEMPLATE_DIR = Path(__file__).resolve().parents[2] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

router = APIRouter(tags=["pages"], include_in_schema=False)

VoteCategory = Literal["favor", "against", "abstention"]


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request, client: MeetingsClientDependency, year: Optional[int] = None
):
    year = year or settings.meetings_year
    meetings, error = [], None
    try:
        meetings = [summarize(meeting) for meeting in await client.recent_meetings(year)]
    except ViewClientError as exc:
        error = exc.message

    return templates.TemplateResponse(
        request,
        "frontend/home.html",
        {"app_name": settings.APP_NAME, "year": year, "meetings": meetings, "error": error},
        status_code=status.HTTP_502_BAD_GATEWAY if error else status.HTTP_200_OK,
    )


@router.get("/meetings/{meeting_id}", response_class=HTMLResponse)
async def meeting_page(
    request: Request,
    meeting_id: str,
    client: MeetingsClientDependency,
    resolver: IdentityResolverDependency,
    decision: Optional[str] = None,
    category: Optional[VoteCategory] = None,
):
    context = {"app_name": settings.APP_NAME, "meeting_id": meeting_id}
    try:
        detail = await client.meeting_detail(meeting_id)
    except ViewClientError as exc:
        return templates.TemplateResponse(
            request,
            "frontend/meeting.html",
            {**context, "error": exc.message},
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    expansion = DecisionExpansion(resolver)
    voters = []
    if decision and category:
        record = find_decision(detail.decisions, decision)
        if record is not None:
            voters = await expansion.expand(record, category)

    def toggle_url(decision_id: str, vote_category: str) -> str:
        selected = expansion.after_toggle(decision_id, vote_category)
        if selected is None:
            return f"/meetings/{meeting_id}"
        query = urlencode({"decision": decision_id, "category": selected})
        return f"/meetings/{meeting_id}?{query}"

    main = items(detail.main)
    return templates.TemplateResponse(
        request,
        "frontend/meeting.html",
        {
            **context,
            "error": None,
            "meeting": summarize(main[0]) if main else None,
            "activities": [summarize(activity) for activity in items(detail.activities)],
            "foreseen_activities": [
                summarize(activity) for activity in items(detail.foreseen_activities)
            ],
            "vote_results": [summarize(result) for result in items(detail.vote_results)],
            "decisions": decision_views(detail.decisions, expansion, voters),
            "meeting_decisions": decision_views(detail.meeting_decisions, expansion),
            "toggle_url": toggle_url,
        },
    )
