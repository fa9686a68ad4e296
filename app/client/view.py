from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from app.client import fields
from app.client.identities import IdentityResolver
from app.client.meetings import items
from app.schemas.meeting import MeetingSummary, PersonIdentity
from app.utils.logging import get_logger

logger = get_logger()


def summarize(meeting: Mapping[str, Any]) -> MeetingSummary:
    return MeetingSummary(
        id=fields.meeting_id(meeting),
        title=fields.meeting_title(meeting),
        date=fields.format_date(fields.meeting_date(meeting)),
        location=fields.meeting_location(meeting),
        type=fields.activity_type_label(meeting.get("had_activity_type")),
    )


class DecisionExpansion:
    """Which vote category is disclosed per decision, and who voted.

    Selecting the open category again closes it; selecting another category
    of the same decision switches to it.
    """

    def __init__(self, resolver: IdentityResolver):
        self.resolver = resolver
        self.open: Dict[str, str] = {}
        self.loading: Set[Tuple[str, str]] = set()

    def after_toggle(self, decision_id: str, category: str) -> Optional[str]:
        if category not in fields.VOTE_CATEGORIES:
            raise ValueError(f"Unknown vote category: {category}")
        return None if self.open.get(decision_id) == category else category

    def toggle(self, decision_id: str, category: str) -> Optional[str]:
        selected = self.after_toggle(decision_id, category)
        if selected is None:
            self.open.pop(decision_id, None)
        else:
            self.open[decision_id] = selected
        return selected

    async def expand(
        self, decision: Mapping[str, Any], category: str
    ) -> List[PersonIdentity]:
        decision_id = fields.decision_id(decision)
        if self.toggle(decision_id, category) is None:
            return []

        voters = fields.decision_voters(decision, category)
        logger.info(
            f"Resolving {len(self.resolver.missing(voters))} of {len(voters)} "
            f"voters for {decision_id} ({category})"
        )
        self.loading.add((decision_id, category))
        try:
            identities = await self.resolver.resolve_many(voters)
        finally:
            self.loading.discard((decision_id, category))
        return [identities[voter] for voter in voters]


@dataclass
class DecisionView:
    id: str
    label: str
    outcome: str
    counts: Dict[str, int]
    open_category: Optional[str] = None
    voters: List[PersonIdentity] = field(default_factory=list)


def _outcome(decision: Mapping[str, Any]) -> str:
    outcome = fields.last_segment(decision.get("decision_outcome"))
    return outcome.replace("_", " ").capitalize()


def decision_views(
    payload: Any,
    expansion: DecisionExpansion,
    voters: Optional[List[PersonIdentity]] = None,
) -> List[DecisionView]:
    views = []
    for decision in items(payload):
        decision_id = fields.decision_id(decision)
        counts = {
            category: fields.vote_count(decision, category)
            for category in fields.VOTE_CATEGORIES
        }
        open_category = expansion.open.get(decision_id)
        views.append(
            DecisionView(
                id=decision_id,
                label=fields.record_label(decision) or decision_id,
                outcome=_outcome(decision),
                counts=counts,
                open_category=open_category,
                voters=list(voters or []) if open_category else [],
            )
        )
    return views


def find_decision(payload: Any, decision_id: str) -> Optional[Dict[str, Any]]:
    for decision in items(payload):
        if fields.decision_id(decision) == decision_id:
            return decision
    return None
