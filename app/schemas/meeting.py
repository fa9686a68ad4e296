from typing import Any, Optional

from pydantic import BaseModel

MEP_PHOTO_URL = "https://www.europarl.europa.eu/mepphoto/{mep_id}.jpg"


class MeetingSummary(BaseModel):
    id: str
    title: str
    date: str
    location: str
    type: str


class MeetingDetail(BaseModel):
    main: Any
    activities: Any
    decisions: Any
    foreseen_activities: Any
    vote_results: Any
    meeting_decisions: Any


class PersonIdentity(BaseModel):
    id: str
    name: str
    image_url: Optional[str] = None

    @classmethod
    def unresolved(cls, mep_id: str) -> "PersonIdentity":
        return cls(id=mep_id, name=mep_id)

    @classmethod
    def from_record(cls, mep_id: str, payload: Any) -> "PersonIdentity":
        record = payload
        if isinstance(payload, dict) and isinstance(payload.get("data"), list):
            record = payload["data"][0] if payload["data"] else {}
        if not isinstance(record, dict):
            record = {}

        name = record.get("label")
        if not name:
            parts = [record.get("givenName"), record.get("familyName")]
            name = " ".join(part for part in parts if part)
        image_url = record.get("img") or MEP_PHOTO_URL.format(mep_id=mep_id)
        return cls(id=mep_id, name=name or mep_id, image_url=image_url)
