from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from love_odds.core.models.city import City


class MeetingMethod(str, Enum):
    FRIENDS = "friends"
    ONLINE = "online"
    WORK = "work"
    SCHOOL = "school"
    HOBBIES = "hobbies"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _MEETING_LABELS[self]


_MEETING_LABELS = {
    MeetingMethod.FRIENDS: "Through Friends",
    MeetingMethod.ONLINE: "Online Dating",
    MeetingMethod.WORK: "At Work",
    MeetingMethod.SCHOOL: "At School",
    MeetingMethod.HOBBIES: "Through Hobbies",
    MeetingMethod.OTHER: "Other",
}


class PartnerDetails(BaseModel):
    first_name: str = Field("", description="First name")
    birth_location: Optional[City] = Field(None, description="Location of birth")


class MeetingDetails(BaseModel):
    location: Optional[City] = Field(None, description="Where the couple met")
    how_met: Optional[MeetingMethod] = None


class IntakeForm(BaseModel):
    partner_one: PartnerDetails = Field(default_factory=PartnerDetails)
    partner_two: PartnerDetails = Field(default_factory=PartnerDetails)
    meeting: MeetingDetails = Field(default_factory=MeetingDetails)
