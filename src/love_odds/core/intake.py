from typing import List, Optional, Tuple

from love_odds.core.models.city import City
from love_odds.core.models.intake import (
    IntakeForm,
    MeetingMethod,
    PartnerDetails,
)

TOTAL_STEPS = 3

_UNSET = object()


def meeting_methods() -> List[Tuple[str, str]]:
    """(value, label) pairs for the "How did you meet?" select."""
    return [(m.value, m.label) for m in MeetingMethod]


class IntakeWizard:
    """
    Three-step intake form: partner one, partner two, meeting details.
    """

    def __init__(self, form: Optional[IntakeForm] = None):
        self.form = form or IntakeForm()
        self.step = 1

    def _partner(self, step: int) -> PartnerDetails:
        if step == 1:
            return self.form.partner_one
        if step == 2:
            return self.form.partner_two
        raise ValueError(f"Step {step} does not describe a partner")

    def update_partner(
        self,
        step: int,
        first_name: Optional[str] = None,
        birth_location=_UNSET,
    ) -> PartnerDetails:
        current = self._partner(step)
        changes = {}
        if first_name is not None:
            changes["first_name"] = first_name
        if birth_location is not _UNSET:
            changes["birth_location"] = birth_location
        updated = current.model_copy(update=changes)

        if step == 1:
            self.form.partner_one = updated
        else:
            self.form.partner_two = updated
        return updated

    def update_meeting(
        self,
        location=_UNSET,
        how_met: Optional[MeetingMethod] = None,
    ) -> None:
        changes = {}
        if location is not _UNSET:
            changes["location"] = location
        if how_met is not None:
            changes["how_met"] = MeetingMethod(how_met)
        self.form.meeting = self.form.meeting.model_copy(update=changes)

    def missing_fields(self, step: Optional[int] = None) -> List[str]:
        step = step or self.step
        if step in (1, 2):
            partner = self._partner(step)
            missing = []
            if not partner.first_name.strip():
                missing.append("first_name")
            if not isinstance(partner.birth_location, City):
                missing.append("birth_location")
            return missing
        if step == 3:
            meeting = self.form.meeting
            missing = []
            if not isinstance(meeting.location, City):
                missing.append("location")
            if meeting.how_met is None:
                missing.append("how_met")
            return missing
        raise ValueError(f"Unknown step {step}")

    @property
    def can_advance(self) -> bool:
        return self.step < TOTAL_STEPS and not self.missing_fields()

    @property
    def is_complete(self) -> bool:
        return all(not self.missing_fields(s) for s in range(1, TOTAL_STEPS + 1))

    def next(self) -> int:
        if self.step >= TOTAL_STEPS:
            raise ValueError("Already on the last step")
        missing = self.missing_fields()
        if missing:
            raise ValueError(
                f"Step {self.step} is incomplete: {', '.join(missing)}"
            )
        self.step += 1
        return self.step

    def back(self) -> int:
        if self.step > 1:
            self.step -= 1
        return self.step
