import pytest

from love_odds.core.intake import TOTAL_STEPS, IntakeWizard, meeting_methods
from love_odds.core.models.city import City
from love_odds.core.models.intake import MeetingMethod

PARIS = City(name="Paris", country="FR", population=2148000, is_capital=True)
LYON = City(name="Lyon", country="FR", population=513000)


def test_meeting_methods():
    assert meeting_methods() == [
        ("friends", "Through Friends"),
        ("online", "Online Dating"),
        ("work", "At Work"),
        ("school", "At School"),
        ("hobbies", "Through Hobbies"),
        ("other", "Other"),
    ]


def test_new_wizard_is_blocked_on_first_step():
    wizard = IntakeWizard()

    assert wizard.step == 1
    assert wizard.missing_fields() == ["first_name", "birth_location"]
    assert not wizard.can_advance
    assert not wizard.is_complete
    with pytest.raises(ValueError):
        wizard.next()


def test_full_walkthrough():
    wizard = IntakeWizard()

    wizard.update_partner(1, first_name="Ada", birth_location=PARIS)
    assert wizard.can_advance
    assert wizard.next() == 2

    wizard.update_partner(2, first_name="  ")
    assert wizard.missing_fields() == ["first_name", "birth_location"]
    wizard.update_partner(2, first_name="Grace", birth_location=LYON)
    assert wizard.next() == 3

    wizard.update_meeting(location=PARIS)
    assert wizard.missing_fields() == ["how_met"]
    wizard.update_meeting(how_met="hobbies")

    assert wizard.form.meeting.how_met is MeetingMethod.HOBBIES
    assert wizard.is_complete
    assert wizard.step == TOTAL_STEPS
    assert not wizard.can_advance
    with pytest.raises(ValueError):
        wizard.next()


def test_clearing_a_city_blocks_the_step():
    wizard = IntakeWizard()
    wizard.update_partner(1, first_name="Ada", birth_location=PARIS)

    wizard.update_partner(1, birth_location=None)

    assert wizard.form.partner_one.first_name == "Ada"
    assert wizard.missing_fields() == ["birth_location"]


def test_back_keeps_answers():
    wizard = IntakeWizard()
    wizard.update_partner(1, first_name="Ada", birth_location=PARIS)
    wizard.next()

    assert wizard.back() == 1
    assert wizard.back() == 1
    assert wizard.form.partner_one.birth_location == PARIS


def test_meeting_step_is_not_a_partner():
    wizard = IntakeWizard()
    with pytest.raises(ValueError):
        wizard.update_partner(3, first_name="Nobody")
