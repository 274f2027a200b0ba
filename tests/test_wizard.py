from datetime import date, time
from unittest.mock import MagicMock

import pytest

from photobooth.domain.booking.forms import BookingForm, ContactStep, SelectionStep
from photobooth.domain.booking.service import BookingConfirmation
from photobooth.domain.booking.wizard import BookingWizard, WizardStep
from photobooth.shared.errors import (
    InvalidStepTransitionError,
    SlotTakenError,
    SubmissionInProgressError,
)


def filled_form():
    return BookingForm(
        selection=SelectionStep(product="p1", date="2026-06-20", time="14:00", duration=4),
        contact=ContactStep(
            first_name="Marie",
            last_name="Dupont",
            email="marie.dupont@gmail.com",
            phone="0612345678",
            address="Paris",
            event_type="Gala",
        ),
    )


def confirmation():
    return BookingConfirmation(
        booking_id="b1",
        status="pending",
        product_name="Photobooth Classique",
        event_date=date(2026, 6, 20),
        event_time=time(14, 0),
        duration=4,
        total_price=750,
        customer_name="Marie Dupont",
        email="marie.dupont@gmail.com",
    )


def test_invalid_selection_blocks_advance():
    wizard = BookingWizard(MagicMock())
    result = wizard.advance()

    assert not result.valid
    assert wizard.step == WizardStep.SELECTION
    assert set(wizard.errors) == {"product", "date", "time"}


def test_walks_through_to_confirmed():
    submit = MagicMock(return_value=confirmation())
    wizard = BookingWizard(submit, filled_form())

    assert wizard.advance().valid
    assert wizard.step == WizardStep.CONTACT

    result = wizard.submit()

    assert result.booking_id == "b1"
    assert wizard.step == WizardStep.CONFIRMED
    submit.assert_called_once_with(wizard.form)


def test_back_keeps_entered_data():
    wizard = BookingWizard(MagicMock(), filled_form())
    wizard.advance()
    wizard.form.contact.first_name = "Jeanne"

    wizard.back()

    assert wizard.step == WizardStep.SELECTION
    assert wizard.form.contact.first_name == "Jeanne"
    assert wizard.form.selection.product == "p1"


def test_back_only_from_contact():
    wizard = BookingWizard(MagicMock(), filled_form())
    with pytest.raises(InvalidStepTransitionError):
        wizard.back()


def test_cannot_submit_from_selection():
    wizard = BookingWizard(MagicMock(), filled_form())
    with pytest.raises(InvalidStepTransitionError):
        wizard.submit()


def test_invalid_contact_does_not_call_workflow():
    submit = MagicMock()
    form = filled_form()
    form.contact.phone = "12"
    wizard = BookingWizard(submit, form)
    wizard.advance()

    assert wizard.submit() is None
    assert "phone" in wizard.errors
    assert wizard.step == WizardStep.CONTACT
    submit.assert_not_called()


def test_failed_submission_stays_on_contact():
    submit = MagicMock(side_effect=SlotTakenError())
    wizard = BookingWizard(submit, filled_form())
    wizard.advance()

    with pytest.raises(SlotTakenError):
        wizard.submit()

    assert wizard.step == WizardStep.CONTACT
    assert wizard.submitting is False
    assert wizard.form.contact.email == "marie.dupont@gmail.com"

    submit.side_effect = None
    submit.return_value = confirmation()
    assert wizard.submit() is not None


def test_second_submit_while_in_flight_is_rejected():
    wizard = BookingWizard(MagicMock(), filled_form())

    def reentrant_submit(form):
        with pytest.raises(SubmissionInProgressError):
            wizard.submit()
        return confirmation()

    wizard._submit = reentrant_submit
    wizard.advance()

    assert wizard.submit() is not None
    assert wizard.step == WizardStep.CONFIRMED


def test_confirmed_is_terminal():
    wizard = BookingWizard(MagicMock(return_value=confirmation()), filled_form())
    wizard.advance()
    wizard.submit()

    with pytest.raises(InvalidStepTransitionError):
        wizard.advance()
    with pytest.raises(InvalidStepTransitionError):
        wizard.back()
    with pytest.raises(InvalidStepTransitionError):
        wizard.submit()
