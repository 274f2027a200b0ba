"""Multi-step booking wizard

Selection -> Contact -> Confirmed, forward only. Going back from Contact keeps
everything already entered. Confirmed is terminal; a new booking needs a new
wizard.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from ...shared.errors import (
    AppError,
    InvalidStepTransitionError,
    SubmissionInProgressError,
)
from .forms import CONTACT_STEP, SELECTION_STEP, BookingForm, StepResult, validate_step
from .service import BookingConfirmation

logger = logging.getLogger(__name__)


class WizardStep(str, Enum):
    SELECTION = SELECTION_STEP
    CONTACT = CONTACT_STEP
    CONFIRMED = "confirmed"


class BookingWizard:
    """Drives one customer's way through the booking form"""

    def __init__(
        self,
        submit: Callable[[BookingForm], BookingConfirmation],
        form: Optional[BookingForm] = None,
    ):
        self._submit = submit
        self.form = form or BookingForm()
        self.step = WizardStep.SELECTION
        self.errors: dict[str, str] = {}
        self.confirmation: Optional[BookingConfirmation] = None
        self.submitting = False

    def advance(self) -> StepResult:
        """Validate the current step and move forward when it passes"""
        if self.step != WizardStep.SELECTION:
            raise InvalidStepTransitionError()

        result = validate_step(self.step.value, self.form)
        self.errors = result.errors
        if result.valid:
            self.step = WizardStep.CONTACT
        return result

    def back(self) -> None:
        if self.step != WizardStep.CONTACT or self.submitting:
            raise InvalidStepTransitionError()
        self.errors = {}
        self.step = WizardStep.SELECTION

    def submit(self) -> Optional[BookingConfirmation]:
        """
        Validate the contact step and record the booking.

        Returns the confirmation, or None when the contact step is invalid
        (errors are left on `self.errors`). Workflow errors propagate and the
        wizard stays on Contact with its data intact.
        """
        if self.submitting:
            raise SubmissionInProgressError()
        if self.step != WizardStep.CONTACT:
            raise InvalidStepTransitionError()

        result = validate_step(self.step.value, self.form)
        self.errors = result.errors
        if not result.valid:
            return None

        self.submitting = True
        try:
            self.confirmation = self._submit(self.form)
        except AppError as e:
            logger.info(f"Booking submission failed ({e.code}), staying on contact step")
            raise
        finally:
            self.submitting = False

        self.step = WizardStep.CONFIRMED
        return self.confirmation
