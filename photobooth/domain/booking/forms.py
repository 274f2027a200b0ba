"""Booking form steps and their validation

The public booking form is split in two steps. Each step is a typed record
with its own validation function; validation never touches the database.
"""

from dataclasses import dataclass, field
from typing import Optional

from ...shared.validators import is_valid_email, is_valid_phone
from .pricing import DEFAULT_DURATION

SELECTION_STEP = "selection"
CONTACT_STEP = "contact"
FORM_STEPS = (SELECTION_STEP, CONTACT_STEP)

EVENT_TYPES = (
    "Mariage",
    "Anniversaire",
    "Soirée d'entreprise",
    "Salon professionnel",
    "Conférence",
    "Gala",
    "Remise de diplôme",
    "Autre",
)


@dataclass
class SelectionStep:
    product: str = ""
    date: str = ""
    time: str = ""
    duration: int = DEFAULT_DURATION


@dataclass
class ContactStep:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    event_type: str = ""
    guests_count: Optional[int] = None
    special_requests: str = ""


@dataclass
class BookingForm:
    selection: SelectionStep = field(default_factory=SelectionStep)
    contact: ContactStep = field(default_factory=ContactStep)


@dataclass
class StepResult:
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors


def _blank(value: Optional[str]) -> bool:
    return not value or not str(value).strip()


def validate_selection(step: SelectionStep) -> StepResult:
    errors = {}
    if _blank(step.product):
        errors["product"] = "Veuillez sélectionner un photobooth"
    if _blank(step.date):
        errors["date"] = "Veuillez sélectionner une date"
    if _blank(step.time):
        errors["time"] = "Veuillez sélectionner une heure"
    return StepResult(errors)


def validate_contact(step: ContactStep) -> StepResult:
    errors = {}
    if _blank(step.first_name):
        errors["firstName"] = "Veuillez entrer votre prénom"
    if _blank(step.last_name):
        errors["lastName"] = "Veuillez entrer votre nom"

    if _blank(step.email):
        errors["email"] = "Veuillez entrer votre email"
    elif not is_valid_email(step.email):
        errors["email"] = "Veuillez entrer un email valide"

    if _blank(step.phone):
        errors["phone"] = "Veuillez entrer votre téléphone"
    elif not is_valid_phone(step.phone):
        errors["phone"] = "Veuillez entrer un numéro de téléphone valide (10 chiffres)"

    if _blank(step.address):
        errors["address"] = "Veuillez entrer l'adresse de l'événement"
    if _blank(step.event_type):
        errors["eventType"] = "Veuillez sélectionner un type d'événement"
    return StepResult(errors)


def validate_step(step: str, form: BookingForm) -> StepResult:
    """Validate one named step of the form"""
    if step == SELECTION_STEP:
        return validate_selection(form.selection)
    if step == CONTACT_STEP:
        return validate_contact(form.contact)
    raise ValueError(f"Unknown form step: {step}")


def validate_form(form: BookingForm) -> StepResult:
    """Validate every step; used right before submission"""
    errors = {}
    for step in FORM_STEPS:
        errors.update(validate_step(step, form).errors)
    return StepResult(errors)
