"""Application error taxonomy and constraint-violation classification"""

from typing import Optional

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


class AppError(Exception):
    """Base class for errors surfaced to the user with a fixed message"""

    status_code = 500
    code = "unclassified_error"
    message = "Une erreur est survenue. Veuillez réessayer."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"
    message = "Ressource introuvable"


class FormValidationError(AppError):
    """User-correctable, field-scoped errors. Never reaches the store."""

    status_code = 422
    code = "validation_error"
    message = "Veuillez corriger les champs indiqués"

    def __init__(self, errors: dict[str, str], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message)


class LookupFailedError(AppError):
    status_code = 503
    code = "lookup_failed"
    message = "Erreur lors de la vérification du client. Veuillez réessayer."


class CustomerUpdateError(AppError):
    status_code = 500
    code = "customer_update_failed"
    message = "Erreur lors de la mise à jour des informations client."


class CustomerCreationError(AppError):
    status_code = 500
    code = "customer_creation_failed"
    message = "Erreur lors de la création du profil client. Veuillez vérifier vos informations."


class EmailAlreadyUsedError(AppError):
    status_code = 409
    code = "email_already_used"
    message = "Cette adresse email est déjà utilisée. Veuillez utiliser une autre adresse."


class ProductUnavailableError(AppError):
    status_code = 409
    code = "product_unavailable"
    message = (
        "Erreur: Le produit sélectionné n'est plus disponible. "
        "Veuillez sélectionner un autre photobooth."
    )


class SlotTakenError(AppError):
    status_code = 409
    code = "slot_taken"
    message = (
        "Une réservation existe déjà pour cette date et cet horaire. "
        "Veuillez choisir une autre date."
    )


class BookingCreationError(AppError):
    status_code = 500
    code = "booking_creation_failed"
    message = (
        "Erreur lors de la création de la réservation. "
        "Veuillez vérifier vos informations et réessayer."
    )


class SubmissionInProgressError(AppError):
    status_code = 409
    code = "submission_in_progress"
    message = "Une réservation est déjà en cours d'envoi."


class InvalidStepTransitionError(AppError):
    status_code = 409
    code = "invalid_step"
    message = "Cette étape n'est pas accessible depuis l'étape actuelle."


class InvalidStatusTransitionError(AppError):
    status_code = 409
    code = "invalid_status_transition"
    message = "Ce changement de statut n'est pas autorisé."


class ReferencedRecordError(AppError):
    """Delete rejected because other rows still reference the record"""

    status_code = 409
    code = "record_in_use"
    message = "Impossible de supprimer cet élément: il est encore utilisé."


class CustomerHasBookingsError(ReferencedRecordError):
    code = "customer_has_bookings"
    message = "Impossible de supprimer ce client: des réservations y sont encore rattachées."


class DuplicateRecordError(AppError):
    status_code = 409
    code = "duplicate"
    message = "Cet élément existe déjà."


class StorageError(AppError):
    status_code = 502
    code = "storage_error"
    message = "Erreur lors de l'accès au stockage des fichiers."


class IdentityServiceError(AppError):
    status_code = 502
    code = "identity_error"
    message = "Erreur du service d'authentification."


class AuthenticationError(AppError):
    status_code = 401
    code = "not_authenticated"
    message = "Authentification requise."


class PermissionDeniedError(AppError):
    status_code = 403
    code = "forbidden"
    message = "Accès réservé aux administrateurs."


def classify_integrity_error(error: IntegrityError) -> Optional[str]:
    """
    Map a constraint violation raised by the store to its SQLSTATE class.

    Returns UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION or None when the error is of
    another kind. PostgreSQL drivers expose the SQLSTATE directly; SQLite only
    reports it in the message text.
    """
    orig = getattr(error, "orig", None)
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in (UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION):
        return sqlstate

    text = str(orig if orig is not None else error).lower()
    if "unique constraint" in text or "duplicate key" in text:
        return UNIQUE_VIOLATION
    if "foreign key constraint" in text:
        return FOREIGN_KEY_VIOLATION
    return None
