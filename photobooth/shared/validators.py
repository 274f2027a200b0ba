"""Shared validation utilities"""

import re
import secrets
import string
from dataclasses import dataclass
from typing import Optional

BASIC_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class EmailValidationResult:
    is_valid: bool
    error: Optional[str] = None


@dataclass
class PhoneValidationResult:
    is_valid: bool
    error: Optional[str] = None
    formatted: Optional[str] = None


@dataclass
class PasswordStrength:
    score: int
    feedback: str
    is_valid: bool


def is_valid_email(email: Optional[str]) -> bool:
    """Basic `local@domain.tld` shape check"""
    return bool(email) and bool(BASIC_EMAIL_PATTERN.fullmatch(email))


def is_valid_phone(phone: Optional[str]) -> bool:
    """Exactly 10 digits once whitespace is removed"""
    if not phone:
        return False
    return bool(re.fullmatch(r"[0-9]{10}", re.sub(r"\s", "", phone)))


# Consumer email providers accepted without further domain checks
ALLOWED_EMAIL_DOMAINS = {
    "gmail.com",
    "outlook.fr",
    "outlook.com",
    "live.fr",
    "live.com",
    "hotmail.fr",
    "hotmail.com",
    "yahoo.fr",
    "yahoo.com",
    "orange.fr",
    "wanadoo.fr",
    "free.fr",
    "sfr.fr",
    "laposte.net",
    "icloud.com",
    "me.com",
    "mac.com",
    "protonmail.com",
    "proton.me",
    "aol.com",
    "aol.fr",
    "gmx.fr",
    "gmx.com",
    "msn.com",
    "bouygtel.fr",
    "bbox.fr",
    "club-internet.fr",
    "numericable.fr",
    "neuf.fr",
    "aliceadsl.fr",
    "cegetel.net",
    "tele2.fr",
    "mail.com",
    "yandex.com",
    "zoho.com",
}

BLOCKED_EMAIL_PATTERNS = [
    re.compile(r"^[a-z]{2,4}@[a-z]{5,15}\.(fr|com)$", re.IGNORECASE),
    re.compile(r"test@test\.", re.IGNORECASE),
    re.compile(r"admin@admin\.", re.IGNORECASE),
    re.compile(r"example@example\.", re.IGNORECASE),
    re.compile(r"fake@fake\.", re.IGNORECASE),
    re.compile(r"demo@demo\.", re.IGNORECASE),
]

SUSPICIOUS_DOMAIN_PATTERNS = [
    re.compile(r"^[a-z]{2,3}$", re.IGNORECASE),
    re.compile(r"^test", re.IGNORECASE),
    re.compile(r"^fake", re.IGNORECASE),
    re.compile(r"^demo", re.IGNORECASE),
    re.compile(r"^example", re.IGNORECASE),
    re.compile(r"^\d+$"),
]

VALID_TLDS = {"com", "fr", "org", "net", "eu", "be", "ch", "de", "es", "it", "uk", "ca", "us"}

FAKE_EMAIL_ERROR = "Cette adresse email semble fictive. Veuillez utiliser une adresse email réelle"


def validate_email_strict(email: Optional[str]) -> EmailValidationResult:
    """
    Validate an email address against known providers and fake-address heuristics.

    Args:
        email: Email address as typed by the user

    Returns:
        EmailValidationResult with the first failing rule's message
    """
    if not email or not email.strip():
        return EmailValidationResult(False, "L'adresse email est requise")

    email = email.strip().lower()

    if not BASIC_EMAIL_PATTERN.fullmatch(email):
        return EmailValidationResult(False, "Veuillez entrer une adresse email valide")

    for pattern in BLOCKED_EMAIL_PATTERNS:
        if pattern.search(email):
            return EmailValidationResult(False, FAKE_EMAIL_ERROR)

    parts = email.split("@")
    if len(parts) != 2:
        return EmailValidationResult(False, "Format d'email invalide")

    local_part, domain = parts

    if not local_part or len(local_part) > 64:
        return EmailValidationResult(False, "La partie avant @ est invalide")

    if not domain or len(domain) > 255:
        return EmailValidationResult(False, "Le domaine email est invalide")

    if domain in ALLOWED_EMAIL_DOMAINS:
        return EmailValidationResult(True)

    labels = domain.split(".")
    if len(labels) < 2:
        return EmailValidationResult(False, "Le domaine email est invalide")

    if labels[-1] not in VALID_TLDS:
        return EmailValidationResult(
            False,
            "L'extension du domaine n'est pas reconnue. "
            "Utilisez un fournisseur d'email connu (Gmail, Outlook, etc.)",
        )

    main_domain = labels[-2]
    if len(main_domain) < 2:
        return EmailValidationResult(False, "Le domaine email est trop court")

    if len(labels) == 2 and len(main_domain) < 4:
        return EmailValidationResult(
            False,
            "Ce domaine email semble invalide. Veuillez utiliser un fournisseur d'email "
            "reconnu (Gmail, Outlook, Yahoo, Orange, Free, etc.)",
        )

    for pattern in SUSPICIOUS_DOMAIN_PATTERNS:
        if pattern.search(main_domain):
            return EmailValidationResult(False, FAKE_EMAIL_ERROR)

    return EmailValidationResult(True)


def _clean_phone(phone: str) -> str:
    return re.sub(r"[\s.\-()]", "", phone)


def validate_phone_strict(phone: Optional[str]) -> PhoneValidationResult:
    """
    Validate and normalize a French phone number.

    Accepts the national form 0XXXXXXXXX and the international form +33XXXXXXXXX.

    Returns:
        PhoneValidationResult; `formatted` holds the canonically spaced number
    """
    if not phone or not phone.strip():
        return PhoneValidationResult(False, "Le numéro de téléphone est requis")

    digits = _clean_phone(phone)

    if digits.startswith("+33"):
        number = digits[3:]
        if not re.fullmatch(r"\d{9}", number):
            return PhoneValidationResult(
                False,
                "Le numéro avec +33 doit contenir exactement 9 chiffres (ex: +33612345678)",
            )
        if not re.match(r"[1-9]", number):
            return PhoneValidationResult(
                False, "Le numéro doit commencer par un chiffre entre 1 et 9 après +33"
            )
        formatted = f"+33 {number[0]} {number[1:3]} {number[3:5]} {number[5:7]} {number[7:9]}"
        return PhoneValidationResult(True, formatted=formatted)

    if digits.startswith("0"):
        if not re.fullmatch(r"\d{10}", digits):
            return PhoneValidationResult(
                False,
                "Le numéro français doit contenir exactement 10 chiffres (ex: 0612345678)",
            )
        if digits[1] == "0":
            return PhoneValidationResult(
                False, "Le numéro doit commencer par 01, 02, 03, 04, 05, 06, 07, 08 ou 09"
            )
        formatted = " ".join(digits[i : i + 2] for i in range(0, 10, 2))
        return PhoneValidationResult(True, formatted=formatted)

    return PhoneValidationResult(
        False,
        "Le numéro doit commencer par 0 (10 chiffres) ou +33 (9 chiffres). "
        "Exemples: 0612345678 ou +33612345678",
    )


def format_phone_while_typing(phone: str) -> str:
    """Progressively space a partially typed French number"""
    digits = _clean_phone(phone)

    if digits.startswith("+33"):
        number = digits[3:]
        groups = [number[0:1], number[1:3], number[3:5], number[5:7], number[7:9]]
        return " ".join(["+33"] + [g for g in groups if g])

    if digits.startswith("0"):
        groups = [digits[i : i + 2] for i in range(0, 10, 2)]
        return " ".join(g for g in groups if g)

    return phone


SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'


def validate_password(password: str) -> PasswordStrength:
    """Score a password 0-5; only a full score is accepted"""
    checks = [
        (len(password) >= 8, "Au moins 8 caractères"),
        (re.search(r"[A-Z]", password) is not None, "Au moins une majuscule"),
        (re.search(r"[a-z]", password) is not None, "Au moins une minuscule"),
        (re.search(r"[0-9]", password) is not None, "Au moins un chiffre"),
        (any(c in SPECIAL_CHARACTERS for c in password), "Au moins un caractère spécial"),
    ]
    score = sum(1 for passed, _ in checks if passed)
    missing = [label for passed, label in checks if not passed]
    feedback = ", ".join(missing) if missing else "Mot de passe fort"
    return PasswordStrength(score=score, feedback=feedback, is_valid=score == 5)


def generate_secure_password(length: int = 12) -> str:
    """Generate a password that always satisfies validate_password"""
    special = "!@#$%^&*()"
    pools = [string.ascii_lowercase, string.ascii_uppercase, string.digits, special]
    alphabet = "".join(pools)

    chars = [secrets.choice(pool) for pool in pools]
    chars += [secrets.choice(alphabet) for _ in range(length - len(pools))]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)
