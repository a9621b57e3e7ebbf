"""Validation of participant form fields.

The rules mirror the public procuration form: names are required, the
national elector number (NNE) is digits only, phone numbers allow the usual
separators and the voting bureau is one of the town's three bureaus.
"""

import re

from src.domain.exceptions import ValidationError
from src.domain.value_objects.participant_fields import ParticipantFields


_NNE_PATTERN = re.compile(r"^[0-9]{1,15}$")
_PHONE_PATTERN = re.compile(r"^[0-9\s+.()-]{8,20}$")
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

VALID_VOTING_BUREAUS = (1, 2, 3)


class ProxyParticipantValidator:
    """Checks participant fields before they reach the store."""

    def collect_errors(self, fields: ParticipantFields) -> dict[str, str]:
        """Return a field name → message map, empty when the fields are valid."""
        errors: dict[str, str] = {}

        if not fields.first_name.strip():
            errors["first_name"] = "Le prénom est requis"
        if not fields.last_name.strip():
            errors["last_name"] = "Le nom est requis"

        nne = fields.national_elector_number.strip()
        if not nne:
            errors["national_elector_number"] = (
                "Le numéro national d'électeur/électrice est requis"
            )
        elif not _NNE_PATTERN.match(nne):
            errors["national_elector_number"] = (
                "Le NNE doit contenir uniquement des chiffres (sans espace)"
            )

        phone = fields.phone.strip()
        if not phone:
            errors["phone"] = "Le numéro de téléphone est requis"
        elif not _PHONE_PATTERN.match(phone):
            errors["phone"] = "Numéro de téléphone invalide"

        email = fields.email.strip()
        if not email:
            errors["email"] = "L'email est requis"
        elif not _EMAIL_PATTERN.match(email):
            errors["email"] = "Email invalide"

        if (
            fields.voting_bureau is not None
            and fields.voting_bureau not in VALID_VOTING_BUREAUS
        ):
            errors["voting_bureau"] = "Bureau de vote invalide"

        return errors

    def validate(self, fields: ParticipantFields) -> ParticipantFields:
        """Validate and normalize fields.

        Returns:
            The fields with surrounding whitespace stripped

        Raises:
            ValidationError: If any field is invalid; details holds every error
        """
        errors = self.collect_errors(fields)
        if errors:
            raise ValidationError(
                "; ".join(errors.values()), {"fields": errors}
            )
        return fields.normalized()
