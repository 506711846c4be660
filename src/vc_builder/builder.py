"""
Verifiable Credential builder.

Accumulates credential fields through chained setters and assembles an
immutable `VerifiableCredential`:

    credential = (
        VerifiableCredentialBuilder()
        .set_id("urn:uuid:...")
        .set_types(["VerifiableCredential"])
        .set_issuer("did:web:issuer.example")
        .set_issuance_date(datetime.now(timezone.utc))
        .set_credential_subject({"id": "did:example:holder"})
        .build()
    )
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Sequence, Union

from vc_builder.credential import (
    CREDENTIAL_SUBJECT,
    DEFAULT_CONTEXT,
    ID,
    ISSUANCE_DATE,
    ISSUER,
    TYPE,
    Proof,
    Status,
    Subject,
    VerifiableCredential,
    freeze,
)
from vc_builder.dates import canonicalize_date

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (ID, ISSUER, "types", ISSUANCE_DATE, CREDENTIAL_SUBJECT)


class MissingRequiredFieldError(Exception):
    """Raised when a mandatory credential field was never set."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Missing required credential field: {field_name}")
        self.field_name = field_name


class VerifiableCredentialBuilder:
    """Fluent builder for `VerifiableCredential`.

    Setters overwrite the previous value and never validate; all checks and
    canonicalization happen in `build()`.
    """

    def __init__(self) -> None:
        self._context: Sequence[Any] | None = None
        self._id: Any = None
        self._types: Sequence[str] | None = None
        self._issuer: Any = None
        self._issuance_date: datetime | None = None
        self._expiration_date: datetime | None = None
        self._credential_subject: Sequence[Subject] | None = None
        self._proof: Proof | None = None
        self._credential_status: Status | None = None

    @classmethod
    def from_credential(cls, credential: VerifiableCredential) -> VerifiableCredentialBuilder:
        """Create a builder pre-populated from an existing credential.

        Used to re-assemble a credential, e.g. to attach a proof after
        signing.
        """
        return (
            cls()
            .set_context(credential.context)
            .set_id(credential.id)
            .set_types(credential.types)
            .set_issuer(credential.issuer)
            .set_issuance_date(credential.issuance_date)
            .set_expiration_date(credential.expiration_date)
            .set_credential_subject(credential.credential_subject)
            .set_credential_status(credential.credential_status)
            .set_proof(credential.proof)
        )

    def set_context(self, context: Sequence[Any] | None) -> VerifiableCredentialBuilder:
        """Set the JSON-LD contexts. `None` restores the default context."""
        self._context = list(context) if context is not None else None
        return self

    def set_id(self, id: Any) -> VerifiableCredentialBuilder:
        self._id = id
        return self

    def set_types(self, types: Sequence[str] | None) -> VerifiableCredentialBuilder:
        self._types = list(types) if types is not None else None
        return self

    def set_issuer(self, issuer: Any) -> VerifiableCredentialBuilder:
        self._issuer = issuer
        return self

    def set_issuance_date(self, issuance_date: datetime | None) -> VerifiableCredentialBuilder:
        self._issuance_date = issuance_date
        return self

    def set_expiration_date(self, expiration_date: datetime | None) -> VerifiableCredentialBuilder:
        self._expiration_date = expiration_date
        return self

    def set_credential_subject(
        self, credential_subject: Union[Subject, Sequence[Subject], None]
    ) -> VerifiableCredentialBuilder:
        """Set the credential subjects.

        A single subject mapping is wrapped into a one-element sequence;
        any other iterable is copied into a list so that it can be built
        more than once.
        """
        if isinstance(credential_subject, Mapping):
            credential_subject = [credential_subject]
        elif credential_subject is not None:
            credential_subject = list(credential_subject)
        self._credential_subject = credential_subject
        return self

    def set_proof(self, proof: Proof | None) -> VerifiableCredentialBuilder:
        self._proof = proof
        return self

    def set_credential_status(self, credential_status: Status | None) -> VerifiableCredentialBuilder:
        self._credential_status = credential_status
        return self

    def _check_required(self) -> None:
        """Raise for the first mandatory field that is absent."""
        values = (
            self._id,
            self._issuer,
            self._types,
            self._issuance_date,
            self._credential_subject or None,
        )
        for field_name, value in zip(REQUIRED_FIELDS, values):
            if value is None:
                logger.debug("Cannot build credential, %s is missing", field_name)
                raise MissingRequiredFieldError(field_name)

    def build(self) -> VerifiableCredential:
        """Validate the accumulated fields and assemble the credential.

        The builder is left untouched, so it can be fixed and built again
        after a failure, and repeated builds return equal but independent
        credentials.

        Returns:
            A new immutable VerifiableCredential.

        Raises:
            MissingRequiredFieldError: If id, issuer, types, issuanceDate or
                credentialSubject is absent.
        """
        self._check_required()

        context = self._context if self._context is not None else [DEFAULT_CONTEXT]
        expiration_date = (
            canonicalize_date(self._expiration_date)
            if self._expiration_date is not None
            else None
        )

        credential = VerifiableCredential(
            context=tuple(str(uri) for uri in context),
            id=str(self._id),
            types=tuple(self._types),
            issuer=str(self._issuer),
            issuance_date=canonicalize_date(self._issuance_date),
            credential_subject=tuple(freeze(s) for s in self._credential_subject),
            expiration_date=expiration_date,
            credential_status=freeze(self._credential_status),
            proof=freeze(self._proof),
        )
        logger.debug(
            "Built credential %s (expiration=%s, status=%s, proof=%s)",
            credential.id,
            expiration_date is not None,
            credential.credential_status is not None,
            credential.proof is not None,
        )
        return credential
