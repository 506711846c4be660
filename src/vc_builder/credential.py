"""
Verifiable Credential value object.

Immutable W3C Verifiable Credential envelope and its serialization to the
ordered JSON-LD key set.
https://www.w3.org/TR/vc-data-model/

Instances are produced by `VerifiableCredentialBuilder`; they have no
setters, so any change means re-assembling through a builder.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Union

from vc_builder.dates import format_date, parse_date
from vc_builder.proof import DataIntegrityProof
from vc_builder.status import StatusListEntry

DEFAULT_CONTEXT = "https://www.w3.org/2018/credentials/v1"

CONTEXT = "@context"
ID = "id"
TYPE = "type"
ISSUER = "issuer"
CREDENTIAL_SUBJECT = "credentialSubject"
ISSUANCE_DATE = "issuanceDate"
EXPIRATION_DATE = "expirationDate"
CREDENTIAL_STATUS = "credentialStatus"
PROOF = "proof"

Subject = Mapping[str, Any]
Status = Union[StatusListEntry, Mapping[str, Any]]
Proof = Union[DataIntegrityProof, Mapping[str, Any]]


def freeze(value: Any) -> Any:
    """Return a read-only copy of a JSON-like value.

    Mappings become `MappingProxyType` and arrays become tuples, recursively.
    Other values (typed status and proof entries are frozen dataclasses) are
    deep-copied.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return copy.deepcopy(value)


def thaw(value: Any) -> Any:
    """Return a plain dict/list copy of a frozen value."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(v) for v in value]
    return copy.deepcopy(value)


def _render(value: Any) -> Any:
    """Render an embedded status or proof value for serialization."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return thaw(value)


def _as_list(value: Any) -> list[Any]:
    """JSON-LD allows a single value wherever a set is expected."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


@dataclass(frozen=True)
class VerifiableCredential:
    """An assembled, immutable Verifiable Credential."""

    context: tuple[str, ...]
    id: str
    types: tuple[str, ...]
    issuer: str
    issuance_date: datetime
    credential_subject: tuple[Subject, ...]
    expiration_date: datetime | None = None
    credential_status: Status | None = None
    proof: Proof | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the ordered VC key set.

        Optional fields that are absent are omitted rather than set to
        null, so a credential with and without its proof differ only by
        the `proof` key.

        Returns:
            A new dict owned by the caller.
        """
        data: dict[str, Any] = {
            CONTEXT: list(self.context),
            ID: self.id,
            TYPE: list(self.types),
            ISSUER: self.issuer,
            CREDENTIAL_SUBJECT: [thaw(s) for s in self.credential_subject],
            ISSUANCE_DATE: format_date(self.issuance_date),
        }
        if self.expiration_date is not None:
            data[EXPIRATION_DATE] = format_date(self.expiration_date)
        if self.credential_status is not None:
            data[CREDENTIAL_STATUS] = _render(self.credential_status)
        if self.proof is not None:
            data[PROOF] = _render(self.proof)
        return data

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to JSON text, keeping the VC key order."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def canonical_json(self) -> str:
        """JCS-style canonical text.

        Sorted keys, no insignificant whitespace, unicode preserved. Number
        formatting follows `json`, not RFC 8785.
        """
        return json.dumps(
            self.to_dict(), sort_keys=True, separators=(",", ":"), ensure_ascii=False
        )

    def without_proof(self) -> VerifiableCredential:
        """Re-assemble this credential with no proof attached."""
        from vc_builder.builder import VerifiableCredentialBuilder

        return VerifiableCredentialBuilder.from_credential(self).set_proof(None).build()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VerifiableCredential:
        """Parse a serialized credential.

        `@context`, `type` and `credentialSubject` may be single values or
        arrays. `issuer` may be a string or an object with an `id`.
        `credentialStatus` and `proof` are kept verbatim.

        Args:
            data: The credential JSON object.

        Returns:
            The re-assembled credential.

        Raises:
            MissingRequiredFieldError: If a mandatory key is absent.
            ValueError: If a date is not ISO-8601 text.
        """
        from vc_builder.builder import VerifiableCredentialBuilder

        builder = VerifiableCredentialBuilder()
        if CONTEXT in data:
            builder.set_context(_as_list(data[CONTEXT]))

        issuer = data.get(ISSUER)
        if isinstance(issuer, Mapping):
            issuer = issuer.get("id")

        builder.set_id(data.get(ID)).set_issuer(issuer)
        if TYPE in data:
            builder.set_types(_as_list(data[TYPE]))
        if ISSUANCE_DATE in data:
            builder.set_issuance_date(parse_date(data[ISSUANCE_DATE]))
        if EXPIRATION_DATE in data:
            builder.set_expiration_date(parse_date(data[EXPIRATION_DATE]))
        if CREDENTIAL_SUBJECT in data:
            builder.set_credential_subject(_as_list(data[CREDENTIAL_SUBJECT]))

        builder.set_credential_status(data.get(CREDENTIAL_STATUS))
        builder.set_proof(data.get(PROOF))
        return builder.build()
