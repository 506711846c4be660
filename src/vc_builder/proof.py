"""
Data Integrity proof shape.

A proof is opaque to the credential builder; this type only gives the
common W3C Data Integrity proof a typed form so that signers can hand it
over without building dictionaries by hand.
https://www.w3.org/TR/vc-data-integrity/
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from vc_builder.dates import format_date, parse_date

DATA_INTEGRITY_PROOF_TYPE = "DataIntegrityProof"


class ProofError(Exception):
    """Raised when a proof object is malformed."""


@dataclass(frozen=True)
class DataIntegrityProof:
    """W3C Data Integrity proof block."""

    cryptosuite: str
    verification_method: str
    proof_purpose: str = "assertionMethod"
    created: datetime | None = None
    proof_value: str | None = None
    type: str = DATA_INTEGRITY_PROOF_TYPE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DataIntegrityProof:
        """Create a DataIntegrityProof from its JSON form.

        Raises:
            ProofError: If a required key is missing or `created` is not a
                valid date-time.
        """
        try:
            created = data.get("created")
            return cls(
                type=data.get("type", DATA_INTEGRITY_PROOF_TYPE),
                cryptosuite=data["cryptosuite"],
                verification_method=data["verificationMethod"],
                proof_purpose=data.get("proofPurpose", "assertionMethod"),
                created=parse_date(created) if created else None,
                proof_value=data.get("proofValue"),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise ProofError(f"Invalid proof: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "cryptosuite": self.cryptosuite,
        }
        if self.created is not None:
            data["created"] = format_date(self.created)
        data["verificationMethod"] = self.verification_method
        data["proofPurpose"] = self.proof_purpose
        if self.proof_value is not None:
            data["proofValue"] = self.proof_value
        return data
