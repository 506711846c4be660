"""
VC Builder - Verifiable Credentials assembly library.

Supports:
- W3C Verifiable Credentials data model envelopes
- Canonical UTC date formatting (second precision)
- StatusList2021 credentialStatus entries
- Data Integrity proof blocks (attached opaquely)
"""

from vc_builder.builder import MissingRequiredFieldError, VerifiableCredentialBuilder
from vc_builder.credential import DEFAULT_CONTEXT, VerifiableCredential
from vc_builder.dates import format_date, parse_date
from vc_builder.proof import DataIntegrityProof, ProofError
from vc_builder.status import StatusListEntry, StatusListError, parse_credential_status

__version__ = "0.1.0"

__all__ = [
    "VerifiableCredentialBuilder",
    "VerifiableCredential",
    "MissingRequiredFieldError",
    "DEFAULT_CONTEXT",
    "format_date",
    "parse_date",
    "DataIntegrityProof",
    "ProofError",
    "StatusListEntry",
    "StatusListError",
    "parse_credential_status",
]
