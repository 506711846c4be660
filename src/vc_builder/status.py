"""
Credential status descriptors.

Typed form of the W3C StatusList2021 `credentialStatus` entry.
https://www.w3.org/TR/vc-status-list/

Only the shape of the entry is modelled here; fetching and decoding the
referenced status list belongs to the verifier side.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

STATUS_LIST_ENTRY_TYPE = "StatusList2021Entry"


class StatusListError(Exception):
    """Raised when a credentialStatus entry is malformed."""


@dataclass(frozen=True)
class StatusListEntry:
    """A StatusList2021Entry attached to a credential."""

    status_list_credential: str
    status_list_index: int
    status_purpose: str
    id: str | None = None
    type: str = STATUS_LIST_ENTRY_TYPE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StatusListEntry:
        """Create a StatusListEntry from its JSON form.

        Raises:
            StatusListError: If a required key is missing or the index is
                not an integer.
        """
        try:
            return cls(
                id=data.get("id"),
                type=data.get("type", STATUS_LIST_ENTRY_TYPE),
                status_list_credential=data["statusListCredential"],
                status_list_index=int(data["statusListIndex"]),
                status_purpose=data["statusPurpose"],
            )
        except (KeyError, ValueError, TypeError) as e:
            raise StatusListError(f"Invalid credentialStatus: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        """Render the entry with its W3C key names.

        The index is emitted as a string, as StatusList2021 requires.
        """
        data: dict[str, Any] = {}
        if self.id is not None:
            data["id"] = self.id
        data["type"] = self.type
        data["statusPurpose"] = self.status_purpose
        data["statusListIndex"] = str(self.status_list_index)
        data["statusListCredential"] = self.status_list_credential
        return data


def parse_credential_status(credential: Mapping[str, Any]) -> list[StatusListEntry]:
    """Parse credentialStatus from a serialized VC.

    Handles both a single credentialStatus object and an array
    of statuses (e.g. one for revocation, one for suspension).
    Entries of other status types, and non-object entries, are skipped.

    Args:
        credential: The serialized Verifiable Credential.

    Returns:
        List of parsed StatusListEntry (empty if no status).

    Raises:
        StatusListError: If a StatusList2021Entry is malformed.
    """
    status_data = credential.get("credentialStatus")
    if not status_data:
        return []

    # Normalize to list
    if not isinstance(status_data, list):
        status_data = [status_data]

    return [
        StatusListEntry.from_dict(item)
        for item in status_data
        if isinstance(item, Mapping) and item.get("type") == STATUS_LIST_ENTRY_TYPE
    ]
