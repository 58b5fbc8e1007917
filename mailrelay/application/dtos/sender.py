"""DTOs for sender resolution and the default sender setting."""

from dataclasses import dataclass

from mailrelay.domain.enums import ResourceType, SenderType
from mailrelay.domain.value_objects import ResourceRef


@dataclass(frozen=True)
class ResolvedSender:
    """Identity a message goes out as, plus the credential that authenticates it."""

    sender_type: SenderType
    sender_id: str
    header_from: str
    display_name: str | None
    auth_email: str
    auth_password: str
    owner_id: str | None
    is_public: bool

    @property
    def is_alias(self) -> bool:
        return self.sender_type == SenderType.ALIAS

    def resource_ref(self) -> ResourceRef:
        resource_type = (
            ResourceType.ALIAS if self.is_alias else ResourceType.ACCOUNT
        )
        return ResourceRef(
            resource_type,
            resource_id=self.sender_id,
            owner_id=self.owner_id,
            is_public=self.is_public,
        )


@dataclass(frozen=True)
class DefaultSenderSummary:
    """Current default sender; is_active is recomputed on every read."""

    sender_type: SenderType
    sender_id: str
    email: str
    display_label: str
    via_display: str | None
    is_active: bool
    version: int
