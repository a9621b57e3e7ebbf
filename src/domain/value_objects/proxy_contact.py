"""Contact details exchanged between matched participants."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class ProxyContact:
    """Snapshot of a participant's contact details sent to the dispatcher."""

    id: UUID | None
    first_name: str
    last_name: str
    national_elector_number: str
    phone: str
    email: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
