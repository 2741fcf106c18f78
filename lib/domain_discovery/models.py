"""Data models for domain discovery."""

from typing import Optional
from pydantic import BaseModel


class DomainCandidate(BaseModel):
    """A generated, not-yet-verified domain."""

    domain: str
    score: float = 0.0


class VerificationResult(BaseModel):
    """Liveness verdict for one domain."""

    domain: str
    dns_ok: bool = False
    http_ok: bool = False

    @property
    def ok(self) -> bool:
        return self.dns_ok or self.http_ok

    @property
    def is_strong(self) -> bool:
        """A live .co.uk/.com hit is good enough to stop searching."""
        return self.ok and self.domain.endswith((".co.uk", ".com"))


class DomainSelection(BaseModel):
    """Everything checked for one company, plus the chosen domain."""

    candidates: list[VerificationResult] = []
    pick: Optional[VerificationResult] = None

    @property
    def domain(self) -> Optional[str]:
        return self.pick.domain if self.pick else None
