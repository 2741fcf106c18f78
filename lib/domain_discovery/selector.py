"""Best-domain selection for a company.

Verifies the top-scored candidates in small paced batches and stops as soon as
a batch produces a live .co.uk/.com domain.
"""

import asyncio
from typing import Optional

from loguru import logger

from lib.domain_discovery.candidates import generate_candidates
from lib.domain_discovery.models import DomainSelection, VerificationResult
from lib.domain_discovery.names import normalize_name
from lib.domain_discovery.verifier import DomainVerifier

MAX_CANDIDATES = 40
BATCH_SIZE = 5
# Seconds between batches
BATCH_PAUSE = 0.2


def best_verified(checked: list[VerificationResult], scores: dict[str, float]) -> Optional[VerificationResult]:
    """Highest-scored live result. Ties go to the one checked first."""
    alive = [r for r in checked if r.ok]
    if not alive:
        return None
    return max(alive, key=lambda r: scores.get(r.domain, 0.0))


class DomainSelector:
    """Finds and verifies the most likely domain for a company name."""

    def __init__(
        self,
        verifier: DomainVerifier,
        max_candidates: int = MAX_CANDIDATES,
        batch_size: int = BATCH_SIZE,
        batch_pause: float = BATCH_PAUSE,
    ):
        self._verifier = verifier
        self.max_candidates = max_candidates
        self.batch_size = max(1, batch_size)
        self.batch_pause = batch_pause

    async def best_domain_for(self, company: str, country: Optional[str] = None) -> DomainSelection:
        cleaned = normalize_name(company)
        if not cleaned:
            logger.debug(f"No usable tokens in company name {company!r}")
            return DomainSelection()

        candidates = generate_candidates(cleaned, country)[: self.max_candidates]
        scores = {c.domain: c.score for c in candidates}
        checked: list[VerificationResult] = []

        for i in range(0, len(candidates), self.batch_size):
            batch = candidates[i:i + self.batch_size]
            results = await asyncio.gather(*(self._verifier.verify(c.domain) for c in batch))
            checked.extend(results)
            await asyncio.sleep(self.batch_pause)

            if any(r.is_strong for r in results):
                pick = best_verified(checked, scores)
                logger.debug(f"Strong hit for {company!r} after {len(checked)} checks: {pick.domain}")
                return DomainSelection(candidates=checked, pick=pick)

        return DomainSelection(candidates=checked, pick=best_verified(checked, scores))
