"""Domain discovery for companies without a known website.

Pipeline:
  1. Normalize the company name (strip Ltd/Group/... and punctuation)
  2. Generate domain candidates (name variants x country-ordered TLDs)
  3. Verify candidates via DNS (A/AAAA/MX) and HTTP (HEAD, GET fallback)
  4. Pick the best-scored live domain, stopping early on a .co.uk/.com hit
"""

from lib.domain_discovery.models import (
    DomainCandidate,
    VerificationResult,
    DomainSelection,
)
from lib.domain_discovery.names import normalize_name, tokenize_name, STOP_WORDS
from lib.domain_discovery.candidates import (
    generate_candidates,
    name_variants,
    score_domain,
    tlds_for_country,
)
from lib.domain_discovery.verifier import DomainVerifier, build_resolver, build_client
from lib.domain_discovery.selector import DomainSelector

__all__ = [
    # Models
    "DomainCandidate",
    "VerificationResult",
    "DomainSelection",
    # Names
    "normalize_name",
    "tokenize_name",
    "STOP_WORDS",
    # Candidates
    "generate_candidates",
    "name_variants",
    "score_domain",
    "tlds_for_country",
    # Verification
    "DomainVerifier",
    "build_resolver",
    "build_client",
    "DomainSelector",
]
