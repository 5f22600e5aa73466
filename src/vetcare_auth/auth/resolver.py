"""
vetcare_auth.auth.resolver

Identity resolution: decoded claims -> canonical `Principal`.

Responsibilities:
- Try each identity source in priority order, awaiting one lookup at a time.
- Stop at the first hit; never merge records across sources.
- Isolate faults: a failing source with a fallback behind it counts as a miss.
"""

from __future__ import annotations

from collections.abc import Sequence

from vetcare_auth.auth.errors import PrincipalNotFound, StoreLookupFault
from vetcare_auth.auth.models import Principal, TokenClaims
from vetcare_auth.auth.providers import IdentitySource
from vetcare_auth.observability.logging import get_logger

log = get_logger(__name__)


class IdentityResolver:
    def __init__(self, sources: Sequence[IdentitySource]) -> None:
        if not sources:
            raise ValueError("IdentityResolver requires at least one identity source")
        self._sources = tuple(sources)

    async def resolve(self, claims: TokenClaims) -> Principal:
        last = len(self._sources) - 1
        for idx, source in enumerate(self._sources):
            try:
                record = await source.provider.find_by_id(claims.subject_id)
            except Exception as e:
                if idx == last:
                    if isinstance(e, StoreLookupFault):
                        raise
                    # Providers should raise StoreLookupFault; anything else counts as one.
                    raise StoreLookupFault(source.name, str(e)) from e
                log.warning(
                    "identity_source_fault",
                    source=source.name,
                    subject_id=claims.subject_id,
                    error_type=type(e).__name__,
                )
                continue

            if record is None:
                continue

            principal = source.to_principal(record, claims)
            log.debug(
                "identity_resolved",
                source=source.name,
                principal_id=principal.id,
                role=principal.role,
            )
            return principal

        log.info("principal_not_found", subject_id=claims.subject_id)
        raise PrincipalNotFound()
