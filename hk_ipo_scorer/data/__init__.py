"""Static reference data bundled with the package."""

from hk_ipo_scorer.data.fallback_sponsors import FALLBACK_SPONSORS, FallbackSponsor, fallback_records

__all__ = ["FALLBACK_SPONSORS", "FallbackSponsor", "fallback_records"]
