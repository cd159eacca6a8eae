from enum import Enum


class RuleName(str, Enum):
    OLD_SHARES = "old_shares"
    SPONSOR = "sponsor"
    CORNERSTONE = "cornerstone"
    LOCKUP = "lockup"
    INDUSTRY = "industry"


class TrackCategory(str, Enum):
    """Industry sentiment tracks, listed in matching precedence."""
    HOT = "hot"                          # sentiment-driven hot track, +2
    GROWTH = "growth"                    # growth narrative, +1
    LOW_ELASTICITY = "low_elasticity"    # little upside imagination, -1
    AVOID = "avoid"                      # capital-avoidance track, -2, overrides
    NEUTRAL = "neutral"                  # nothing matched, 0


class ReasonCode(str, Enum):
    # Old shares
    HAS_OLD_SHARES = "has_old_shares"
    ALL_NEW_SHARES = "all_new_shares"
    # Sponsor
    PREMIUM_SPONSOR = "premium_sponsor"
    AVERAGE_SPONSOR = "average_sponsor"
    WEAK_SPONSOR = "weak_sponsor"
    INSUFFICIENT_DATA = "insufficient_data"
    NO_TRACK_RECORD = "no_track_record"
    UNIDENTIFIED = "unidentified"
    # Cornerstone
    STAR_CORNERSTONE = "star_cornerstone"
    NO_STAR_CORNERSTONE = "no_star_cornerstone"
    # Lock-up
    NO_PRE_IPO = "no_pre_ipo"
    PRE_IPO_LOCKED_UP = "pre_ipo_locked_up"
    PRE_IPO_NO_LOCKUP = "pre_ipo_no_lockup"
    # Industry
    HOT_TRACK = "hot_track"
    GROWTH_TRACK = "growth_track"
    LOW_ELASTICITY_TRACK = "low_elasticity_track"
    AVOID_TRACK = "avoid_track"
    NEUTRAL_TRACK = "neutral"


class RecommendationTier(str, Enum):
    STRONGLY_RECOMMENDED = "strongly_recommended"
    RECOMMENDED = "recommended"
    WORTH_CONSIDERING = "worth_considering"
    CAUTIOUS = "cautious"
    NOT_RECOMMENDED = "not_recommended"

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]


_TIER_LABELS = {
    RecommendationTier.STRONGLY_RECOMMENDED: "强烈推荐",
    RecommendationTier.RECOMMENDED: "建议申购",
    RecommendationTier.WORTH_CONSIDERING: "可以考虑",
    RecommendationTier.CAUTIOUS: "谨慎申购",
    RecommendationTier.NOT_RECOMMENDED: "不建议",
}


class SponsorSource(str, Enum):
    """Which path identified the sponsor."""
    PROSPECTUS_TEXT = "prospectus_text"
    STOCK_CODE_MAPPING = "stock_code_mapping"
