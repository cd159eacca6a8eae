# hk_ipo_scorer/models/sponsor.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, List
from datetime import datetime


class SponsorRecord(BaseModel):
    """Historical IPO performance of one sponsor, under one name or alias."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    avg_first_day_return: float         # percent, signed
    deal_count: int = Field(ge=0)
    win_rate: Optional[float] = Field(default=None, ge=0, le=100)
    up_count: Optional[int] = Field(default=None, ge=0)
    down_count: Optional[int] = Field(default=None, ge=0)

    @property
    def stats_key(self) -> tuple:
        """Identical (return, count) pairs mean the same sponsor under another name."""
        return (round(self.avg_first_day_return, 2), self.deal_count)


# Snapshot files written by the external sponsor crawler


class SponsorSnapshotEntry(BaseModel):
    """One row of sponsors.json (camelCase keys as written by the crawler)."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    count: int = Field(ge=0)
    avg_first_day: float = Field(alias="avgFirstDay")
    avg_cumulative: Optional[float] = Field(default=None, alias="avgCumulative")
    win_rate: Optional[float] = Field(default=None, alias="winRate", ge=0, le=100)
    up_count: Optional[int] = Field(default=None, alias="upCount", ge=0)
    down_count: Optional[int] = Field(default=None, alias="downCount", ge=0)

    def to_record(self) -> SponsorRecord:
        return SponsorRecord(
            name=self.name,
            avg_first_day_return=self.avg_first_day,
            deal_count=self.count,
            win_rate=self.win_rate,
            up_count=self.up_count,
            down_count=self.down_count,
        )


class SponsorSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
    source: Optional[str] = None
    sponsors: List[SponsorSnapshotEntry] = Field(default_factory=list)


class IPOSponsorEntry(BaseModel):
    sponsors: List[str] = Field(default_factory=list)


class IPOSponsorMappingFile(BaseModel):
    """ipo-sponsors.json: 5-digit stock code -> sponsor names."""
    count: int = 0
    mapping: Dict[str, IPOSponsorEntry] = Field(default_factory=dict)
