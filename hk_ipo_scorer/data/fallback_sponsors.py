"""
Fallback Sponsor Table
hk_ipo_scorer/data/fallback_sponsors.py

Static baseline of HK IPO sponsor performance, used when the crawler
snapshot (sponsors.json) is missing or does not list a sponsor. Figures are
historical estimates compiled from AASTOCKS, HKEXnews and public filings.

Each sponsor carries its registered name plus the short / traditional /
simplified / English aliases seen in prospectuses. Every alias shares the
same statistics, which is how the sponsor rule recognises two names as one
entity.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from hk_ipo_scorer.models.sponsor import SponsorRecord


@dataclass(frozen=True)
class FallbackSponsor:
    name: str
    avg_first_day_return: float
    deal_count: int
    win_rate: Optional[float]
    aliases: Tuple[str, ...] = ()

    @property
    def names(self) -> Tuple[str, ...]:
        return (self.name,) + self.aliases


FALLBACK_SPONSORS: Tuple[FallbackSponsor, ...] = (
    # Chinese brokers
    FallbackSponsor("中國國際金融香港證券有限公司", 27.96, 64, 68.75, ("中金", "中金公司", "中國國際金融", "CICC")),
    FallbackSponsor("中信證券(香港)有限公司", 41.62, 42, 83.33, ("中信證券", "中信证券")),
    FallbackSponsor("中信里昂證券有限公司", 35.50, 38, 78.95, ("中信里昂",)),
    FallbackSponsor("華泰金融控股(香港)有限公司", 6.86, 33, 57.58, ("華泰", "華泰金融", "华泰")),
    FallbackSponsor("海通國際資本有限公司", 31.22, 28, 75.00, ("海通", "海通國際", "海通国际")),
    FallbackSponsor("國泰君安融資有限公司", 23.18, 25, 76.00, ("國泰君安", "国泰君安")),
    FallbackSponsor("招商證券(香港)有限公司", 18.50, 22, 68.18, ("招商證券", "招商", "招商证券")),
    FallbackSponsor("招銀國際融資有限公司", 25.56, 18, 72.22, ("招銀國際", "招银国际")),
    FallbackSponsor("建銀國際金融有限公司", 11.38, 18, 72.22, ("建銀國際", "建银国际")),
    FallbackSponsor("廣發融資（香港）有限公司", 22.30, 15, 73.33, ("廣發", "广发")),
    FallbackSponsor("交銀國際證券有限公司", 19.20, 14, 71.43, ("交銀國際", "交银国际")),
    FallbackSponsor("工銀國際融資有限公司", 12.50, 12, 66.67, ("工銀國際", "工银国际")),
    FallbackSponsor("農銀國際融資有限公司", 15.80, 10, 70.00, ("農銀國際", "农银国际")),
    FallbackSponsor("申萬宏源融資(香港)有限公司", 28.30, 12, 75.00, ("申萬宏源", "申万宏源")),
    FallbackSponsor("中銀國際亞洲有限公司", 14.60, 15, 66.67, ("中銀國際", "中银国际")),
    FallbackSponsor("光大融資有限公司", 17.80, 8, 62.50, ("光大",)),
    FallbackSponsor("民銀資本有限公司", -5.20, 12, 41.67, ("民銀資本", "民银资本")),
    FallbackSponsor("中信建投(國際)融資有限公司", 15.20, 10, 70.00, ("中信建投",)),
    FallbackSponsor("東方證券(香港)有限公司", 12.80, 8, 62.50, ("東方證券", "东方证券")),
    FallbackSponsor("興證國際融資有限公司", 8.50, 9, 55.56, ("興證國際", "兴证国际")),
    FallbackSponsor("國信證券(香港)融資有限公司", 10.20, 8, 62.50, ("國信證券", "国信证券")),
    FallbackSponsor("長江證券(香港)有限公司", 6.80, 6, 50.00, ("長江證券", "长江证券")),
    FallbackSponsor("方正證券(香港)融資有限公司", 5.50, 5, 40.00, ("方正證券", "方正证券")),

    # International banks
    FallbackSponsor("摩根士丹利亞洲有限公司", 21.91, 35, 77.14, ("摩根士丹利", "Morgan Stanley")),
    FallbackSponsor("高盛(亞洲)有限責任公司", 15.58, 30, 73.33, ("高盛", "Goldman")),
    FallbackSponsor("瑞銀證券香港有限公司", 16.22, 25, 72.00, ("瑞銀", "瑞银", "UBS")),
    FallbackSponsor("花旗環球金融亞洲有限公司", 18.50, 20, 75.00, ("花旗", "Citi")),
    FallbackSponsor(
        "J.P. Morgan Securities (Far East) Limited", 19.80, 28, 75.00,
        ("摩根大通證券(遠東)有限公司", "摩根大通", "J.P. Morgan", "JPMorgan"),
    ),
    FallbackSponsor("美銀證券", 14.20, 18, 66.67, ("BofA Securities",)),
    FallbackSponsor("德意志銀行", 8.50, 12, 58.33),
    FallbackSponsor("巴克萊", 10.20, 10, 60.00),
    FallbackSponsor("法國巴黎銀行", 12.50, 8, 62.50),
    FallbackSponsor("匯豐", 11.80, 15, 66.67),
    FallbackSponsor("渣打", 9.50, 10, 60.00),

    # Local brokers
    FallbackSponsor("大華繼顯(香港)有限公司", 5.20, 15, 53.33, ("大華繼顯", "大华继显")),
    FallbackSponsor("力高企業融資有限公司", 3.80, 12, 50.00, ("力高",)),
    FallbackSponsor("艾德證券", 6.50, 8, 50.00),
    FallbackSponsor("寶新金融", 4.20, 6, 50.00),
    FallbackSponsor("第一上海", 7.80, 10, 60.00),
)


def fallback_records() -> Dict[str, SponsorRecord]:
    """alias -> SponsorRecord (record.name is the registered name)."""
    records: Dict[str, SponsorRecord] = {}
    for sponsor in FALLBACK_SPONSORS:
        record = SponsorRecord(
            name=sponsor.name,
            avg_first_day_return=sponsor.avg_first_day_return,
            deal_count=sponsor.deal_count,
            win_rate=sponsor.win_rate,
        )
        for name in sponsor.names:
            records[name] = record
    return records
