"""
Keyword taxonomies for prospectus scoring
hk_ipo_scorer/pipelines/keywords.py

All tables are immutable (tuples / frozen dataclasses / MappingProxyType)
and are passed into the rules explicitly through ScoringTaxonomies, so a
test can swap in a synthetic taxonomy without touching module state.

Traditional and simplified spellings are both listed: the raw-text pass
needs the exact form, and the normalizer only folds a small character set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from hk_ipo_scorer.models.enumerations import ReasonCode, TrackCategory


@dataclass(frozen=True)
class KeywordTaxonomy:
    """Ordered keyword list mapped to one category and one score."""
    name: str
    category: TrackCategory
    score: int
    reason: ReasonCode
    description: str
    keywords: Tuple[str, ...]

    def __iter__(self):
        return iter(self.keywords)


@dataclass(frozen=True)
class IndustryTaxonomy:
    """
    Precedence structure for industry classification.

    `ranked` is tried in order; the first category with an accepted hit wins
    and the rest of `ranked` is skipped. `override` is always tried
    afterwards and, if it hits, replaces whatever `ranked` produced.
    """
    ranked: Tuple[KeywordTaxonomy, ...]
    override: KeywordTaxonomy

    @property
    def all_taxonomies(self) -> Tuple[KeywordTaxonomy, ...]:
        return self.ranked + (self.override,)

    def catalogue(self) -> Dict[str, str]:
        """category -> description, for evidence display."""
        result = {t.category.value: t.description for t in self.all_taxonomies}
        result[TrackCategory.NEUTRAL.value] = "no clear preference (0)"
        return result


@dataclass(frozen=True)
class StarInvestor:
    canonical: str
    aliases: Tuple[str, ...]


@dataclass(frozen=True)
class ScoringTaxonomies:
    """Every vocabulary the five rules consult."""
    industry: IndustryTaxonomy
    star_investors: Tuple[StarInvestor, ...]
    old_share_phrases: Tuple[str, ...]
    pre_ipo_phrases: Tuple[str, ...]
    lockup_phrases: Tuple[str, ...]
    alias_to_canonical: Mapping[str, str] = field(init=False)

    def __post_init__(self):
        mapping = {
            alias: investor.canonical
            for investor in self.star_investors
            for alias in investor.aliases
        }
        object.__setattr__(self, "alias_to_canonical", MappingProxyType(mapping))

    @property
    def star_aliases(self) -> Tuple[str, ...]:
        return tuple(self.alias_to_canonical)

    def canonical_investor(self, alias: str) -> Optional[str]:
        return self.alias_to_canonical.get(alias)


# ---------------------------------------------------------------------------
# Industry tracks
# ---------------------------------------------------------------------------

HOT_TRACKS = KeywordTaxonomy(
    name="hot_tracks",
    category=TrackCategory.HOT,
    score=2,
    reason=ReasonCode.HOT_TRACK,
    description="AI / robotics / autonomous driving / semiconductors / innovative drugs / low-altitude economy (+2)",
    keywords=(
        # AI / large models / compute
        "人工智能", "人工智慧", "大模型", "大語言模型", "大语言模型", "LLM", "GPT", "AIGC",
        "生成式人工智能", "算力", "算力租賃", "算力租赁", "智算中心", "液冷", "光模塊", "光模块",
        "CPO", "HBM", "機器學習", "机器学习", "深度學習", "深度学习",
        "AI應用", "AI应用", "AI芯片", "AI晶片",
        # Robotics / embodied intelligence
        "機器人", "机器人", "人形機器人", "人形机器人", "具身智能", "機器人關節", "機器人減速器",
        # Autonomous driving
        "自動駕駛", "自动驾驶", "智能駕駛", "智能驾驶", "無人駕駛", "无人驾驶",
        "車聯網", "车联网", "Robotaxi",
        # Semiconductors
        "半導體", "半导体", "芯片", "晶片", "GPU", "NPU", "ASIC", "EDA", "Chiplet",
        "先進封裝", "先进封装", "國產替代", "国产替代", "集成電路", "集成电路",
        "高速互連", "高速互联", "互連芯片", "互联芯片", "DDR5", "PCIe", "CXL", "SerDes",
        "存儲芯片", "存储芯片", "內存芯片", "内存芯片", "NAND", "DRAM", "HDD", "SSD",
        "模擬芯片", "模拟芯片", "射頻芯片", "射频芯片", "FPGA", "MCU", "SoC",
        # Innovative drugs
        "創新藥", "创新药", "ADC", "CAR-T", "mRNA", "雙抗", "双抗", "PROTAC", "RNAi", "siRNA",
        "細胞治療", "细胞治疗", "基因治療", "基因治疗", "抗體偶聯", "抗体偶联",
        # Low-altitude economy
        "低空經濟", "低空经济", "eVTOL", "飛行汽車", "飞行汽车", "無人機", "无人机", "UAV",
        "衛星互聯網", "卫星互联网", "商業航天", "商业航天",
    ),
)

GROWTH_TRACKS = KeywordTaxonomy(
    name="growth_tracks",
    category=TrackCategory.GROWTH,
    score=1,
    reason=ReasonCode.GROWTH_TRACK,
    description="medical devices / new energy / SaaS / software / new consumer chains (+1)",
    keywords=(
        # Healthcare outside innovative drugs
        "醫療器械", "医疗器械", "醫療設備", "医疗设备", "診斷", "诊断",
        "CXO", "CDMO", "醫美", "医美",
        # New energy
        "新能源", "儲能", "储能", "光伏", "鋰電", "锂电", "風電", "风电", "充電樁", "充电桩",
        # Enterprise software
        "SaaS", "企業服務", "企业服务", "工業軟件", "工业软件", "網絡安全", "网络安全",
        "數據中心", "数据中心", "雲計算", "云计算",
        # New consumer chains
        "新茶飲", "新茶饮", "咖啡連鎖", "咖啡连锁", "零食連鎖", "零食连锁", "潮玩",
    ),
)

LOW_ELASTICITY_TRACKS = KeywordTaxonomy(
    name="low_elasticity_tracks",
    category=TrackCategory.LOW_ELASTICITY,
    score=-1,
    reason=ReasonCode.LOW_ELASTICITY_TRACK,
    description="traditional consumer / manufacturing / utilities / building materials / logistics (-1)",
    keywords=(
        # Traditional consumer
        "食品", "食品加工", "零食", "飲料", "饮料", "調味品", "调味品", "乳製品", "乳制品", "酒類", "酒类",
        "糖果", "烘焙", "餐飲", "餐饮", "快餐", "團餐", "团餐", "預製菜", "预制菜",
        # Traditional manufacturing
        "機械製造", "机械制造", "工業設備", "工业设备", "包裝", "包装", "印刷", "造紙", "造纸",
        # Utilities
        "水務", "水务", "燃氣", "燃气", "電力", "电力", "環保", "环保", "供熱", "供热", "污水處理", "污水处理", "垃圾處理", "垃圾处理",
        # Building materials
        "建材", "水泥", "玻璃", "鋼鐵", "钢铁", "鋁業", "铝业", "陶瓷",
        # Logistics
        "物流", "航運", "航运", "港口", "機場", "机场", "貨運", "货运", "快遞", "快递",
    ),
)

AVOID_TRACKS = KeywordTaxonomy(
    name="avoid_tracks",
    category=TrackCategory.AVOID,
    score=-2,
    reason=ReasonCode.AVOID_TRACK,
    description="property management / real estate / micro-lending / textiles / tutoring / gaming (-2)",
    keywords=(
        # Property management
        "物業管理", "物业管理", "物業服務", "物业服务", "物管",
        # Real estate
        "房地產", "房地产", "地產開發", "地产开发", "內房", "内房", "房企",
        "商業地產", "商业地产", "住宅開發", "住宅开发",
        # Consumer credit
        "小額貸款", "小额贷款", "消費金融", "消费金融", "融資租賃", "融资租赁",
        "P2P", "網貸", "网贷", "民間借貸", "民间借贷", "典當", "典当",
        # Textiles
        "紡織", "纺织", "服裝製造", "服装制造", "製衣", "制衣", "鞋履製造", "鞋履制造",
        # Tutoring
        "教育培訓", "教育培训", "課外輔導", "课外辅导", "K12", "學科培訓", "学科培训",
        "職業教育", "职业教育",
        # Gaming
        "博彩", "賭場", "赌场", "賭博", "赌博",
        # Funeral services
        "殯葬", "殡葬", "墓園", "墓园",
    ),
)

INDUSTRY_TAXONOMY = IndustryTaxonomy(
    ranked=(HOT_TRACKS, GROWTH_TRACKS, LOW_ELASTICITY_TRACKS),
    override=AVOID_TRACKS,
)


# ---------------------------------------------------------------------------
# Star cornerstone investors
# ---------------------------------------------------------------------------

STAR_INVESTORS: Tuple[StarInvestor, ...] = (
    # Top-tier PE / VC
    StarInvestor("高瓴", ("高瓴", "Hillhouse")),
    StarInvestor("红杉", ("紅杉", "红杉", "Sequoia")),
    # Sovereign funds
    StarInvestor("淡马锡", ("淡馬錫", "淡马锡", "Temasek")),
    StarInvestor("GIC", ("GIC", "新加坡政府投資", "新加坡政府投资")),
    StarInvestor("阿布扎比投资局", ("阿布達比", "阿布扎比", "ADIA")),
    StarInvestor("穆巴达拉", ("Mubadala", "穆巴達拉", "穆巴达拉")),
    StarInvestor("卡塔尔投资局", ("QIA", "卡塔爾投資局", "卡塔尔投资局")),
    StarInvestor("沙特公共投资基金", ("PIF", "沙特公共投資基金", "沙特公共投资基金")),
    StarInvestor("科威特投资局", ("科威特投資局", "科威特投资局")),
    # Global asset managers
    StarInvestor("黑石", ("黑石", "Blackstone")),
    StarInvestor("贝莱德", ("貝萊德", "贝莱德", "BlackRock")),
    StarInvestor("富达", ("富達", "富达", "Fidelity")),
    StarInvestor("威灵顿", ("Wellington", "威靈頓", "威灵顿")),
    StarInvestor("普信", ("普信", "T. Rowe")),
    StarInvestor("资本集团", ("資本集團", "资本集团", "Capital Group")),
    # Chinese state investors
    StarInvestor("中投", ("中投公司", "CIC")),
    StarInvestor("社保基金", ("全國社保", "全国社保", "社保基金")),
    StarInvestor("大基金", ("國家大基金", "国家大基金")),
    StarInvestor("丝路基金", ("絲路基金", "丝路基金")),
    StarInvestor("国调基金", ("國調基金", "国调基金")),
    StarInvestor("中国国新", ("中國國新", "中国国新")),
    StarInvestor("中保投", ("中保投",)),
    # Hedge funds
    StarInvestor("Tiger Global", ("Tiger Global",)),
    StarInvestor("Coatue", ("Coatue",)),
    StarInvestor("D1 Capital", ("D1 Capital",)),
    StarInvestor("Viking Global", ("Viking Global",)),
    # Chinese PE
    StarInvestor("春华资本", ("春華資本", "春华资本")),
    StarInvestor("博裕资本", ("博裕資本", "博裕资本")),
    StarInvestor("厚朴投资", ("厚朴投資", "厚朴投资")),
    StarInvestor("鼎晖", ("鼎暉", "鼎晖", "CDH")),
    StarInvestor("中信产业基金", ("中信產業基金", "中信产业基金")),
    # SoftBank
    StarInvestor("软银", ("軟銀", "软银", "SoftBank", "Vision Fund")),
)


# ---------------------------------------------------------------------------
# Phrase lists
# ---------------------------------------------------------------------------

OLD_SHARE_PHRASES: Tuple[str, ...] = (
    "銷售股份", "销售股份", "舊股", "旧股", "售股股東", "售股股东",
    "Sale Shares", "Selling Shareholder",
)

PRE_IPO_PHRASES: Tuple[str, ...] = (
    "首次公開發售前投資", "首次公开发售前投资", "Pre-IPO",
    "上市前投資", "上市前投资", "私募",
    "戰略投資", "战略投资", "優先股", "优先股",
    "Preferred Shares",
)

LOCKUP_PHRASES: Tuple[str, ...] = (
    "禁售期", "禁售", "鎖定期", "锁定期", "lock-up", "lockup", "lock up",
    "不得出售", "不得轉讓", "不得转让", "限制轉讓", "限制转让",
)


DEFAULT_TAXONOMIES = ScoringTaxonomies(
    industry=INDUSTRY_TAXONOMY,
    star_investors=STAR_INVESTORS,
    old_share_phrases=OLD_SHARE_PHRASES,
    pre_ipo_phrases=PRE_IPO_PHRASES,
    lockup_phrases=LOCKUP_PHRASES,
)
