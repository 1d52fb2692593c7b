"""
Signal Catalog
==============

Read-only pattern tables used by the extraction engine:

- weighted indicator tables for pain points and desires
- ordered, first-match category rules per signal kind
- terminology vocabularies per domain
- ordered query keyword table for domain inference
- product feature patterns and a small sentiment lexicon

Patterns cover Dutch and English text. The catalog is built once at start-up
(DEFAULT_CATALOG) and passed into every component; nothing mutates it.

Usage:
    from src.insights.signal_catalog import DEFAULT_CATALOG, SignalKind

    table = DEFAULT_CATALOG.indicators(SignalKind.PAIN_POINT)
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional, Pattern, Tuple, Union

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY = "other"


class SignalKind(str, Enum):
    """Kinds of signal extracted from a sentence."""
    PAIN_POINT = "pain_point"
    DESIRE = "desire"


class Domain(str, Enum):
    """Terminology domains."""
    GENERAL = "general"
    ECOMMERCE = "ecommerce"
    BEAUTY = "beauty"
    TECH = "tech"
    FOOD = "food"


def resolve_domain(value: Union[str, Domain, None]) -> Domain:
    """Map a domain hint to a Domain; anything unknown becomes GENERAL."""
    if isinstance(value, Domain):
        return value
    if isinstance(value, str):
        try:
            return Domain(value.strip().lower())
        except ValueError:
            logger.debug(f"Unknown domain '{value}', falling back to general")
    return Domain.GENERAL


@dataclass(frozen=True)
class Indicator:
    """One weighted textual pattern contributing to a signal score."""
    pattern: str
    weight: float
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not 0.0 < self.weight <= 1.0:
            raise ValueError(f"Indicator '{self.pattern}' weight must be in (0, 1], got {self.weight}")
        object.__setattr__(self, "regex", re.compile(self.pattern, re.IGNORECASE))

    @property
    def label(self) -> str:
        return self.pattern

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


@dataclass(frozen=True)
class CategoryRule:
    """A named category with the patterns that select it."""
    name: str
    patterns: Tuple[str, ...]
    regexes: Tuple[Pattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.name:
            raise ValueError("CategoryRule name cannot be empty")
        if not self.patterns:
            raise ValueError(f"CategoryRule '{self.name}' needs at least one pattern")
        object.__setattr__(
            self, "regexes", tuple(re.compile(p, re.IGNORECASE) for p in self.patterns)
        )

    def matches(self, text: str) -> bool:
        return any(r.search(text) for r in self.regexes)


# =============================================================================
# PAIN POINT INDICATORS
# =============================================================================
# weight: how strongly the pattern signals a problem (0.0-1.0).
# Weights add up per sentence; a sentence needs > 0.7 to qualify.

PAIN_POINT_INDICATORS: Tuple[Indicator, ...] = (
    # Problems
    Indicator(r"probleem|problem", 0.8),
    Indicator(r"issue|kwestie|moeilijkheid", 0.7),
    Indicator(r"struggle|worstelen|moeite", 0.9),
    Indicator(r"uitdaging|challenge|obstakel", 0.6),
    Indicator(r"frustrerend|frustrating|irritant", 0.9),
    Indicator(r"irriteert|annoys|stoort", 0.8),
    Indicator(r"haat|hate|can't stand", 1.0),
    Indicator(r"teleurgesteld|disappointed", 0.8),

    # Complaints
    Indicator(r"klacht|complaint", 0.8),
    Indicator(r"niet tevreden|not satisfied|ontevreden", 0.9),
    Indicator(r"niet goed|not good|slecht", 0.7),
    Indicator(r"werkt niet|doesn't work|kapot", 0.9),
    Indicator(r"defect|broken|stuk", 0.9),

    # Negative emotions
    Indicator(r"gefrustreerd|frustrated", 0.9),
    Indicator(r"geïrriteerd|irritated|annoyed", 0.8),
    Indicator(r"boos|angry|mad", 0.9),
    Indicator(r"verdrietig|sad|upset", 0.7),

    # Help seeking
    Indicator(r"hoe los ik|how do I solve|how to fix", 0.8),
    Indicator(r"help|hulp nodig|need assistance", 0.7),
    Indicator(r"advies nodig|need advice|suggestions", 0.6),
    Indicator(r"alternatief voor|alternative to", 0.7),

    # Product issues
    Indicator(r"te duur|too expensive|overpriced", 0.8),
    Indicator(r"slechte kwaliteit|poor quality|low quality", 0.9),
    Indicator(r"moeilijk te gebruiken|difficult to use|not user friendly", 0.8),
    Indicator(r"tijdrovend|time consuming|takes too long", 0.7),
    Indicator(r"onbetrouwbaar|unreliable|inconsistent", 0.8),
    Indicator(r"niet effectief|not effective|doesn't work well", 0.8),
    Indicator(r"bijwerkingen|side effects|negative effects", 0.9),
    Indicator(r"terrible|awful|verschrikkelijk|vreselijk", 0.8),
)

# =============================================================================
# DESIRE INDICATORS
# =============================================================================

DESIRE_INDICATORS: Tuple[Indicator, ...] = (
    # Wishes
    Indicator(r"wil|want|would like", 0.8),
    Indicator(r"wens|wish|hope", 0.9),
    Indicator(r"verlang|desire|crave", 1.0),
    Indicator(r"zoek naar|looking for|searching for", 0.7),
    Indicator(r"behoefte aan|need for|need to", 0.8),
    Indicator(r"zou graag|had graag", 0.8),

    # Improvement
    Indicator(r"beter|better|improve", 0.7),
    Indicator(r"upgrade|verbeteren|enhance", 0.8),
    Indicator(r"oplossing voor|solution for|solve", 0.8),
    Indicator(r"ideaal|ideal|perfect", 0.9),

    # Positive outcomes
    Indicator(r"gelukkig|happy|content", 0.7),
    Indicator(r"tevreden|satisfied|pleased", 0.7),
    Indicator(r"succesvol|successful|accomplish", 0.8),
    Indicator(r"effectief|effective|efficient", 0.7),

    # Explicit aspirations
    Indicator(r"zou geweldig zijn als|would be great if|love it if", 0.9),
    Indicator(r"droom van|dream of|aspire to", 1.0),
    Indicator(r"op zoek naar|hunting for", 0.8),
    Indicator(r"kan niet wachten|can't wait|excited for", 0.9),
    Indicator(r"hoop dat|hope that|hoping for", 0.8),

    # Product properties
    Indicator(r"gebruiksvriendelijk|user friendly|easy to use", 0.7),
    Indicator(r"betaalbaar|affordable|reasonably priced", 0.7),
    Indicator(r"duurzaam|sustainable|long lasting", 0.7),
    Indicator(r"snel|fast|quick", 0.6),
    Indicator(r"betrouwbaar|reliable|dependable", 0.7),
    Indicator(r"veelzijdig|versatile|flexible", 0.6),
)

# =============================================================================
# CATEGORY RULES (first match wins, order is part of the contract)
# =============================================================================

PAIN_POINT_CATEGORIES: Tuple[CategoryRule, ...] = (
    CategoryRule("price", (r"duur|prijs|kost|betaal|geld|budget|expensive|price|cost|afford",)),
    CategoryRule("quality", (
        r"kwaliteit|quality|slecht|poor|kapot|broken|defect",
        r"wazig|onscherp|korrelig|blurry|grainy|out of focus",
    )),
    CategoryRule("usability", (r"moeilijk|lastig|ingewikkeld|complex|difficult|hard to|confusing|complicated",)),
    CategoryRule("effectiveness", (r"werkt niet|doesn't work|ineffectief|ineffective|resultaat|results",)),
    CategoryRule("reliability", (r"betrouwbaar|reliable|consistent|stabiel|stable",)),
    CategoryRule("time", (r"tijd|time|lang|long|wachten|waiting|traag|slow",)),
    CategoryRule("service", (r"service|klantenservice|support|customer service|help desk",)),
    CategoryRule("availability", (r"beschikbaar|available|voorraad|stock|uitverkocht|sold out",)),
)

DESIRE_CATEGORIES: Tuple[CategoryRule, ...] = (
    CategoryRule("convenience", (r"gemak|ease|makkelijk|easy|simple|convenient|handig",)),
    CategoryRule("time", (r"tijd|time|snel|fast|quick|besparen|save",)),
    CategoryRule("durability", (
        r"meegaat|gaat lang mee|hele dag|batterij|accu|battery|lasts|long lasting|durable",
    )),
    CategoryRule("quality", (r"kwaliteit|quality|goed|good|best|beter|better",)),
    CategoryRule("price", (r"prijs|price|betaalbaar|affordable|goedkoop|cheap|budget",)),
    CategoryRule("effectiveness", (r"effectief|effective|resultaat|result|werkt|works",)),
    CategoryRule("sustainability", (r"duurzaam|sustainable|milieuvriendelijk|eco-friendly|groen|green",)),
    CategoryRule("status", (r"status|prestige|luxe|luxury|premium|exclusief|exclusive",)),
    CategoryRule("innovation", (r"innovatie|innovation|nieuw|new|modern|geavanceerd|advanced",)),
)

# =============================================================================
# TERMINOLOGY VOCABULARIES
# =============================================================================
# An n-gram is domain terminology when it contains at least one of these words.
# GENERAL has no vocabulary: every n-gram qualifies.

DOMAIN_VOCABULARIES: Dict[Domain, FrozenSet[str]] = {
    Domain.ECOMMERCE: frozenset({
        "product", "prijs", "korting", "verzending", "levering", "retour",
        "betaling", "winkelwagen", "checkout", "bestelling",
        "price", "discount", "shipping", "delivery", "return", "payment",
        "cart", "order",
        "kwaliteit", "quality", "batterij", "battery", "formaat", "size",
        "materiaal", "material", "design",
    }),
    Domain.BEAUTY: frozenset({
        "huid", "haar", "makeup", "crème", "serum", "shampoo", "conditioner",
        "hydrateren", "reinigen", "verzorgen",
        "skin", "hair", "cream", "hydrate", "cleanse", "care",
    }),
    Domain.TECH: frozenset({
        "app", "software", "hardware", "device", "gadget", "smartphone",
        "laptop", "tablet", "functie", "interface", "feature",
        "batterij", "battery", "camera", "scherm", "screen", "telefoon",
        "phone", "foto", "photo",
    }),
    Domain.FOOD: frozenset({
        "smaak", "ingrediënt", "recept", "voeding", "dieet", "maaltijd",
        "koken", "bakken", "gezond", "biologisch",
        "taste", "ingredient", "recipe", "nutrition", "diet", "meal",
        "cook", "bake", "healthy", "organic",
    }),
}

# Ordered: the first domain whose keywords appear in a query wins.
DOMAIN_KEYWORDS: Tuple[Tuple[Domain, str], ...] = (
    (Domain.ECOMMERCE, r"ecommerce|webshop|online\s+shop|product|shopping|retail"),
    (Domain.BEAUTY, r"beauty|skin|hair|makeup|cosmetic|skincare|haircare"),
    (Domain.TECH, r"tech|software|hardware|app|gadget|computer|smartphone|laptop"),
    (Domain.FOOD, r"food|recipe|cooking|diet|nutrition|meal|restaurant|ingredient"),
)

# Terms that describe a product property (review feature sentiment)
FEATURE_PATTERNS: Tuple[str, ...] = (
    r"kwaliteit|quality",
    r"prijs|price",
    r"design|ontwerp",
    r"gebruiksgemak|ease of use|user friendly",
    r"duurzaamheid|durability",
    r"functionaliteit|functionality",
    r"betrouwbaarheid|reliability",
    r"materiaal|material",
    r"formaat|size",
    r"gewicht|weight",
    r"batterij|battery",
    r"snelheid|speed",
    r"prestatie|performance",
)

# =============================================================================
# SENTIMENT LEXICON
# =============================================================================

POSITIVE_WORDS: FrozenSet[str] = frozenset({
    "goed", "geweldig", "uitstekend", "fantastisch", "prima", "tevreden",
    "blij", "positief", "aanrader", "top", "perfect", "superieur",
    "indrukwekkend", "briljant", "excellent", "prachtig", "mooi",
    "good", "great", "excellent", "fantastic", "amazing", "satisfied",
    "happy", "love", "awesome", "brilliant", "beautiful", "recommended",
})

NEGATIVE_WORDS: FrozenSet[str] = frozenset({
    "slecht", "teleurstellend", "matig", "zwak", "probleem", "fout",
    "defect", "kapot", "ontevreden", "negatief", "afrader", "verschrikkelijk",
    "vreselijk", "waardeloos", "irritant", "frustrerend", "gebrekkig",
    "bad", "terrible", "awful", "poor", "broken", "disappointing",
    "useless", "annoying", "frustrating", "worst", "hate", "problem",
})


@dataclass(frozen=True)
class SignalCatalog:
    """
    Immutable bundle of every pattern table the engine reads.

    Validated at construction: a malformed table fails at start-up,
    never on the per-document path.
    """
    pain_point_indicators: Tuple[Indicator, ...] = PAIN_POINT_INDICATORS
    desire_indicators: Tuple[Indicator, ...] = DESIRE_INDICATORS
    pain_point_categories: Tuple[CategoryRule, ...] = PAIN_POINT_CATEGORIES
    desire_categories: Tuple[CategoryRule, ...] = DESIRE_CATEGORIES
    vocabularies: Dict[Domain, FrozenSet[str]] = field(default_factory=lambda: dict(DOMAIN_VOCABULARIES))
    domain_keywords: Tuple[Tuple[Domain, str], ...] = DOMAIN_KEYWORDS
    feature_patterns: Tuple[str, ...] = FEATURE_PATTERNS
    positive_words: FrozenSet[str] = POSITIVE_WORDS
    negative_words: FrozenSet[str] = NEGATIVE_WORDS

    _domain_regexes: Tuple[Tuple[Domain, Pattern], ...] = field(init=False, repr=False, compare=False)
    _feature_regexes: Tuple[Pattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for kind, table in (
            (SignalKind.PAIN_POINT, self.pain_point_indicators),
            (SignalKind.DESIRE, self.desire_indicators),
        ):
            if not table:
                raise ValueError(f"Indicator table for '{kind.value}' is empty")

        for kind, rules in (
            (SignalKind.PAIN_POINT, self.pain_point_categories),
            (SignalKind.DESIRE, self.desire_categories),
        ):
            names = [r.name for r in rules]
            if not names:
                raise ValueError(f"Category table for '{kind.value}' is empty")
            if len(set(names)) != len(names):
                raise ValueError(f"Duplicate category names for '{kind.value}': {names}")

        object.__setattr__(self, "_domain_regexes", tuple(
            (domain, re.compile(rf"\b(?:{pattern})\b", re.IGNORECASE))
            for domain, pattern in self.domain_keywords
        ))
        object.__setattr__(self, "_feature_regexes", tuple(
            re.compile(rf"\b(?:{pattern})\b", re.IGNORECASE) for pattern in self.feature_patterns
        ))

    def indicators(self, kind: SignalKind) -> Tuple[Indicator, ...]:
        if kind == SignalKind.PAIN_POINT:
            return self.pain_point_indicators
        return self.desire_indicators

    def categories(self, kind: SignalKind) -> Tuple[CategoryRule, ...]:
        if kind == SignalKind.PAIN_POINT:
            return self.pain_point_categories
        return self.desire_categories

    def category_names(self, kind: SignalKind) -> Tuple[str, ...]:
        return tuple(rule.name for rule in self.categories(kind))

    def vocabulary(self, domain: Union[str, Domain, None]) -> Optional[FrozenSet[str]]:
        """Vocabulary for a domain; None means no filtering (general)."""
        return self.vocabularies.get(resolve_domain(domain))

    def infer_domain(self, query: Optional[str]) -> Domain:
        """Pick a domain from a search query or subreddit name."""
        if not query or not isinstance(query, str):
            return Domain.GENERAL
        for domain, regex in self._domain_regexes:
            if regex.search(query):
                return domain
        return Domain.GENERAL

    def is_feature_term(self, term: str) -> bool:
        return any(r.search(term) for r in self._feature_regexes)


DEFAULT_CATALOG = SignalCatalog()
