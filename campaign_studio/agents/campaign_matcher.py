"""
Reference Campaign Matching Engine

Finds a small, diverse shortlist of real-world reference campaigns for a
brief:
- Scores every catalog entry on seven similarity dimensions
- Greedily picks a diverse top-K (best match first, then complements)
- Diversifies any candidate list by industry and emotional appeal
- Backfills short lists with out-of-industry wildcards
- Buckets campaigns into qualitative themes

Everything here is synchronous and in-memory. The only nondeterminism is
the shuffle in wildcard backfill, which uses the injected ``random.Random``.
"""

import random
from typing import Dict, List, Optional, Sequence, Set

import structlog

from campaign_studio.config import settings
from campaign_studio.core.patterns import THEME_PATTERNS
from campaign_studio.core.similarity import DIMENSIONS, ScoredCampaign, score_catalog
from campaign_studio.data.catalog import Catalog, get_catalog
from campaign_studio.data.models import CampaignBrief, ReferenceCampaign

logger = structlog.get_logger()

# Only the top CANDIDATE_POOL_SIZE scored entries are ever considered by the
# selector; anything ranked lower cannot be picked.
CANDIDATE_POOL_SIZE = 20
# Dimensions whose running average is below this are "weak" and rewarded.
WEAK_DIMENSION_THRESHOLD = 7
# Flat bonus for a new industry and, separately, for a new emotional tag.
DIVERSITY_BONUS = 5
MAX_RESULTS = 5
THEMATIC_WILDCARDS = 2


def _industry_key(campaign: ReferenceCampaign) -> str:
    return campaign.industry.strip().lower()


def _emotion_keys(campaign: ReferenceCampaign) -> Set[str]:
    return {e.strip().lower() for e in campaign.emotional_appeal if e.strip()}


def select_diverse(
    scored: Sequence[ScoredCampaign],
    count: int = MAX_RESULTS,
    pool_size: int = CANDIDATE_POOL_SIZE,
    diversity_bonus: float = DIVERSITY_BONUS,
    weak_threshold: float = WEAK_DIMENSION_THRESHOLD,
) -> List[ScoredCampaign]:
    """
    Greedy diverse top-K selection.

    The first pick is always the highest total score. Each later pick
    maximises complement + diversity:

    - complement: sum of (candidate - running average) over dimensions where
      the running average is below ``weak_threshold`` and the candidate beats it
    - diversity: ``diversity_bonus`` for an unseen industry plus
      ``diversity_bonus`` when at least one emotional tag is unseen

    Ties go to the better-ranked candidate. When no candidate improves on
    zero the next-ranked unselected candidate is taken. No backtracking.
    """
    if count <= 0:
        return []

    # sorted() is stable, so equal totals keep their input order
    ranked = sorted(scored, key=lambda s: s.total, reverse=True)

    pool: List[ScoredCampaign] = []
    seen_ids: Set[str] = set()
    for item in ranked:
        if item.campaign.id in seen_ids:
            continue
        seen_ids.add(item.campaign.id)
        pool.append(item)
        if len(pool) >= pool_size:
            break

    if not pool:
        return []

    selected = [pool[0]]
    selected_ids = {pool[0].campaign.id}

    while len(selected) < count and len(selected) < len(pool):
        averages = {
            d: sum(s.scores.get(d) for s in selected) / len(selected)
            for d in DIMENSIONS
        }
        industries = {_industry_key(s.campaign) for s in selected}
        emotions: Set[str] = set()
        for s in selected:
            emotions |= _emotion_keys(s.campaign)

        best: Optional[ScoredCampaign] = None
        best_score = 0.0
        for candidate in pool:
            if candidate.campaign.id in selected_ids:
                continue

            complement = sum(
                candidate.scores.get(d) - avg
                for d, avg in averages.items()
                if avg < weak_threshold and candidate.scores.get(d) > avg
            )
            diversity = 0.0
            if _industry_key(candidate.campaign) not in industries:
                diversity += diversity_bonus
            if _emotion_keys(candidate.campaign) - emotions:
                diversity += diversity_bonus

            if complement + diversity > best_score:
                best, best_score = candidate, complement + diversity

        if best is None:
            best = next(c for c in pool if c.campaign.id not in selected_ids)

        selected.append(best)
        selected_ids.add(best.campaign.id)

    return selected[:count]


def group_by_themes(campaigns: Sequence[ReferenceCampaign]) -> Dict[str, List[ReferenceCampaign]]:
    """
    Bucket campaigns into the fixed themes.

    Buckets are independent: a campaign can land in several or in none.
    """
    themes: Dict[str, List[ReferenceCampaign]] = {t.theme: [] for t in THEME_PATTERNS}
    for campaign in campaigns:
        for theme in THEME_PATTERNS:
            if theme.pattern.search(getattr(campaign, theme.field) or ""):
                themes[theme.theme].append(campaign)
    return themes


class CampaignMatcher:
    """
    Matching engine bound to one catalog and one random source.

    Pass a seeded ``random.Random`` for reproducible wildcard picks.
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        rng: Optional[random.Random] = None,
        count: Optional[int] = None,
        pool_size: Optional[int] = None,
    ):
        self._catalog: Catalog = tuple(catalog) if catalog is not None else get_catalog()
        self._rng = rng or random.Random(settings.random_seed)
        self.count = count or settings.match_count
        self.pool_size = pool_size or settings.candidate_pool_size
        self._logger = logger.bind(component="campaign_matcher")

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def score(self, brief: CampaignBrief) -> List[ScoredCampaign]:
        return score_catalog(brief, self._catalog)

    def find_similar_traditional(self, brief: CampaignBrief, count: Optional[int] = None) -> List[ReferenceCampaign]:
        """Score the whole catalog and return the greedy diverse top-K."""
        picked = select_diverse(self.score(brief), count=count or self.count, pool_size=self.pool_size)
        self._logger.debug(
            "diverse_selection",
            brand=brief.brand,
            picked=[s.campaign.name for s in picked],
            totals=[s.total for s in picked],
        )
        return [s.campaign for s in picked]

    def select_wildcards(self, selection: Sequence[ReferenceCampaign], count: int) -> List[ReferenceCampaign]:
        """
        Random catalog entries from industries the selection does not cover.

        Returns fewer than ``count`` (possibly none) when the catalog runs out.
        """
        if count <= 0:
            return []

        selected_ids = {c.id for c in selection}
        selected_industries = {_industry_key(c) for c in selection}
        eligible = [
            c for c in self._catalog
            if c.id not in selected_ids and _industry_key(c) not in selected_industries
        ]
        self._rng.shuffle(eligible)
        return eligible[:count]

    def diversify(
        self,
        candidates: Sequence[ReferenceCampaign],
        max_results: int = MAX_RESULTS,
    ) -> List[ReferenceCampaign]:
        """
        Final post-pass over any ordered candidate list.

        1. keep entries that bring a new industry or an unseen emotional tag
        2. fill with the remaining entries in their original order
        3. top up with wildcards from uncovered industries
        """
        final: List[ReferenceCampaign] = []
        final_ids: Set[str] = set()
        industries: Set[str] = set()
        emotions: Set[str] = set()

        for campaign in candidates:
            if len(final) >= max_results:
                break
            if campaign.id in final_ids:
                continue
            new_industry = _industry_key(campaign) not in industries
            new_emotion = bool(_emotion_keys(campaign) - emotions)
            if new_industry or new_emotion:
                final.append(campaign)
                final_ids.add(campaign.id)
                industries.add(_industry_key(campaign))
                emotions |= _emotion_keys(campaign)

        for campaign in candidates:
            if len(final) >= max_results:
                break
            if campaign.id not in final_ids:
                final.append(campaign)
                final_ids.add(campaign.id)

        if len(final) < max_results:
            final.extend(self.select_wildcards(final, max_results - len(final)))

        return final[:max_results]

    def find_similar_campaigns(self, brief: CampaignBrief) -> List[ReferenceCampaign]:
        """Reference campaigns for a brief: diverse top-K, then the diversification post-pass."""
        matches = self.find_similar_traditional(brief)
        result = self.diversify(matches, max_results=self.count)
        self._logger.info("reference_campaigns_matched", brand=brief.brand, names=[c.name for c in result])
        return result

    def find_thematic_matches(self, brief: CampaignBrief) -> List[ReferenceCampaign]:
        """Institutional-rebellion matches plus a couple of out-of-industry wildcards."""
        similar = self.find_similar_campaigns(brief)
        rebels = group_by_themes(similar)["institutional rebellion"]
        return rebels + self.select_wildcards(similar, THEMATIC_WILDCARDS)
