from typing import Dict

from ..models.schema import PageFacts, PerformanceFacts, ScoreSet
from .utils import round_half_up

CHECK_POINTS = 25
SEO_FLOOR = 40          # used when no check passes
PERFORMANCE_WEIGHT = 0.5
SEO_WEIGHT = 0.5

TITLE_LENGTH = (10, 60)
META_DESCRIPTION_LENGTH = (50, 160)
MAX_MISSING_ALT_RATIO = 0.3


def seo_checks(facts: PageFacts) -> Dict[str, bool]:
    return {
        "title_length": TITLE_LENGTH[0] <= len(facts.title) <= TITLE_LENGTH[1],
        "meta_description_length": (
            META_DESCRIPTION_LENGTH[0] <= len(facts.meta_description) <= META_DESCRIPTION_LENGTH[1]
        ),
        "h1_present": bool(facts.first_h1),
        "image_alt_coverage": (
            facts.image_count > 0
            and facts.images_missing_alt / facts.image_count < MAX_MISSING_ALT_RATIO
        ),
    }


def performance_score(perf: PerformanceFacts) -> int:
    if perf.absent:
        return 0
    return round_half_up(perf.lighthouse_performance_ratio * 100)


def seo_score(facts: PageFacts) -> int:
    passed = sum(1 for ok in seo_checks(facts).values() if ok)
    if passed == 0:
        return SEO_FLOOR
    return passed * CHECK_POINTS


def compute_scores(perf: PerformanceFacts, facts: PageFacts) -> ScoreSet:
    performance = performance_score(perf)
    seo = seo_score(facts)
    overall = round_half_up(performance * PERFORMANCE_WEIGHT + seo * SEO_WEIGHT)
    return ScoreSet(performance=performance, seo=seo, overall=overall)
