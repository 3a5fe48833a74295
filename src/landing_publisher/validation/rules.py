"""Content rules applied to raw landing submissions.

Each rule is an independent, side-effect-free function of the raw
submission. Blocking rules return ErrorItems; advisory checks return
WarningItems. Rules can run in any order and their outputs are simply
concatenated.
"""

import math
from collections.abc import Iterator
from decimal import Decimal
from typing import NamedTuple

from pydantic import BaseModel

from schemas.raw_content import RawContent
from schemas.validation import ErrorItem, WarningItem

from .contrast import AA_NORMAL, contrast_ratio
from .errors import (
    E_HERO_REQ,
    E_MIN_SECTION,
    E_TEXT_LIMIT,
    E_URL_SCHED,
    E_URL_SELLER,
    E_URL_SOCIAL,
    E_URL_VIDEO,
    W_BENEFIT_LONG,
    W_CONTRAST,
    W_HERO_LONG,
    W_QUOTE_LONG,
    W_SUBHEAD_LONG,
    W_VIDEO_HOST,
    create_error,
    create_warning,
)
from .urls import is_https_url, is_vimeo_url


class LengthPolicy(BaseModel):
    """Soft caps (in characters) and the multiplier that derives hard limits.

    Text between the soft cap and the hard limit produces a warning; text
    beyond the hard limit is a blocking error.
    """

    headline: int = 90
    subhead: int = 220
    short_description: int = 300
    options_intro: int = 250
    benefit_body: int = 400
    quote: int = 300
    meta_description: int = 160
    multiplier: float = 1.2

    def hard_limit(self, cap: int) -> int:
        # Decimal keeps e.g. 90 * 1.2 from rounding up to 109
        return math.ceil(Decimal(cap) * Decimal(str(self.multiplier)))


DEFAULT_POLICY = LengthPolicy()


class LengthCheckedField(NamedTuple):
    path: str
    label: str
    text: str | None
    cap: int
    warning_code: str


def is_non_empty(value: str | None) -> bool:
    return bool(value and value.strip())


def _length_checked_fields(
    raw: RawContent, policy: LengthPolicy
) -> Iterator[LengthCheckedField]:
    yield LengthCheckedField(
        "biggestBusinessBenefitBuyerStatement",
        "Headline",
        raw.headline,
        policy.headline,
        W_HERO_LONG,
    )
    yield LengthCheckedField(
        "synopsisBusinessBenefit", "Subhead", raw.subhead, policy.subhead, W_SUBHEAD_LONG
    )
    yield LengthCheckedField(
        "shortDescriptionBusinessBenefit",
        "Short description",
        raw.short_description,
        policy.short_description,
        W_SUBHEAD_LONG,
    )
    yield LengthCheckedField(
        "synopsisAutomationOptions",
        "Options intro",
        raw.options_intro,
        policy.options_intro,
        W_SUBHEAD_LONG,
    )
    if raw.operational_benefit is not None:
        for i, benefit in enumerate(raw.operational_benefit.benefits or []):
            yield LengthCheckedField(
                f"highestOperationalBenefit.benefits[{i}].content",
                "Benefit description",
                benefit.content,
                policy.benefit_body,
                W_BENEFIT_LONG,
            )
    if raw.proof is not None:
        yield LengthCheckedField(
            "mostRelevantProof.quoteContent",
            "Quote",
            raw.proof.quote_content,
            policy.quote,
            W_QUOTE_LONG,
        )


def _has_benefits(raw: RawContent) -> bool:
    if raw.operational_benefit is None:
        return False
    return any(
        is_non_empty(b.statement) or is_non_empty(b.content)
        for b in raw.operational_benefit.benefits or []
    )


def _has_options(raw: RawContent) -> bool:
    return any(
        is_non_empty(o.title) or is_non_empty(o.description) for o in raw.options or []
    )


def _has_proof(raw: RawContent) -> bool:
    if raw.proof is None:
        return False
    # Only declared fields; the mapper ignores extension keys
    declared = raw.proof.model_dump(
        exclude_none=True, exclude=set(raw.proof.model_extra or {})
    )
    return any(
        is_non_empty(value) for value in declared.values() if isinstance(value, str)
    )


def validate_required_fields(
    raw: RawContent, policy: LengthPolicy = DEFAULT_POLICY
) -> list[ErrorItem]:
    """Require the headline, both party names and one substantive section."""
    errors: list[ErrorItem] = []

    if not is_non_empty(raw.headline):
        errors.append(create_error(E_HERO_REQ, "biggestBusinessBenefitBuyerStatement"))
    if not is_non_empty(raw.buyers_name):
        errors.append(create_error(E_HERO_REQ, "BuyersName", "Buyer name is required."))
    if not is_non_empty(raw.sellers_name):
        errors.append(
            create_error(E_HERO_REQ, "SellersName", "Seller name is required.")
        )

    if not (_has_benefits(raw) or _has_options(raw) or _has_proof(raw)):
        errors.append(create_error(E_MIN_SECTION))

    return errors


def validate_urls(
    raw: RawContent, policy: LengthPolicy = DEFAULT_POLICY
) -> list[ErrorItem]:
    """Every outbound link that is present must be a valid https URL."""
    errors: list[ErrorItem] = []

    link_fields = [
        ("meetingSchedulerLink", raw.meeting_scheduler_link, E_URL_SCHED),
        ("sellerLinkWebsite", raw.seller_link_website, E_URL_SELLER),
        ("sellerLinkReadMore", raw.seller_link_read_more, E_URL_SELLER),
        ("quickDemoLinks", raw.quick_demo_links, E_URL_VIDEO),
    ]
    for field, link, code in link_fields:
        if link and not is_https_url(link):
            errors.append(create_error(code, field))

    for i, social_proof in enumerate(raw.social_proofs or []):
        if not is_https_url(social_proof.link):
            errors.append(
                create_error(
                    E_URL_SOCIAL,
                    f"socialProofs[{i}].link",
                    "Social proof link must be a valid https URL.",
                )
            )

    return errors


def validate_text_limits(
    raw: RawContent, policy: LengthPolicy = DEFAULT_POLICY
) -> list[ErrorItem]:
    """Reject text beyond the hard limit for its field."""
    errors: list[ErrorItem] = []

    for field in _length_checked_fields(raw, policy):
        hard_limit = policy.hard_limit(field.cap)
        if field.text and len(field.text) > hard_limit:
            errors.append(
                create_error(
                    E_TEXT_LIMIT,
                    field.path,
                    f"{field.label} exceeds hard limit of {hard_limit} characters.",
                )
            )

    return errors


def check_text_warnings(
    raw: RawContent, policy: LengthPolicy = DEFAULT_POLICY
) -> list[WarningItem]:
    """Warn about text over its soft cap but within the hard limit."""
    warnings: list[WarningItem] = []

    for field in _length_checked_fields(raw, policy):
        if not field.text:
            continue
        length = len(field.text)
        if field.cap < length <= policy.hard_limit(field.cap):
            warnings.append(
                create_warning(
                    field.warning_code,
                    field.path,
                    f"{field.label} is {length} characters; consider ≤ {field.cap}.",
                )
            )

    return warnings


def check_video_host(
    raw: RawContent, policy: LengthPolicy = DEFAULT_POLICY
) -> list[WarningItem]:
    """Warn when a valid demo link cannot be embedded."""
    link = raw.quick_demo_links
    if link and is_https_url(link) and not is_vimeo_url(link):
        return [create_warning(W_VIDEO_HOST, "quickDemoLinks")]
    return []


def check_theme_contrast(
    raw: RawContent, policy: LengthPolicy = DEFAULT_POLICY
) -> list[WarningItem]:
    """Warn when brand text/background colours fall below WCAG AA."""
    if raw.brand is None or raw.brand.colors is None:
        return []

    bg = raw.brand.colors.bg
    text = raw.brand.colors.text
    if not bg or not text:
        return []

    ratio = contrast_ratio(text, bg)
    if ratio is None or ratio >= AA_NORMAL:
        return []

    return [
        create_warning(
            W_CONTRAST,
            "brand.colors",
            f"Text/background contrast {ratio:.2f}:1 is below WCAG AA minimum "
            f"({AA_NORMAL}:1)",
        )
    ]


BLOCKING_RULES = (validate_required_fields, validate_urls, validate_text_limits)
ADVISORY_RULES = (check_text_warnings, check_video_host, check_theme_contrast)


def run_blocking_rules(
    raw: RawContent, policy: LengthPolicy = DEFAULT_POLICY
) -> list[ErrorItem]:
    return [error for rule in BLOCKING_RULES for error in rule(raw, policy)]


def run_advisory_rules(
    raw: RawContent, policy: LengthPolicy = DEFAULT_POLICY
) -> list[WarningItem]:
    return [warning for rule in ADVISORY_RULES for warning in rule(raw, policy)]
