"""Mapping from raw seller submissions to the normalized content tree.

The mapper performs structural transformation and text cleanup only. It
never validates: missing required fields become empty strings, and the
rule engine is expected to have rejected such submissions beforehand.

Optional sections are built only when they have content. A section that
would be empty is left as None so it is absent from the serialized tree.
"""

import logging

from schemas.normalized import (
    Attribution,
    BenefitItem,
    Benefits,
    Brand,
    BrandColors,
    BrandFonts,
    CallToAction,
    Footer,
    Hero,
    Media,
    NormalizedContent,
    OptionCard,
    Options,
    Proof,
    Quote,
    SecondaryBenefit,
    SellerInfo,
    SellerLinks,
    SeoMeta,
    SocialProofItem,
    SocialProofs,
)
from schemas.raw_content import RawBrand, RawContent

from .sanitize import trim_text, sanitize_text

logger = logging.getLogger(__name__)

CTA_TEXT = "Book a meeting"
OPTIONS_TITLE_TEMPLATE = "How can {seller} help {buyer}?"
PROOF_HEADLINE_TEMPLATE = "{seller} has helped companies like {buyer} with similar needs"


def map_raw_to_normalized(raw: RawContent) -> NormalizedContent:
    """Map a raw submission to normalized content.

    Args:
        raw: Parsed raw submission

    Returns:
        NormalizedContent with empty sections omitted
    """
    title = sanitize_text(raw.headline) or ""
    buyer = sanitize_text(raw.buyers_name)
    seller = sanitize_text(raw.sellers_name)

    cta_href = (
        trim_text(raw.meeting_scheduler_link)
        or trim_text(raw.seller_link_website)
        or ""
    )

    description = sanitize_text(raw.subhead)
    seo = SeoMeta(description=description) if description else None

    hero = Hero(
        headline=title,
        subhead=sanitize_text(raw.subhead),
        short_description=sanitize_text(raw.short_description),
        cta=CallToAction(text=CTA_TEXT, href=cta_href),
        media=_map_media(raw),
        buyer_name=buyer,
        seller_name=seller,
    )

    footer = Footer(cta=CallToAction(text=CTA_TEXT, href=cta_href)) if cta_href else None

    return NormalizedContent(
        title=title,
        seo=seo,
        brand=_map_brand(raw.brand),
        hero=hero,
        benefits=_map_benefits(raw),
        options=_map_options(raw, buyer, seller),
        proof=_map_proof(raw, buyer, seller),
        social=_map_social(raw, buyer, seller),
        secondary=_map_secondary(raw, seller),
        seller=_map_seller(raw, seller),
        footer=footer,
    )


def derive_template(template: str, buyer: str | None, seller: str | None) -> str | None:
    """Fill a display template when both party names are known.

    Examples:
        >>> derive_template(OPTIONS_TITLE_TEMPLATE, "Acme", "Vendor")
        'How can Vendor help Acme?'
        >>> derive_template(OPTIONS_TITLE_TEMPLATE, None, "Vendor") is None
        True
    """
    if not buyer or not seller:
        return None
    return template.format(buyer=buyer, seller=seller)


def _map_media(raw: RawContent) -> Media | None:
    video_url = trim_text(raw.quick_demo_links)
    return Media(video_url=video_url) if video_url else None


def _map_brand(brand: RawBrand | None) -> Brand | None:
    if brand is None:
        return None

    colors = None
    if brand.colors is not None:
        colors = BrandColors(
            primary=trim_text(brand.colors.primary),
            accent=trim_text(brand.colors.accent),
            bg=trim_text(brand.colors.bg),
            text=trim_text(brand.colors.text),
        )
        if not colors.model_dump(exclude_none=True):
            colors = None

    fonts = None
    if brand.fonts is not None:
        fonts = BrandFonts(
            heading=sanitize_text(brand.fonts.heading),
            body=sanitize_text(brand.fonts.body),
        )
        if not fonts.model_dump(exclude_none=True):
            fonts = None

    logo_url = trim_text(brand.logo_url)
    if logo_url is None and colors is None and fonts is None:
        return None
    return Brand(logo_url=logo_url, colors=colors, fonts=fonts)


def _map_benefits(raw: RawContent) -> Benefits | None:
    block = raw.operational_benefit
    if block is None:
        return None

    items = []
    for benefit in block.benefits or []:
        item_title = sanitize_text(benefit.statement)
        body = sanitize_text(benefit.content)
        if item_title is None and body is None:
            continue
        items.append(BenefitItem(title=item_title or "", body=body))

    section_title = sanitize_text(block.statement)
    if section_title is None and not items:
        logger.debug("Skipping empty benefits section")
        return None
    return Benefits(title=section_title, items=items or None)


def _map_options(
    raw: RawContent, buyer: str | None, seller: str | None
) -> Options | None:
    cards = []
    for option in raw.options or []:
        card_title = sanitize_text(option.title)
        card_description = sanitize_text(option.description)
        if card_title is None and card_description is None:
            continue
        cards.append(OptionCard(title=card_title or "", description=card_description))

    if not cards:
        return None

    return Options(
        title=derive_template(OPTIONS_TITLE_TEMPLATE, buyer, seller),
        intro=sanitize_text(raw.options_intro),
        cards=cards,
        seller_name=seller,
        meeting_link=trim_text(raw.meeting_scheduler_link),
    )


def _map_proof(raw: RawContent, buyer: str | None, seller: str | None) -> Proof | None:
    block = raw.proof
    if block is None:
        return None

    attribution = Attribution(
        name=sanitize_text(block.quote_author_fullname),
        role=sanitize_text(block.quote_author_designation),
        company=sanitize_text(block.quote_author_company),
    )
    if not attribution.model_dump(exclude_none=True):
        attribution = None

    quote_text = sanitize_text(block.quote_content)
    quote = None
    if quote_text is not None or attribution is not None:
        quote = Quote(text=quote_text, attribution=attribution)

    proof = Proof(
        title=sanitize_text(block.title),
        summary_title=sanitize_text(block.summary_title),
        summary_body=sanitize_text(block.summary_content),
        quote=quote,
    )
    if not proof.model_dump(exclude_none=True):
        logger.debug("Skipping empty proof section")
        return None

    proof.headline = derive_template(PROOF_HEADLINE_TEMPLATE, buyer, seller)
    return proof


def _map_social(
    raw: RawContent, buyer: str | None, seller: str | None
) -> SocialProofs | None:
    items = []
    for social_proof in raw.social_proofs or []:
        link = trim_text(social_proof.link)
        if link is None:
            continue
        items.append(
            SocialProofItem(
                type=sanitize_text(social_proof.type),
                description=sanitize_text(social_proof.description),
                link=link,
            )
        )

    if not items:
        return None

    return SocialProofs(
        items=items,
        buyer_name=buyer,
        seller_name=seller,
        read_more_link=trim_text(raw.seller_link_read_more),
    )


def _map_secondary(raw: RawContent, seller: str | None) -> SecondaryBenefit | None:
    secondary_title = sanitize_text(raw.secondary_statement)
    body = sanitize_text(raw.secondary_description)
    if secondary_title is None and body is None:
        return None

    return SecondaryBenefit(
        title=secondary_title,
        body=body,
        link=trim_text(raw.seller_link_read_more),
        seller_name=seller,
    )


def _map_seller(raw: RawContent, seller: str | None) -> SellerInfo | None:
    body = sanitize_text(raw.seller_description)
    primary = trim_text(raw.seller_link_website)
    more = trim_text(raw.seller_link_read_more)
    if body is None and primary is None and more is None:
        return None

    links = None
    if primary is not None or more is not None:
        links = SellerLinks(primary=primary, more=more)

    return SellerInfo(name=seller, body=body, links=links)
