"""Normalized landing content schemas.

The normalized tree is the canonical rendering model. Sections are optional
and are left as ``None`` when they would be empty, so the serialized tree
omits them entirely rather than carrying empty objects. Keys are emitted in
camelCase for the renderer.
"""

from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class NormalizedModel(BaseModel):
    """Base for all normalized content models."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class SeoMeta(NormalizedModel):
    description: str | None = None
    og_image: str | None = None


class BrandColors(NormalizedModel):
    primary: str | None = None
    accent: str | None = None
    bg: str | None = None
    text: str | None = None


class BrandFonts(NormalizedModel):
    heading: str | None = None
    body: str | None = None


class Brand(NormalizedModel):
    logo_url: str | None = None
    colors: BrandColors | None = None
    fonts: BrandFonts | None = None


class CallToAction(NormalizedModel):
    """A call-to-action button. An empty ``href`` means no CTA."""

    text: str
    href: str


class Media(NormalizedModel):
    video_url: str | None = None


class Hero(NormalizedModel):
    headline: str
    subhead: str | None = None
    short_description: str | None = None
    cta: CallToAction
    media: Media | None = None
    buyer_name: str | None = None
    seller_name: str | None = None


class BenefitItem(NormalizedModel):
    title: str
    body: str | None = None


class Benefits(NormalizedModel):
    title: str | None = None
    items: list[BenefitItem] | None = None


class OptionCard(NormalizedModel):
    title: str
    description: str | None = None


class Options(NormalizedModel):
    title: str | None = None
    intro: str | None = None
    cards: list[OptionCard]
    seller_name: str | None = None
    meeting_link: str | None = None


class Attribution(NormalizedModel):
    name: str | None = None
    role: str | None = None
    company: str | None = None


class Quote(NormalizedModel):
    text: str | None = None
    attribution: Attribution | None = None


class Proof(NormalizedModel):
    headline: str | None = None
    title: str | None = None
    summary_title: str | None = None
    summary_body: str | None = None
    quote: Quote | None = None


class SocialProofItem(NormalizedModel):
    type: str | None = None
    description: str | None = None
    link: str


class SocialProofs(NormalizedModel):
    items: list[SocialProofItem]
    buyer_name: str | None = None
    seller_name: str | None = None
    read_more_link: str | None = None


class SecondaryBenefit(NormalizedModel):
    title: str | None = None
    body: str | None = None
    link: str | None = None
    seller_name: str | None = None


class SellerLinks(NormalizedModel):
    primary: str | None = None
    more: str | None = None


class SellerInfo(NormalizedModel):
    name: str | None = None
    body: str | None = None
    links: SellerLinks | None = None


class Footer(NormalizedModel):
    cta: CallToAction | None = None


class NormalizedContent(NormalizedModel):
    """The canonical landing page content consumed by rendering."""

    title: str
    seo: SeoMeta | None = None
    brand: Brand | None = None
    hero: Hero
    benefits: Benefits | None = None
    options: Options | None = None
    proof: Proof | None = None
    social: SocialProofs | None = None
    secondary: SecondaryBenefit | None = None
    seller: SellerInfo | None = None
    footer: Footer | None = None

    def to_tree(self) -> dict[str, Any]:
        """Dump to the JSON tree that is hashed, stored and rendered."""
        return self.model_dump(by_alias=True, exclude_none=True)
