"""Raw landing content schemas.

Sellers author landing pages as loosely structured JSON. These models name
every field the normalizer understands and keep anything else in
``model_extra`` so that new keys never break validation.

Only types are enforced here. Presence, URL hygiene and length rules are
applied afterwards by the rule engine so that every problem is reported
with its field name.
"""

from pydantic import BaseModel, Field


class RawBenefit(BaseModel):
    """A single benefit statement with optional supporting text."""

    statement: str | None = None
    content: str | None = None

    model_config = {"extra": "allow"}


class RawOperationalBenefit(BaseModel):
    """The benefits block of a seller submission."""

    statement: str | None = Field(
        default=None, alias="highestOperationalBenefitStatement"
    )
    benefits: list[RawBenefit] | None = None

    model_config = {"extra": "allow", "populate_by_name": True}


class RawOption(BaseModel):
    """An option card describing one path the buyer can take."""

    title: str | None = None
    description: str | None = None

    model_config = {"extra": "allow"}


class RawProof(BaseModel):
    """Case study / proof block, including the customer quote."""

    title: str | None = None
    summary_title: str | None = Field(default=None, alias="summaryTitle")
    summary_content: str | None = Field(default=None, alias="summaryContent")
    quote_content: str | None = Field(default=None, alias="quoteContent")
    quote_author_fullname: str | None = Field(
        default=None, alias="quoteAuthorFullname"
    )
    quote_author_designation: str | None = Field(
        default=None, alias="quoteAuthorDesignation"
    )
    quote_author_company: str | None = Field(default=None, alias="quoteAuthorCompany")

    model_config = {"extra": "allow", "populate_by_name": True}


class RawSocialProof(BaseModel):
    """A social proof item (article, award, review) with an outbound link."""

    type: str | None = None
    description: str | None = None
    link: str | None = None

    model_config = {"extra": "allow"}


class RawBrandColors(BaseModel):
    primary: str | None = None
    accent: str | None = None
    bg: str | None = None
    text: str | None = None

    model_config = {"extra": "allow"}


class RawBrandFonts(BaseModel):
    heading: str | None = None
    body: str | None = None

    model_config = {"extra": "allow"}


class RawBrand(BaseModel):
    """Optional theme overrides supplied by the seller."""

    logo_url: str | None = Field(default=None, alias="logoUrl")
    colors: RawBrandColors | None = None
    fonts: RawBrandFonts | None = None

    model_config = {"extra": "allow", "populate_by_name": True}


class RawContent(BaseModel):
    """A seller-authored landing page submission.

    Field aliases match the JSON keys used by the authoring tool. Unknown
    keys are retained in ``model_extra`` and ignored by normalization.
    """

    # Names (required by the rule engine, optional at the type level)
    buyers_name: str | None = Field(default=None, alias="BuyersName")
    sellers_name: str | None = Field(default=None, alias="SellersName")

    # Hero
    headline: str | None = Field(
        default=None, alias="biggestBusinessBenefitBuyerStatement"
    )
    subhead: str | None = Field(default=None, alias="synopsisBusinessBenefit")
    short_description: str | None = Field(
        default=None, alias="shortDescriptionBusinessBenefit"
    )
    meeting_scheduler_link: str | None = Field(
        default=None, alias="meetingSchedulerLink"
    )
    seller_link_website: str | None = Field(default=None, alias="sellerLinkWebsite")
    quick_demo_links: str | None = Field(default=None, alias="quickDemoLinks")

    # Sections
    operational_benefit: RawOperationalBenefit | None = Field(
        default=None, alias="highestOperationalBenefit"
    )
    options_intro: str | None = Field(default=None, alias="synopsisAutomationOptions")
    options: list[RawOption] | None = None
    proof: RawProof | None = Field(default=None, alias="mostRelevantProof")
    social_proofs: list[RawSocialProof] | None = Field(
        default=None, alias="socialProofs"
    )
    secondary_statement: str | None = Field(
        default=None, alias="secondHighestOperationalBenefitStatement"
    )
    secondary_description: str | None = Field(
        default=None, alias="secondHighestOperationalBenefitDescription"
    )
    seller_description: str | None = Field(default=None, alias="sellerDescription")
    seller_link_read_more: str | None = Field(default=None, alias="sellerLinkReadMore")

    # Theme
    brand: RawBrand | None = None

    model_config = {"extra": "allow", "populate_by_name": True}
