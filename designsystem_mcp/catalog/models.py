"""Pydantic models for design system catalog records."""

from typing import Literal

from pydantic import BaseModel, Field


# =============================================================================
# Patterns (Tailwind markup recipes)
# =============================================================================


class ClassVariation(BaseModel):
    """A named set of Tailwind classes, e.g. a variant or size."""

    name: str
    classes: str
    description: str | None = None


class PatternProp(BaseModel):
    """Legacy prop definition kept for older consumers."""

    name: str
    type: str
    required: bool = False
    default: str | None = None
    description: str


class PatternExample(BaseModel):
    title: str
    description: str | None = None
    code: str
    preview: str | None = None


class PatternOverview(BaseModel):
    introduction: str
    whenToUse: list[str] = Field(default_factory=list)


class PatternGuidelines(BaseModel):
    dos: list[str] = Field(default_factory=list)
    donts: list[str] = Field(default_factory=list)
    accessibility: list[str] | None = None


class PatternSpecs(BaseModel):
    variants: list[ClassVariation] | None = None
    sizes: list[ClassVariation] | None = None
    states: list[ClassVariation] | None = None


class Pattern(BaseModel):
    """A documented UI pattern with copy-paste Tailwind examples."""

    name: str
    slug: str
    description: str
    category: str
    importStatement: str
    usageNote: str | None = None
    examples: list[PatternExample] = Field(default_factory=list)
    relatedComponents: list[str] | None = None
    tailwind: bool | None = None
    overview: PatternOverview | None = None
    guidelines: PatternGuidelines | None = None
    specs: PatternSpecs | None = None
    props: list[PatternProp] | None = None


class PatternCategory(BaseModel):
    """Category metadata used for grouping patterns."""

    name: str
    slug: str
    description: str
    order: int


# =============================================================================
# Style guide tokens
# =============================================================================


class ColorToken(BaseModel):
    name: str
    value: str
    darkValue: str | None = None
    usage: str | None = None
    cssVar: str | None = None
    role: Literal["background", "foreground", "border", "emphasis"] | None = None


class ColorCategory(BaseModel):
    name: str
    description: str
    colors: list[ColorToken]


class TypographyStyle(BaseModel):
    name: str
    fontFamily: str
    fontSize: str
    fontWeight: str
    lineHeight: str
    letterSpacing: str | None = None
    usage: str


class SpacingToken(BaseModel):
    name: str
    value: str
    pixels: int


class Breakpoint(BaseModel):
    name: str
    value: str
    description: str


class StyleGuide(BaseModel):
    colors: list[ColorCategory]
    typography: list[TypographyStyle]
    spacing: list[SpacingToken]
    breakpoints: list[Breakpoint]


# =============================================================================
# Web components (@mcpsystem/ui)
# =============================================================================


class WebComponentProp(BaseModel):
    name: str
    type: str
    default: str | None = None
    description: str
    attribute: str | None = None  # HTML attribute name if different from prop


class WebComponentSlot(BaseModel):
    name: str
    description: str


class WebComponentCssPart(BaseModel):
    name: str
    description: str


class WebComponentCssProp(BaseModel):
    name: str
    default: str | None = None
    description: str


class WebComponentEvent(BaseModel):
    name: str
    detail: str | None = None
    description: str


class WebComponentExample(BaseModel):
    title: str
    code: str


class WebComponent(BaseModel):
    """Documentation for a custom element shipped in the UI package."""

    name: str
    tagName: str
    description: str
    category: str
    props: list[WebComponentProp] = Field(default_factory=list)
    slots: list[WebComponentSlot] = Field(default_factory=list)
    cssParts: list[WebComponentCssPart] = Field(default_factory=list)
    cssProps: list[WebComponentCssProp] = Field(default_factory=list)
    events: list[WebComponentEvent] = Field(default_factory=list)
    examples: list[WebComponentExample] = Field(default_factory=list)


# =============================================================================
# Root
# =============================================================================


class DesignSystem(BaseModel):
    """The complete catalog: metadata, patterns, tokens and web components."""

    name: str
    version: str
    description: str
    package: str
    categories: list[PatternCategory] = Field(default_factory=list)
    patterns: list[Pattern] = Field(default_factory=list)
    styleGuide: StyleGuide
    webComponents: list[WebComponent] = Field(default_factory=list)
