"""Catalog product schema."""

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


BLANK_SLUG = "blank"


class ProductKind(str, Enum):
    """How the sources of a product are acquired."""

    BLANK = "blank"  # Empty local scaffold
    FREE = "free"  # Public repository clone
    PAID = "paid"  # Authenticated archive download


class Product(BaseModel):
    """A scaffoldable product listed in the remote catalog.

    Records arrive with camelCase keys (``productSlug``) but snake_case keys
    are accepted as well so fixtures and cached data can use either.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_id: int | None = Field(
        None,
        validation_alias=AliasChoices("productId", "product_id"),
        description="Catalog identifier, None for free products",
    )
    product_title: str = Field(
        ...,
        validation_alias=AliasChoices("productTitle", "product_title"),
        description="Display title",
    )
    product_slug: str = Field(
        ...,
        validation_alias=AliasChoices("productSlug", "product_slug"),
        description="URL-safe unique name",
    )
    available: bool = Field(
        False,
        description="Whether the authenticated user is entitled to the product",
    )

    @property
    def is_blank(self) -> bool:
        return self.product_slug == BLANK_SLUG

    @property
    def kind(self) -> ProductKind:
        if self.is_blank:
            return ProductKind.BLANK
        if self.product_id is None:
            return ProductKind.FREE
        return ProductKind.PAID


BLANK_PRODUCT = Product(
    product_id=None,
    product_title="Blank project",
    product_slug=BLANK_SLUG,
    available=True,
)
