"""
Pydantic schema definitions for the catalog module.

``PlantSummary`` carries the minimal fields needed to render a card in
a category listing, ``PlantView`` is the fully-defaulted presentation
model of a single plant, and ``ScreenView`` bundles one of them with
the fetch state and pagination metadata so that the front-end knows
whether to show a spinner, an error or the data.
"""

from enum import Enum
from typing import Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, Field, computed_field, model_validator


T = TypeVar("T")


class Category(BaseModel):
    """A browsable subset of the remote catalogue."""

    slug: str
    name: str
    description: str = ""
    icon: str = ""
    # Opaque query-string fragment, e.g. ``indoor=1``.  Empty means all plants.
    filter: str = ""


class PlantSummary(BaseModel):
    """A single entry of a species listing."""

    id: Union[int, str, None] = None
    common_name: str
    scientific_name: str
    thumbnail_url: Optional[str] = None


class Attribute(BaseModel):
    """An optional plant field reduced to presence plus a display value.

    ``value`` is the display-ready string when ``present`` is true and
    ``None`` otherwise.  List-valued fields also keep their entries in
    ``items`` so that the front-end can render them one by one.
    """

    present: bool = False
    value: Optional[str] = None
    items: List[str] = Field(default_factory=list)

    @classmethod
    def absent(cls) -> "Attribute":
        return cls()

    @classmethod
    def of(cls, value: str, items: Optional[List[str]] = None) -> "Attribute":
        return cls(present=True, value=value, items=items or [])


class PlantView(BaseModel):
    """Normalized detail of one plant.

    Every optional field of the raw record has a defined presence rule,
    so templates never need to check for ``None``, empty strings or
    empty lists themselves.
    """

    id: Union[int, str, None] = None
    common_name: str
    scientific_name: str
    image_url: Attribute = Field(default_factory=Attribute)
    thumbnail_url: Attribute = Field(default_factory=Attribute)
    description: Attribute = Field(default_factory=Attribute)

    # Header tags
    cycle: Attribute = Field(default_factory=Attribute)
    hardiness: Attribute = Field(default_factory=Attribute)
    growth_rate: Attribute = Field(default_factory=Attribute)
    watering: Attribute = Field(default_factory=Attribute)
    sunlight: Attribute = Field(default_factory=Attribute)
    care_level: Attribute = Field(default_factory=Attribute)

    # Basic information
    type: Attribute = Field(default_factory=Attribute)
    dimension: Attribute = Field(default_factory=Attribute)
    attracts: Attribute = Field(default_factory=Attribute)
    propagation: Attribute = Field(default_factory=Attribute)

    # Care
    pruning_months: Attribute = Field(default_factory=Attribute)
    pruning_frequency: str = "regularly"
    soil: Attribute = Field(default_factory=Attribute)
    watering_note: Attribute = Field(default_factory=Attribute)
    sunlight_note: Attribute = Field(default_factory=Attribute)
    pruning_note: Attribute = Field(default_factory=Attribute)

    # Pests and diseases
    pest_susceptibility: Attribute = Field(default_factory=Attribute)
    disease_susceptibility: Attribute = Field(default_factory=Attribute)

    # Warnings
    poisonous_to_humans: bool = False
    poisonous_to_pets: bool = False
    edible_leaf: bool = False
    edible_fruit: bool = False

    @computed_field
    @property
    def has_basic_info(self) -> bool:
        return any(
            a.present for a in (self.type, self.dimension, self.attracts, self.propagation)
        )

    @computed_field
    @property
    def has_pests_and_diseases(self) -> bool:
        return self.pest_susceptibility.present or self.disease_susceptibility.present

    @computed_field
    @property
    def toxicity_warnings(self) -> List[str]:
        warnings: List[str] = []
        if self.poisonous_to_humans:
            warnings.append("humans")
        if self.poisonous_to_pets:
            warnings.append("pets")
        return warnings

    @computed_field
    @property
    def has_warnings(self) -> bool:
        return bool(self.toxicity_warnings) or self.edible_leaf or self.edible_fruit


class FetchStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class PageState(BaseModel):
    """Pagination metadata of the last fetched page.

    ``total_pages`` is the upstream ``last_page``, except when a page past
    that end was requested: it is then raised to ``current_page`` so that
    ``current_page <= total_pages`` always holds.
    """

    current_page: int = Field(default=1, ge=1)
    total_pages: int = Field(
        default=1,
        ge=1,
        description="Upstream last_page, or current_page when past the reported end",
    )
    has_more: bool = False

    @model_validator(mode="after")
    def _current_within_total(self) -> "PageState":
        if self.current_page > self.total_pages:
            raise ValueError("current_page must not exceed total_pages")
        return self


class ScreenView(BaseModel, Generic[T]):
    """Read-only state of one screen as seen by the presentation layer.

    ``data`` and ``page_state`` are only meaningful in the ``ready``
    state; ``message`` is only set in the ``failed`` state.  A ready
    screen without data is the "not found" case of the detail page.
    """

    state: FetchStatus = FetchStatus.LOADING
    data: Optional[T] = None
    message: Optional[str] = None
    page_state: Optional[PageState] = None

    @classmethod
    def loading(cls):
        return cls(state=FetchStatus.LOADING)

    @classmethod
    def ready(cls, data: Optional[T], page_state: Optional[PageState] = None):
        return cls(state=FetchStatus.READY, data=data, page_state=page_state)

    @classmethod
    def failed(cls, message: str):
        return cls(state=FetchStatus.FAILED, message=message)

    @computed_field
    @property
    def not_found(self) -> bool:
        return self.state == FetchStatus.READY and self.data is None


PlantListScreen = ScreenView[List[PlantSummary]]
PlantDetailScreen = ScreenView[PlantView]


class CategoryListing(BaseModel):
    """A category page: its heading plus the current listing screen."""

    slug: str
    title: str
    screen: PlantListScreen
