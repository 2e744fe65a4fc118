"""Configuration models."""

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from ..errors import ConfigReleasedError

UINT32_MAX = 2 ** 32 - 1

# Scalar fields per key file group, in the order they are written.
INTERFACE_FIELDS: Tuple[str, ...] = (
    "enable_list_tooltips",
    "enable_dark_theme",
    "show_menubar",
    "show_statusbar",
    "show_filter",
    "show_search_button",
)
SEARCH_FIELDS: Tuple[str, ...] = (
    "match_case",
    "enable_regex",
    "search_in_path",
    "limit_results",
    "num_results",
)


class FsearchConfig(BaseModel):
    """User settings of the search application."""

    model_config = ConfigDict(validate_assignment=True)

    # Interface settings
    enable_list_tooltips: bool = Field(default=True, description="Show tooltips in the result list")
    enable_dark_theme: bool = Field(default=False, description="Prefer the dark theme variant")
    show_menubar: bool = Field(default=True, description="Show the menu bar")
    show_statusbar: bool = Field(default=True, description="Show the status bar")
    show_filter: bool = Field(default=True, description="Show the filter selector")
    show_search_button: bool = Field(default=True, description="Show the search button")

    # Search settings
    match_case: bool = Field(default=False, description="Case sensitive matching")
    enable_regex: bool = Field(default=False, description="Treat the query as a regular expression")
    search_in_path: bool = Field(default=False, description="Match against the full path")
    limit_results: bool = Field(default=False, description="Cap the number of results")
    num_results: int = Field(default=10000, description="Maximum number of results when limited")

    # Database settings
    locations: List[str] = Field(default_factory=list, description="Indexed filesystem locations")

    _released: bool = PrivateAttr(default=False)

    @field_validator("num_results")
    @classmethod
    def validate_num_results(cls, v: int) -> int:
        """Validate num_results fits an unsigned 32-bit integer."""
        if v < 0:
            raise ValueError("num_results must be non-negative")
        if v > UINT32_MAX:
            raise ValueError(f"num_results must not exceed {UINT32_MAX}")
        return v

    @property
    def released(self) -> bool:
        """Whether :meth:`release` has been called."""
        return self._released

    def release(self) -> None:
        """Drop the owned locations and mark the record as released.

        Raises:
            ConfigReleasedError: If the record was already released
        """
        if self._released:
            raise ConfigReleasedError("Configuration record was already released")
        self.locations.clear()
        self._released = True

    def ensure_usable(self) -> None:
        """Raise :class:`ConfigReleasedError` if the record was released."""
        if self._released:
            raise ConfigReleasedError("Configuration record was used after release")
