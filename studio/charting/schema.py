"""Schema types for declarative chart type definitions.

Every chart the studio offers is described by one immutable
`ChartTypeDefinition`: default configuration, form controls, synthetic data
and a code generator. Views and the preview model only ever talk to this
shape, so adding a chart never touches them.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Union

from .controls import Control

ChartTypeId = Literal[
    "vertical-bar",
    "horizontal-bar",
    "stacked-bar",
    "grouped-bar",
    "scatter-plot",
    "line-chart",
    "box-plot",
    "histogram",
]

ChartCategory = Literal["bar", "scatter", "line", "distribution", "histogram"]

OutputFormat = Literal["general", "statistical"]

ConfigValue = Union[bool, int, float, str]
Config = Mapping[str, ConfigValue]


@dataclass(frozen=True, slots=True)
class CategoryValues:
    """One value per category (simple bar charts)."""

    labels: tuple[str, ...]
    values: tuple[float, ...]


@dataclass(frozen=True, slots=True)
class Series:
    """A named run of values aligned to a shared axis or category list."""

    name: str
    values: tuple[float, ...]


@dataclass(frozen=True, slots=True)
class SeriesTable:
    """Several series sharing one category (or x) axis.

    Args:
        axis: Category labels (bars) or numeric x positions (lines).
        series: Series aligned index-by-index with `axis`.
    """

    axis: tuple[str | float, ...]
    series: tuple[Series, ...]


@dataclass(frozen=True, slots=True)
class PointGroup:
    """A named cloud of (x, y) points."""

    name: str
    x: tuple[float, ...]
    y: tuple[float, ...]


@dataclass(frozen=True, slots=True)
class PointGroups:
    """Scatter plot data grouped by category."""

    groups: tuple[PointGroup, ...]


@dataclass(frozen=True, slots=True)
class Distributions:
    """Raw samples per category (box plots)."""

    groups: tuple[Series, ...]


@dataclass(frozen=True, slots=True)
class Samples:
    """A flat list of observations (histograms)."""

    values: tuple[float, ...]


Dataset = Union[CategoryValues, SeriesTable, PointGroups, Distributions, Samples]


@dataclass(frozen=True, slots=True)
class ChartTypeDefinition:
    """Declarative definition of one chart type.

    Args:
        id: Stable, unique identifier used by the selection flow.
        name: Display name.
        category: Chart family; decides which preview builder applies.
        description: One-line summary for the chart picker.
        default_config: Read-only default configuration.
        controls: Form controls in display order.
        dataset: Builds the synthetic data for a configuration (arity fields
            such as `numSeries` change its shape).
        generate_code: Pure configuration → script text generator.
    """

    id: ChartTypeId
    name: str
    category: ChartCategory
    description: str
    default_config: Mapping[str, ConfigValue]
    controls: tuple[Control, ...]
    dataset: Callable[[Config], Dataset]
    generate_code: Callable[[Config], str]

    def defaults(self) -> dict[str, ConfigValue]:
        """Return a fresh, mutable copy of the default configuration."""

        return dict(self.default_config)

    @property
    def sample_data(self) -> Dataset:
        """Synthetic data for the default configuration."""

        return self.dataset(self.default_config)

    @property
    def supports_output_format(self) -> bool:
        """Whether the chart offers both code styles."""

        return "outputFormat" in self.default_config


def frozen_config(values: Mapping[str, ConfigValue]) -> Mapping[str, ConfigValue]:
    """Return a read-only copy of a configuration mapping."""

    return MappingProxyType(dict(values))


def output_format(config: Config) -> OutputFormat:
    """Return the requested code style; anything but "statistical" is general."""

    return "statistical" if config.get("outputFormat") == "statistical" else "general"
