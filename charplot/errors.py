from __future__ import annotations


class PlotDataError(ValueError):
    """Base class for data problems detected while building a plot."""


class DomainError(PlotDataError):
    """A log-scaled axis received a non-positive value."""


class FrameSkipped(PlotDataError):
    """The frame has nothing drawable; callers skip it and keep going."""


class EmptyDatasetError(FrameSkipped):
    pass


class DegenerateRangeError(FrameSkipped):
    pass
