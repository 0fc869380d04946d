"""SeriesTrack - personal TV series tracker."""

__version__ = "0.1.0"
