__all__ = ["CityMapError", "DataLoadError"]


class CityMapError(Exception):
    """Base class for errors raised by citymap."""


class DataLoadError(CityMapError):
    """The data store could not supply a complete node or edge set."""
