"""Exceptions raised by the dataset pipeline."""


class TwinPeaksDatasetError(Exception):
    """Base class for all pipeline errors."""


class InvalidIndex(TwinPeaksDatasetError):
    """An episode or season index has no corresponding page."""


class FetchError(TwinPeaksDatasetError):
    """A page could not be retrieved (network failure, bad status or timeout)."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class ExtractionMiss(TwinPeaksDatasetError):
    """A selector matched nothing where a value was expected."""

    def __init__(self, url: str, selector: str):
        self.url = url
        self.selector = selector
        super().__init__(f"No match for {selector!r} in {url}")


class AlignmentError(TwinPeaksDatasetError):
    """Titles, ratings and character lists cannot be joined by position."""

    def __init__(self, titles: int, ratings: int, characters: int):
        self.titles = titles
        self.ratings = ratings
        self.characters = characters
        super().__init__(
            f"Cannot align episodes: {titles} titles vs {ratings} ratings "
            f"vs {characters} character lists"
        )
