"""Error types raised by series, indicators and rules."""


class ConfigurationError(ValueError):
    """Invalid construction arguments or configuration values."""


class IndexRangeError(IndexError):
    """Bar index outside the series' retained range."""

    def __init__(self, index: int, begin_index: int, end_index: int):
        self.index = index
        self.begin_index = begin_index
        self.end_index = end_index
        super().__init__(
            f"Index {index} outside retained range [{begin_index}, {end_index}]"
        )
