"""Reader settings shared by key/value sources and the XML reader."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LIST_DELIMITER = ","


@dataclass
class ReaderSettings:
    """Configuration for how raw property values are interpreted.

    Args:
        list_delimiter: Character separating the elements of a multi-valued
            property (``"a, b"`` becomes ``["a", "b"]``).
        delimiter_parsing_disabled: When True, values are returned exactly as
            stored and never split into lists.
        trim_values: Strip surrounding whitespace from split list elements and
            from XML element text.
    """

    list_delimiter: str = DEFAULT_LIST_DELIMITER
    delimiter_parsing_disabled: bool = False
    trim_values: bool = True

    def __post_init__(self) -> None:
        if len(self.list_delimiter) != 1:
            raise ValueError(
                f"List delimiter must be a single character, got {self.list_delimiter!r}"
            )
