"""Symbol table holding the named values of a desk calculator session."""

import logging
from typing import Dict, Iterator, Mapping


class DeskCalcSymbolTable:
    """
    Maps names to numeric values for the lifetime of a session.

    Entries are created on first use.  Assignments update entries in place so new
    values are visible to every later statement in the same session.
    """

    def __init__(self, initial: Mapping[str, float] | None = None) -> None:
        """
        Initialize the symbol table.

        Args:
            initial: Optional name/value pairs to start with (e.g. predefined constants)
        """
        self._logger = logging.getLogger("DeskCalcSymbolTable")
        self._values: Dict[str, float] = {}
        if initial:
            for name, value in initial.items():
                self._values[name] = float(value)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __getitem__(self, name: str) -> float:
        return self._values[name]

    def get_or_create(self, name: str) -> float:
        """
        Look up a name, creating it with the value 0.0 if it has not been seen before.

        Args:
            name: Name to look up

        Returns:
            The value stored for the name
        """
        if name not in self._values:
            self._logger.debug("Creating symbol '%s'", name)
            self._values[name] = 0.0

        return self._values[name]

    def set(self, name: str, value: float) -> None:
        """
        Create or update the entry for a name.

        Args:
            name: Name to assign
            value: New value
        """
        self._logger.debug("Assigning %s = %r", name, value)
        self._values[name] = value

    def as_dict(self) -> Dict[str, float]:
        """Return a copy of the table's contents."""
        return dict(self._values)
