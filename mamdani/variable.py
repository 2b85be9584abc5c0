"""
Linguistic variables: a named collection of fuzzy sets.

A variable fuzzifies a crisp value into its membership degree across every
set it owns (e.g. 'VoiceRate' = 8 -> {'Bad': 0.0, 'Medium': 0.0, 'Good': 0.5}).
"""

import logging
from types import MappingProxyType
from typing import Dict, Mapping

from mamdani.errors import DuplicateName, FrozenSystemError, UnknownSet
from mamdani.fuzzy_sets import FuzzySet

variable_log = logging.getLogger("fuzzy_variable")


class FuzzyVariable:
    """
    A named variable owning one or more fuzzy sets.

    Attributes:
        name (str): Variable name, unique within its owning system.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._fuzzy_sets: Dict[str, FuzzySet] = {}
        self._frozen = False

    def __repr__(self) -> str:
        return f"FuzzyVariable({self.name!r}, sets={list(self._fuzzy_sets)})"

    def __contains__(self, set_name: str) -> bool:
        return set_name in self._fuzzy_sets

    @property
    def fuzzy_sets(self) -> Mapping[str, FuzzySet]:
        """Read-only view of the owned sets, in insertion order."""
        return MappingProxyType(self._fuzzy_sets)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def fuzzy_set_exists(self, set_name: str) -> bool:
        return set_name in self._fuzzy_sets

    def add_fuzzy_set(self, fuzzy_set: FuzzySet) -> None:
        """
        Adds a fuzzy set to this variable.

        Raises:
            DuplicateName: A set with the same name was already added.
            FrozenSystemError: The variable has been frozen.
        """
        if self._frozen:
            raise FrozenSystemError(
                f"FuzzyVariable '{self.name}' is frozen; cannot add '{fuzzy_set.name}'"
            )
        if fuzzy_set.name in self._fuzzy_sets:
            raise DuplicateName(
                f"FuzzySet '{fuzzy_set.name}' already added to '{self.name}'"
            )
        self._fuzzy_sets[fuzzy_set.name] = fuzzy_set
        variable_log.debug("Added set %r to variable '%s'", fuzzy_set, self.name)

    def fuzzification(self, value: float) -> Dict[str, float]:
        """
        Evaluates every owned set at a crisp value.

        Args:
            value (float): The crisp input value.

        Returns:
            Dict[str, float]: Set name -> membership degree. Zero degrees are
                kept so the vector always has one entry per set.
        """
        degrees = {
            set_name: fuzzy_set.membership_function(value)
            for set_name, fuzzy_set in self._fuzzy_sets.items()
        }
        variable_log.debug(
            "Fuzzified %s= %.3f -> %s",
            self.name,
            value,
            degrees,
        )
        return degrees

    def _get(self, set_name: str) -> FuzzySet:
        try:
            return self._fuzzy_sets[set_name]
        except KeyError:
            raise UnknownSet(
                f"FuzzyVariable '{self.name}' does not contain a fuzzy set named '{set_name}'"
            ) from None

    def first_intersection(self, set_name: str, mu: float) -> float:
        return self._get(set_name).first_intersection(mu)

    def last_intersection(self, set_name: str, mu: float) -> float:
        return self._get(set_name).last_intersection(mu)
