"""
Declarative Mamdani rules.

A rule is an implicit AND over its antecedent (variable, set) terms, a single
consequent (variable, set) target and a weight applied to the firing
strength. Rules are not checked against any variables here; the owning
FuzzySystem validates them on registration.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class Rule:
    """
    Attributes:
        antecedents (Mapping[str, str]): Input variable name -> set name.
        consequent (Tuple[str, str]): (output variable name, set name).
        weight (float): Multiplier on the firing strength. Not range-checked.
    """

    antecedents: Mapping[str, str] = field(hash=False)
    consequent: Tuple[str, str]
    weight: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "antecedents", MappingProxyType(dict(self.antecedents)))
        variable, set_name = self.consequent
        object.__setattr__(self, "consequent", (variable, set_name))
        object.__setattr__(self, "weight", float(self.weight))

    @property
    def consequent_variable(self) -> str:
        return self.consequent[0]

    @property
    def consequent_set(self) -> str:
        return self.consequent[1]

    def __str__(self) -> str:
        conditions = " AND ".join(f"{v} is {s}" for v, s in self.antecedents.items())
        text = f"IF {conditions} THEN {self.consequent[0]} is {self.consequent[1]}"
        if self.weight != 1.0:
            text += f" (weight={self.weight:g})"
        return text
