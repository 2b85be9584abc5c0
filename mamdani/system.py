"""
Orchestrates the Mamdani fuzzy inference pipeline.

A FuzzySystem holds the registries of independent (input) and dependent
(output) variables plus, per output variable, the ordered list of rules that
target it. Configuration calls validate every cross-reference; query calls
run crisp inputs through three stages:

    fuzzify         crisp value -> membership degree of every input set
    apply_operator  per rule: AND over antecedent degrees, times the weight
    infer           per output: winning set -> crisp value via its falling edge

The stages are public so a host can inspect intermediate values without
re-running the whole pipeline. Queries never mutate the system, and after
freeze() no configuration call is accepted, so a frozen system can be queried
from several threads at once.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from mamdani.errors import (
    DuplicateVariable,
    FrozenSystemError,
    MissingInput,
    UnknownSet,
    UnknownVariable,
)
from mamdani.operators import (
    AndMethod,
    InferenceMethod,
    and_operator,
    resolve_and_method,
    resolve_inference_method,
)
from mamdani.profiler import CodeProfiler
from mamdani.rule import Rule
from mamdani.settings import EngineSettings
from mamdani.variable import FuzzyVariable

system_log = logging.getLogger("fuzzy_system")
inference_log = logging.getLogger("inference")

FuzzyInputs = Dict[str, Dict[str, float]]
RuleOutputs = Dict[str, List[Tuple[str, float]]]


def antecedent_degree(
    fuzzy_inputs: Mapping[str, Mapping[str, float]], variable: str, set_name: str
) -> float:
    """Degree of one (variable, set) term; MissingInput if it was not fuzzified."""
    try:
        return float(fuzzy_inputs[variable][set_name])
    except KeyError:
        raise MissingInput(
            f"Fuzzy inputs do not contain a degree for '{variable}' is '{set_name}'"
        ) from None


class FuzzySystem:
    """
    Registries of fuzzy variables and rules, and the query pipeline over them.

    Attributes:
        name (str): The system name, used in log and error messages.
        settings (EngineSettings): Default operators and profiling options.
    """

    def __init__(self, name: str, settings: Optional[EngineSettings] = None) -> None:
        """
        Args:
            name (str): The system name.
            settings (EngineSettings, optional): Defaults for the query calls.
                Falls back to 'min' and 'last_of_maxima' with profiling off.
        """
        self.name = name
        self.settings = settings or EngineSettings()
        self._independent: Dict[str, FuzzyVariable] = {}
        self._dependent: Dict[str, FuzzyVariable] = {}
        self._rules: Dict[str, List[Rule]] = {}
        self._frozen = False
        system_log.info("FuzzySystem '%s' created.", name)

    def __repr__(self) -> str:
        return (
            f"FuzzySystem({self.name!r}, inputs={list(self._independent)}, "
            f"outputs={list(self._dependent)}, rules={sum(len(r) for r in self._rules.values())})"
        )

    # ---------- read-only views ----------

    @property
    def independent_variables(self) -> Mapping[str, FuzzyVariable]:
        return MappingProxyType(self._independent)

    @property
    def dependent_variables(self) -> Mapping[str, FuzzyVariable]:
        return MappingProxyType(self._dependent)

    @property
    def rules(self) -> Mapping[str, Tuple[Rule, ...]]:
        """Output variable name -> its rules in registration order."""
        return MappingProxyType({k: tuple(v) for k, v in self._rules.items()})

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # ---------- configuration ----------

    def _check_not_frozen(self, what: str) -> None:
        if self._frozen:
            raise FrozenSystemError(f"FuzzySystem '{self.name}' is frozen; cannot {what}")

    def add_independent_variable(self, variable: FuzzyVariable) -> None:
        """
        Registers an input variable.

        Raises:
            DuplicateVariable: An input variable with that name already exists.
        """
        self._check_not_frozen(f"add independent variable '{variable.name}'")
        if variable.name in self._independent:
            raise DuplicateVariable(
                f"Independent FuzzyVariable '{variable.name}' already added to '{self.name}'"
            )
        self._independent[variable.name] = variable
        system_log.info(
            "Independent variable '%s' added with %d sets.",
            variable.name,
            len(variable.fuzzy_sets),
        )

    def add_dependent_variable(self, variable: FuzzyVariable) -> None:
        """
        Registers an output variable and starts its (empty) rule list.

        Raises:
            DuplicateVariable: An output variable with that name already exists.
        """
        self._check_not_frozen(f"add dependent variable '{variable.name}'")
        if variable.name in self._dependent:
            raise DuplicateVariable(
                f"Dependent FuzzyVariable '{variable.name}' already added to '{self.name}'"
            )
        self._dependent[variable.name] = variable
        self._rules[variable.name] = []
        system_log.info(
            "Dependent variable '%s' added with %d sets.",
            variable.name,
            len(variable.fuzzy_sets),
        )

    def add_rule(self, rule: Rule) -> None:
        """
        Validates a rule against the registries and appends it to the rule
        list of its consequent variable.

        Raises:
            UnknownVariable: The consequent variable is not a dependent
                variable, or an antecedent variable is not an independent one.
            UnknownSet: A referenced set does not exist on its variable.
        """
        self._check_not_frozen(f"add rule '{rule}'")
        out_name, out_set = rule.consequent
        if out_name not in self._dependent:
            raise UnknownVariable(
                f"FuzzySystem '{self.name}' does not contain a dependent "
                f"FuzzyVariable named '{out_name}'"
            )
        if not self._dependent[out_name].fuzzy_set_exists(out_set):
            raise UnknownSet(
                f"Dependent FuzzyVariable '{out_name}' does not contain a "
                f"fuzzy set named '{out_set}'"
            )
        for in_name, in_set in rule.antecedents.items():
            if in_name not in self._independent:
                raise UnknownVariable(
                    f"FuzzySystem '{self.name}' does not contain an independent "
                    f"FuzzyVariable named '{in_name}'"
                )
            if not self._independent[in_name].fuzzy_set_exists(in_set):
                raise UnknownSet(
                    f"Independent FuzzyVariable '{in_name}' does not contain a "
                    f"fuzzy set named '{in_set}'"
                )
        self._rules[out_name].append(rule)
        system_log.info("Rule #%d for '%s': %s", len(self._rules[out_name]) - 1, out_name, rule)

    def create_rule(
        self,
        antecedents: Mapping[str, str],
        consequent: Tuple[str, str],
        weight: float = 1.0,
    ) -> Rule:
        """Builds a Rule, registers it via add_rule() and returns it."""
        rule = Rule(antecedents, consequent, weight)
        self.add_rule(rule)
        return rule

    def freeze(self) -> None:
        """
        Ends the configuration phase. Variables and rule lists become
        immutable and further add_* calls raise FrozenSystemError.
        """
        if self._frozen:
            return
        for variable in list(self._independent.values()) + list(self._dependent.values()):
            variable.freeze()
        self._frozen = True
        system_log.info(
            "FuzzySystem '%s' frozen (%d inputs, %d outputs, %d rules).",
            self.name,
            len(self._independent),
            len(self._dependent),
            sum(len(r) for r in self._rules.values()),
        )

    # ---------- query pipeline ----------

    def fuzzify(self, crisp_inputs: Mapping[str, float]) -> FuzzyInputs:
        """
        Fuzzifies one crisp value per independent variable.

        Args:
            crisp_inputs (Mapping[str, float]): Variable name -> crisp value.
                Extra keys are ignored.

        Returns:
            FuzzyInputs: Variable name -> (set name -> membership degree).

        Raises:
            MissingInput: A registered independent variable has no value.
        """
        fuzzy_inputs: FuzzyInputs = {}
        for name, variable in self._independent.items():
            if name not in crisp_inputs:
                raise MissingInput(
                    f"Inputs do not contain a value for FuzzyVariable '{name}'"
                )
            fuzzy_inputs[name] = variable.fuzzification(float(crisp_inputs[name]))
        return fuzzy_inputs

    def apply_operator(
        self,
        fuzzy_inputs: Mapping[str, Mapping[str, float]],
        and_method: Union[str, AndMethod, None] = None,
    ) -> RuleOutputs:
        """
        Evaluates every rule's antecedents and groups the results by output.

        For each rule the antecedent degrees are combined with the AND
        operator and multiplied by the rule weight (the implication step).
        Results keep registration order and are not merged by set name.

        Args:
            fuzzy_inputs: Output of fuzzify().
            and_method: 'min' or 'prod'. Defaults to settings.and_method.

        Returns:
            RuleOutputs: Output variable name -> [(consequent set, degree), ...].

        Raises:
            UnknownOperator: and_method is not supported.
            MissingInput: fuzzy_inputs lacks a degree a rule needs.
        """
        method = resolve_and_method(
            self.settings.and_method if and_method is None else and_method
        )
        rule_outputs: RuleOutputs = {}
        for out_name in self._dependent:
            results: List[Tuple[str, float]] = []
            for i, rule in enumerate(self._rules[out_name]):
                degrees = [
                    antecedent_degree(fuzzy_inputs, in_name, in_set)
                    for in_name, in_set in rule.antecedents.items()
                ]
                strength = and_operator(degrees, method) * rule.weight
                results.append((rule.consequent_set, strength))
                inference_log.debug(
                    "Rule# %d (%s) degrees=%s %s-> W= %.3f",
                    i,
                    rule,
                    degrees,
                    method.value,
                    strength,
                )
            rule_outputs[out_name] = results
        return rule_outputs

    def infer(
        self,
        rule_outputs: Mapping[str, Sequence[Tuple[str, float]]],
        method: Union[str, InferenceMethod, None] = None,
    ) -> Dict[str, float]:
        """
        Defuzzifies each output variable by maximum membership.

        The set with the highest degree wins and its last (falling-edge)
        intersection at that degree becomes the crisp output. Ties at a
        positive degree go to the candidate with the larger intersection.
        'first_of_maxima' and 'last_of_maxima' currently resolve identically.

        Args:
            rule_outputs: Output of apply_operator().
            method: 'first_of_maxima' or 'last_of_maxima'. Defaults to
                settings.inference_method.

        Returns:
            Dict[str, float]: Output variable name -> crisp value. Variables
                with no firing rule get 0.0.

        Raises:
            UnknownOperator: method is not supported.
        """
        method = resolve_inference_method(
            self.settings.inference_method if method is None else method
        )
        crisp_outputs: Dict[str, float] = {}
        for out_name, variable in self._dependent.items():
            outputs = rule_outputs.get(out_name, [])
            best_set = ""
            best_mu = 0.0
            best_x = 0.0
            for set_name, mu in outputs:
                if best_mu < mu:
                    best_set, best_mu = set_name, mu
                    best_x = variable.last_intersection(set_name, mu)
                elif best_mu == mu and mu > 0:
                    candidate = variable.last_intersection(set_name, mu)
                    if best_x < candidate:
                        best_set, best_x = set_name, candidate

            if not outputs:
                inference_log.warning("No rules for '%s'. Outputting 0.", out_name)
            elif best_mu <= 0:
                inference_log.debug("No active rules for '%s'. Outputting 0.", out_name)
            else:
                inference_log.debug(
                    "%s: winner=%s mu= %.3f -> %.4f (%s)",
                    out_name,
                    best_set,
                    best_mu,
                    best_x,
                    method.value,
                )
            crisp_outputs[out_name] = best_x
        return crisp_outputs

    def run(
        self,
        crisp_inputs: Mapping[str, float],
        and_method: Union[str, AndMethod, None] = None,
        inference_method: Union[str, InferenceMethod, None] = None,
    ) -> Dict[str, float]:
        """
        Executes one full inference cycle: fuzzify -> apply_operator -> infer.

        Args:
            crisp_inputs (Mapping[str, float]): Input variable name -> value.
            and_method: AND operator; defaults to settings.and_method.
            inference_method: Defuzzification; defaults to settings.inference_method.

        Returns:
            Dict[str, float]: Output variable name -> crisp value.
        """
        if not self.settings.profile:
            return self._run(crisp_inputs, and_method, inference_method)
        with CodeProfiler(f"{self.name} run", budget_ms=self.settings.latency_budget_ms):
            return self._run(crisp_inputs, and_method, inference_method)

    def _run(self, crisp_inputs, and_method, inference_method) -> Dict[str, float]:
        # reject bad method names before doing any work
        and_method = resolve_and_method(
            self.settings.and_method if and_method is None else and_method
        )
        inference_method = resolve_inference_method(
            self.settings.inference_method if inference_method is None else inference_method
        )
        system_log.debug("--- %s cycle start (inputs= %s) ---", self.name, dict(crisp_inputs))
        fuzzy_inputs = self.fuzzify(crisp_inputs)
        rule_outputs = self.apply_operator(fuzzy_inputs, and_method)
        crisp_outputs = self.infer(rule_outputs, inference_method)
        system_log.debug("--- %s cycle end (outputs= %s) ---", self.name, crisp_outputs)
        return crisp_outputs


def new_system(name: str, settings: Optional[EngineSettings] = None) -> FuzzySystem:
    return FuzzySystem(name, settings)
