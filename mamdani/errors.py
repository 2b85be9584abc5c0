"""
Exceptions raised by the fuzzy inference engine.

All of them signal configuration or call-site mistakes, never transient
conditions, so callers are expected to fix the arguments rather than retry.
"""


class FuzzyError(ValueError):
    """Base class for every error raised by the engine."""


class DuplicateName(FuzzyError):
    """A fuzzy set with the same name is already owned by the variable."""


class DuplicateVariable(FuzzyError):
    """A variable with the same name is already registered in the system."""


class UnknownVariable(FuzzyError):
    """A rule or query references a variable that is not registered."""


class UnknownSet(FuzzyError):
    """A rule or query references a fuzzy set the variable does not own."""


class DegenerateSet(FuzzyError):
    """A diagonal set was given identical 'zero' and 'one' breakpoints."""


class InvalidParameters(FuzzyError):
    """Set breakpoints are not strictly increasing."""


class MissingInput(FuzzyError):
    """No crisp (or fuzzified) value was supplied for a registered variable."""


class UnknownOperator(FuzzyError):
    """Unsupported AND-operator or inference-method name."""


class FrozenSystemError(FuzzyError):
    """Configuration was attempted after the system or variable was frozen."""
