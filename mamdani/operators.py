"""
Fuzzy AND operators and the names of the supported inference methods.
"""

from enum import Enum
from typing import Iterable, Union

from mamdani.errors import UnknownOperator


class AndMethod(str, Enum):
    MIN = "min"
    PROD = "prod"


class InferenceMethod(str, Enum):
    FIRST_OF_MAXIMA = "first_of_maxima"
    LAST_OF_MAXIMA = "last_of_maxima"


def resolve_and_method(method: Union[str, AndMethod]) -> AndMethod:
    try:
        return AndMethod(method)
    except ValueError:
        raise UnknownOperator(
            f"Function '{method}' does not exist as an And Operator "
            f"(expected one of {[m.value for m in AndMethod]})"
        ) from None


def resolve_inference_method(method: Union[str, InferenceMethod]) -> InferenceMethod:
    try:
        return InferenceMethod(method)
    except ValueError:
        raise UnknownOperator(
            f"Inference method '{method}' is not supported "
            f"(expected one of {[m.value for m in InferenceMethod]})"
        ) from None


def and_operator(values: Iterable[float], method: Union[str, AndMethod] = AndMethod.MIN) -> float:
    """
    Combines antecedent degrees into a single firing strength.

    Args:
        values: Membership degrees of the antecedent terms.
        method: 'min' (pointwise minimum) or 'prod' (product).

    Returns:
        float: The combined degree. An empty list yields 0.0, not the
            operator's identity.
    """
    method = resolve_and_method(method)
    values = [float(v) for v in values]
    if not values:
        return 0.0

    if method is AndMethod.MIN:
        result = 1.0
        for v in values:
            if v < result:
                result = v
        return result

    result = 1.0
    for v in values:
        result *= v
    return result
