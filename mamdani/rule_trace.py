# rule_trace.py

from typing import List, Dict, Any, Optional
import logging

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from mamdani.operators import and_operator, resolve_and_method
from mamdani.system import antecedent_degree

plot_log = logging.getLogger("plot")


def trace_rule_firing(
    system,
    fuzzy_inputs: Dict[str, Dict[str, float]],
    and_method: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Evaluate each rule and return detailed trace information per rule,
    including antecedent degrees, firing strength, and weighted output.

    Args:
        system: The FuzzySystem whose rules are traced.
        fuzzy_inputs: Output of system.fuzzify().
        and_method: AND operator used to combine antecedent degrees.
            Defaults to system.settings.and_method, as in apply_operator().

    Raises:
        MissingInput: fuzzy_inputs lacks a degree a rule needs.

    Returns:
        A list of dictionaries with detailed rule evaluation traces, grouped
        by output variable in registration order.
    """
    method = resolve_and_method(
        system.settings.and_method if and_method is None else and_method
    )
    traces = []
    for output, rules in system.rules.items():
        for i, rule in enumerate(rules):
            degrees = {
                name: antecedent_degree(fuzzy_inputs, name, set_name)
                for name, set_name in rule.antecedents.items()
            }
            firing_strength = and_operator(degrees.values(), method)
            traces.append(
                {
                    "output": output,
                    "rule_index": i,
                    "rule": str(rule),
                    "consequent_set": rule.consequent_set,
                    "degrees": degrees,
                    "firing_strength": firing_strength,
                    "weight": rule.weight,
                    "w": firing_strength * rule.weight,
                }
            )
    return traces


def plot_rule_contributions(trace_data, save_path=None, show=True):
    """
    Bar chart of the weighted output W of every traced rule, coloured by the
    output variable the rule targets.

    Returns:
        The matplotlib Figure.
    """
    labels = [f"{t['output']}#{t['rule_index']} → {t['consequent_set']}" for t in trace_data]
    ws = [t["w"] for t in trace_data]

    outputs = sorted({t["output"] for t in trace_data})
    palette = plt.get_cmap("tab10")
    color_of = {name: palette(i % 10) for i, name in enumerate(outputs)}
    colors = [color_of[t["output"]] for t in trace_data]

    fig, ax1 = plt.subplots(figsize=(12, 6))

    bars = ax1.bar(range(len(labels)), ws, color=colors, alpha=0.7)

    ax1.set_ylabel("Weighted firing strength (W)")
    ax1.set_xticks(range(len(labels)))
    ax1.set_xticklabels(labels, rotation=45, ha="right")

    # Annotate W values on top of bars
    for bar in bars:
        height = bar.get_height()
        if height > 0:
            ax1.text(
                bar.get_x() + bar.get_width() / 2,
                height + 0.01,
                f"{height:.2f}",
                ha="center",
                va="bottom",
                fontsize=8,
                color="black",
            )

    # Legend
    handles = [mpatches.Patch(color=color_of[name], label=name) for name in outputs]
    if handles:
        ax1.legend(handles=handles, loc="upper left")

    ax1.set_title("Rule Contributions: Weighted Firing Strength")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path)
        plot_log.info("Saved plot to: %s", save_path)
    if show:
        plt.show()
    return fig
