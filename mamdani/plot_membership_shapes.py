"""
plot_membership_shapes.py
=========================

Visualize the membership curves of a FuzzyVariable.

Useful while authoring a rule set to confirm that neighbouring sets overlap
where intended and that the peak breakpoints sit at meaningful values.
Optionally overlays (x, y) points, e.g. crisp inputs against the degrees
they produced, or crisp outputs from a batch of queries.

Typical usage::

    from mamdani.plot_membership_shapes import plot_membership_functions

    plot_membership_functions(system.dependent_variables["SongRate"],
                              points=[(8.0, 0.5)], save=True, show=False)
"""
import os
import logging

import numpy as np
import matplotlib.pyplot as plt

plot_log = logging.getLogger("plot")


def sample_membership(variable, lo=None, hi=None, n=201):
    """
    Evaluate every set of a variable on an evenly spaced grid.

    Args:
        variable (FuzzyVariable): The variable to sample.
        lo, hi (float, optional): Grid range. Defaults to the span of all set
            breakpoints, padded by 10% on each side.
        n (int): Number of grid points.

    Returns:
        (np.ndarray, dict): The grid and set name -> membership array.
    """
    sets = variable.fuzzy_sets
    if lo is None or hi is None:
        if not sets:
            raise ValueError(f"Variable '{variable.name}' has no fuzzy sets to sample")
        bounds = [s.bounds() for s in sets.values()]
        b_lo = min(b[0] for b in bounds)
        b_hi = max(b[1] for b in bounds)
        pad = 0.1 * (b_hi - b_lo)
        lo = b_lo - pad if lo is None else lo
        hi = b_hi + pad if hi is None else hi

    xs = np.linspace(float(lo), float(hi), int(n))
    curves = {
        name: np.array([fuzzy_set.membership_function(float(x)) for x in xs])
        for name, fuzzy_set in sets.items()
    }
    return xs, curves


def plot_membership_functions(
    variable, points=None, save=False, output_dir="plots", show=True, n=401
):
    """
    Plot the membership functions of a variable.
    Optionally overlay points as red dots.
    Args:
        variable (FuzzyVariable): Variable whose sets are drawn
        points (list of (x, y)): Points to overlay (optional)
        save (bool): Whether to save the plot as a PNG
        output_dir (str): Directory to save the plot
        show (bool): Whether to open an interactive window
        n (int): Number of grid points per curve
    Returns:
        str or None: Path of the saved PNG when save is True.
    """
    xs, curves = sample_membership(variable, n=n)

    fig = plt.figure(figsize=(8, 4))
    for label, ys in curves.items():
        plt.plot(xs, ys, label=label)
        plt.fill_between(xs, ys, alpha=0.1)

    # Overlay points if given
    if points is not None and len(points) > 0:
        x, y = zip(*points)
        plot_log.debug("Overlay points: %d", len(x))
        plt.scatter(
            x,
            y,
            color="red",
            s=30,
            marker="o",
            edgecolors="black",
            linewidths=0.8,
            label="overlay",
            zorder=10,
        )

    plt.title(f"Membership Functions – {variable.name}")
    plt.xlabel(variable.name)
    plt.ylabel("Membership Degree")
    plt.ylim(-0.05, 1.05)
    plt.grid(True)
    plt.legend()
    plt.tight_layout()

    filename = None
    if save:
        os.makedirs(output_dir, exist_ok=True)
        filename = os.path.join(output_dir, f"{variable.name.lower()}_membership_functions.png")
        plt.savefig(filename)
        plot_log.info("Saved plot to: %s", filename)

    if show:
        plt.show()
    else:
        plt.close(fig)
    return filename
