"""
Plotting utilities for potential landscapes and characteristic curves.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .potential_grid import PotentialGrid


def plot_potential_landscape(grid: PotentialGrid,
                             output_path: Path,
                             marker_size: float = 2.0,
                             cmap: str = "viridis",
                             figsize: tuple = (8, 8),
                             dpi: int = 150) -> Path:
    """
    Plot the grid points in 3D, colored by the probe energy.

    Args:
        grid: Computed potential grid
        output_path: Path to save the plot
        marker_size: Scatter marker size
        cmap: Matplotlib colormap name
        figsize: Figure size tuple
        dpi: Resolution for saved figure

    Returns:
        Path to saved plot file
    """
    output_path = Path(output_path)
    x, y, z, energy = grid.flattened()

    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(projection='3d')

    points = ax.scatter(x, y, z, c=energy, s=marker_size, cmap=cmap, depthshade=False)
    fig.colorbar(points, ax=ax, shrink=0.6, label="Potential [kJ/mol]")

    ax.set_xlabel(r"X [$\AA$]")
    ax.set_ylabel(r"Y [$\AA$]")
    ax.set_zlabel(r"Z [$\AA$]")
    ax.set_box_aspect(tuple(float(np.ptp(axis)) or 1.0 for axis in (x, y, z)))

    # Look down the c axis
    ax.view_init(elev=90, azim=-90)

    plt.savefig(output_path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)

    return output_path


def plot_characteristic_curve(curve: pd.DataFrame,
                              output_path: Path,
                              show_grid: bool = False,
                              figsize: tuple = (8, 5),
                              dpi: int = 300) -> Path:
    """
    Plot accessible volume against adsorption potential.

    Args:
        curve: DataFrame with ``potential_kj_mol`` and ``volume_ml_g`` columns
        output_path: Path to save the plot
        show_grid: Whether to show grid lines
        figsize: Figure size tuple
        dpi: Resolution for saved figure

    Returns:
        Path to saved plot file
    """
    output_path = Path(output_path)

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(curve["potential_kj_mol"], curve["volume_ml_g"], 'o-', linewidth=2, markersize=4)

    ax.set_xlabel("Potential [kJ/mol]")
    ax.set_ylabel("Volume [ml/g]")

    # Remove top and right spines for cleaner look
    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)
    ax.spines['left'].set_linewidth(1.2)
    ax.spines['bottom'].set_linewidth(1.2)

    if show_grid:
        ax.grid(True, alpha=0.3, linestyle='--', linewidth=0.5)

    ax.set_xlim(left=0)
    ax.set_ylim(bottom=0)
    ax.tick_params(axis='both', which='major', labelsize=11, width=1.2)

    plt.tight_layout()
    plt.savefig(output_path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)

    return output_path
