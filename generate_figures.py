"""
Generate figures from a dining actors simulation run.
Reads the JSON written by run_simulation.py.

Generates:
- Figure 1: Turns per phase for each actor
- Figure 2: Average phase duration for each actor
"""
import json
import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
from matplotlib import rcParams

rcParams['font.family'] = 'serif'
rcParams['font.size'] = 10
rcParams['axes.labelsize'] = 10
rcParams['axes.titlesize'] = 11
rcParams['xtick.labelsize'] = 9
rcParams['ytick.labelsize'] = 9
rcParams['legend.fontsize'] = 9

PHASES = ['thinking', 'hungry', 'eating']
COLORS = {'thinking': '#1976D2', 'hungry': '#C62828', 'eating': '#2E7D32'}


def load_stats(results_path):
    with open(results_path) as f:
        return json.load(f)['stats']


def figure1_turns(stats, output_dir):
    """Figure 1: Turns per phase for each actor"""
    fig, ax = plt.subplots(figsize=(7, 4))

    actors = [s['actor_id'] for s in stats]
    x = np.arange(len(actors))
    width = 0.25

    for i, phase in enumerate(PHASES):
        turns = [s[f'{phase}_turns'] for s in stats]
        ax.bar(x + (i - 1) * width, turns, width, label=phase.capitalize(),
               color=COLORS[phase], alpha=0.8)

    ax.set_xlabel('Actor')
    ax.set_ylabel('Turns')
    ax.set_title('Turns per Phase')
    ax.set_xticks(x)
    ax.set_xticklabels([str(a) for a in actors])
    ax.legend(loc='upper right')
    ax.grid(True, alpha=0.3, linestyle='--', axis='y')

    plt.tight_layout()
    path = Path(output_dir) / 'fig1_turns.png'
    plt.savefig(path, dpi=300, bbox_inches='tight')
    plt.close()
    return path


def figure2_average_times(stats, output_dir):
    """Figure 2: Average phase duration for each actor"""
    fig, ax = plt.subplots(figsize=(7, 4))

    actors = [s['actor_id'] for s in stats]
    x = np.arange(len(actors))
    width = 0.25

    for i, phase in enumerate(PHASES):
        # Undefined averages (no turns) are drawn as empty bars
        averages = [(s[f'average_{phase}_time'] or 0.0) * 1000 for s in stats]
        ax.bar(x + (i - 1) * width, averages, width, label=phase.capitalize(),
               color=COLORS[phase], alpha=0.8)

    ax.set_xlabel('Actor')
    ax.set_ylabel('Average duration (ms)')
    ax.set_title('Average Time per Phase')
    ax.set_xticks(x)
    ax.set_xticklabels([str(a) for a in actors])
    ax.legend(loc='upper right')
    ax.grid(True, alpha=0.3, linestyle='--', axis='y')

    plt.tight_layout()
    path = Path(output_dir) / 'fig2_average_times.png'
    plt.savefig(path, dpi=300, bbox_inches='tight')
    plt.close()
    return path


def generate_all_figures(results_path='results/ring_results.json', output_dir='figures'):
    """Generate both figures"""
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    stats = load_stats(results_path)

    paths = [
        figure1_turns(stats, output_dir),
        figure2_average_times(stats, output_dir),
    ]
    for path in paths:
        print(f"✓ Saved {path}")
    return paths


if __name__ == "__main__":
    results_path = sys.argv[1] if len(sys.argv) > 1 else 'results/ring_results.json'
    output_dir = sys.argv[2] if len(sys.argv) > 2 else 'figures'
    generate_all_figures(results_path, output_dir)
