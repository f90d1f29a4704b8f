"""
Balanced Tree Demo -- scripted insertion session, rotation case walkthrough,
traversal orders, and height growth against the AVL bound.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional, TextIO, Tuple

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

sys.path.insert(0, str(Path(__file__).resolve().parent))
from balanced_tree import BalancedTree

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

COLORS = {
    "blue": "#3498db",
    "red": "#e74c3c",
    "orange": "#f39c12",
    "green": "#27ae60",
    "purple": "#9b59b6",
    "dark": "#2c3e50",
}

SESSION_BATCHES = [[1, 2], [3, 4], [5, 6, 7, 8, 9]]

ROTATION_CASES = [
    ("Left-Left", [3, 2, 1]),
    ("Right-Right", [1, 2, 3]),
    ("Left-Right", [3, 1, 2]),
    ("Right-Left", [1, 3, 2]),
]

GROWTH_SIZES = np.unique(np.logspace(0, 4, 30).astype(int))


def avl_height_bound(n):
    """Worst-case AVL height for n keys: 1.44 * log2(n + 2) - 0.328."""
    return 1.44 * np.log2(np.asarray(n) + 2) - 0.328


def scripted_session(out: Optional[TextIO] = None) -> BalancedTree:
    """Insert 1..9 in three batches, displaying the tree after each batch."""
    if out is None:
        out = sys.stdout
    tree = BalancedTree()
    for batch in SESSION_BATCHES:
        for key in batch:
            tree.insert(key)
        out.write(f"After inserting {batch}:\n")
        tree.display(out)
    return tree


def tree_layout(tree: BalancedTree) -> Tuple[Dict[int, Tuple[int, int]], List[Tuple[int, int]]]:
    """Plot coordinates for every key (in-order rank, -depth) and parent/child edges."""
    rank = {key: i for i, key in enumerate(tree.in_order())}
    depth: Dict[int, int] = {}
    edges: List[Tuple[int, int]] = []
    for key in tree.pre_order():
        parent = tree.parent_of(key)
        if parent is None:
            depth[key] = 0
        else:
            depth[key] = depth[parent] + 1
            edges.append((parent, key))
    positions = {key: (rank[key], -depth[key]) for key in rank}
    return positions, edges


def draw_tree(ax, tree: BalancedTree, title: str) -> None:
    positions, edges = tree_layout(tree)
    for parent, child in edges:
        (x0, y0), (x1, y1) = positions[parent], positions[child]
        ax.plot([x0, x1], [y0, y1], color=COLORS["dark"], linewidth=1.5, zorder=1)
    for key, (x, y) in positions.items():
        entry = tree.search(key)
        ax.scatter(x, y, s=700, color=COLORS["blue"], edgecolor="white", zorder=2)
        ax.text(x, y, str(key), ha="center", va="center", color="white",
                fontsize=11, fontweight="bold", zorder=3)
        ax.text(x, y - 0.28, f"h={entry.height}", ha="center", va="top",
                fontsize=8, color="gray")
    ax.set_title(title, fontsize=10, fontweight="bold")
    ax.set_xlim(-1, max(len(positions), 1))
    ax.set_ylim(-(tree.height() + 1), 0.6)
    ax.axis("off")


# ---------------------------------------------------------------------------
# Example 1: Scripted insertion session
# ---------------------------------------------------------------------------
def example_1_scripted_session():
    """Replay the classic 1..9 session and show each intermediate shape."""
    print("=" * 60)
    print("Example 1: Scripted Insertion Session")
    print("=" * 60)

    tree = scripted_session()

    print(f"\n  In-order:   {tree.in_order()}")
    print(f"  Pre-order:  {tree.pre_order()}")
    print(f"  Post-order: {tree.post_order()}")
    print(f"  {tree}  rotations={tree.rotation_counts()}")
    assert tree.is_valid(), "AVL invariants violated"

    fig, axes = plt.subplots(1, len(SESSION_BATCHES), figsize=(16, 5))
    snapshot = BalancedTree()
    inserted: List[int] = []
    for ax, batch in zip(axes, SESSION_BATCHES):
        for key in batch:
            snapshot.insert(key)
        inserted.extend(batch)
        draw_tree(ax, snapshot, f"After inserting {inserted[0]}..{inserted[-1]}")
    fig.suptitle("Sorted insertion stays balanced", fontsize=13, fontweight="bold")
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_scripted_session.png", dpi=150)
    plt.close(fig)

    return fig, tree


# ---------------------------------------------------------------------------
# Example 2: The four rotation cases
# ---------------------------------------------------------------------------
def example_2_rotation_cases():
    """Each three-key insertion order resolves to the same balanced shape."""
    print("\n" + "=" * 60)
    print("Example 2: Rotation Cases")
    print("=" * 60)

    fig, axes = plt.subplots(1, len(ROTATION_CASES), figsize=(16, 4))
    results = []
    for ax, (name, keys) in zip(axes, ROTATION_CASES):
        tree = BalancedTree()
        for key in keys:
            tree.insert(key)
        counts = tree.rotation_counts()
        results.append((name, keys, counts, tree.pre_order()))

        print(f"\n  {name}: insert {keys}")
        print(f"    Rotations: left={counts['left']}, right={counts['right']}")
        print(f"    Pre-order: {tree.pre_order()}")
        for line in tree.render().splitlines():
            print(f"    {line}")

        draw_tree(ax, tree, f"{name}\ninsert {keys}  (L={counts['left']}, R={counts['right']})")

    assert all(order == [2, 1, 3] for *_, order in results), "rotation produced wrong shape"

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_rotation_cases.png", dpi=150)
    plt.close(fig)

    return fig, results


# ---------------------------------------------------------------------------
# Example 3: Height growth
# ---------------------------------------------------------------------------
def example_3_height_growth():
    """Tree height for sorted and shuffled insertion against the AVL bound."""
    print("\n" + "=" * 60)
    print("Example 3: Height Growth vs. AVL Bound")
    print("=" * 60)

    np.random.seed(SEED)
    sorted_heights, shuffled_heights = [], []
    sorted_rotations, shuffled_rotations = [], []

    for n in GROWTH_SIZES:
        ordered = BalancedTree()
        for key in range(int(n)):
            ordered.insert(key)
        shuffled = BalancedTree()
        for key in np.random.permutation(int(n)):
            shuffled.insert(int(key))

        sorted_heights.append(ordered.height())
        shuffled_heights.append(shuffled.height())
        sorted_rotations.append(sum(ordered.rotation_counts().values()))
        shuffled_rotations.append(sum(shuffled.rotation_counts().values()))

    bound = avl_height_bound(GROWTH_SIZES)
    ideal = np.floor(np.log2(GROWTH_SIZES))

    print(f"\n  {'n':>6} {'sorted':>7} {'shuffled':>9} {'bound':>7}")
    for n, hs, hr, b in zip(GROWTH_SIZES, sorted_heights, shuffled_heights, bound):
        print(f"  {n:>6} {hs:>7} {hr:>9} {b:>7.2f}")

    assert np.all(np.array(sorted_heights) <= bound), "sorted insertion exceeded AVL bound"
    assert np.all(np.array(shuffled_heights) <= bound), "shuffled insertion exceeded AVL bound"

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    axes[0].plot(GROWTH_SIZES, sorted_heights, "o-", color=COLORS["blue"], label="Sorted insertion")
    axes[0].plot(GROWTH_SIZES, shuffled_heights, "s-", color=COLORS["orange"], label="Shuffled insertion")
    axes[0].plot(GROWTH_SIZES, bound, "--", color=COLORS["red"], label="AVL bound 1.44 log2(n+2) - 0.328")
    axes[0].plot(GROWTH_SIZES, ideal, ":", color=COLORS["green"], label="Perfect balance floor(log2 n)")
    axes[0].set_xscale("log")
    axes[0].set_xlabel("Number of keys (n)")
    axes[0].set_ylabel("Tree height (leaf = 0)")
    axes[0].set_title("Height stays logarithmic", fontsize=11, fontweight="bold")
    axes[0].legend(fontsize=8)
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(GROWTH_SIZES, np.array(sorted_rotations) / GROWTH_SIZES, "o-",
                 color=COLORS["blue"], label="Sorted insertion")
    axes[1].plot(GROWTH_SIZES, np.array(shuffled_rotations) / GROWTH_SIZES, "s-",
                 color=COLORS["orange"], label="Shuffled insertion")
    axes[1].set_xscale("log")
    axes[1].set_xlabel("Number of keys (n)")
    axes[1].set_ylabel("Single rotations per insert")
    axes[1].set_title("Rebalancing work is constant per insert", fontsize=11, fontweight="bold")
    axes[1].legend(fontsize=8)
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_height_growth.png", dpi=150)
    plt.close(fig)

    return fig, (sorted_heights, shuffled_heights)


def generate_pdf_report():
    """Bundle the saved visualizations behind a title page."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = Path(__file__).parent / "report.pdf"
    viz_files = sorted(VIZ_DIR.glob("*.png"))
    titles = {
        "01_scripted_session.png": "Example 1: Scripted Insertion Session",
        "02_rotation_cases.png": "Example 2: Rotation Cases",
        "03_height_growth.png": "Example 3: Height Growth vs. AVL Bound",
    }

    with PdfPages(pdf_path) as pdf:
        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.6, "Balanced Tree", fontsize=36, ha="center", fontweight="bold")
        fig.text(0.5, 0.5, "AVL Insertion, Rotations and Height", fontsize=24, ha="center")
        fig.text(0.5, 0.35, "Demonstration & Analysis Report", fontsize=18, ha="center", style="italic")
        fig.text(0.5, 0.2, f"Seed: {SEED}", fontsize=12, ha="center", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        for viz_file in viz_files:
            fig = plt.figure(figsize=(11, 8.5))
            title = titles.get(viz_file.name, viz_file.stem.replace("_", " ").title())
            fig.suptitle(title, fontsize=14, fontweight="bold", y=0.98)

            img = plt.imread(str(viz_file))
            ax = fig.add_axes([0.02, 0.02, 0.96, 0.92])
            ax.imshow(img)
            ax.axis("off")

            pdf.savefig(fig)
            plt.close(fig)

    print(f"  Report saved: report.pdf ({len(viz_files) + 1} pages)")


def main():
    print("Balanced Tree Demo")
    print("=" * 60)
    print(f"Seed: {SEED}")
    print()

    example_1_scripted_session()
    example_2_rotation_cases()
    example_3_height_growth()
    generate_pdf_report()

    print("\n" + "=" * 60)
    print("All examples completed successfully.")
    print(f"Visualizations: {VIZ_DIR}/")
    print(f"Report: {Path(__file__).parent / 'report.pdf'}")
    print("=" * 60)


if __name__ == "__main__":
    main()
