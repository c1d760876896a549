from pathlib import Path

HAS_MPL = False
try:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    HAS_MPL = True
except Exception:
    HAS_MPL = False


def plot_risk_map(outdir: Path, name: str, temps_f, rhs, scores, title: str = "") -> Path | None:
    if not HAS_MPL:
        return None
    outdir.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(9, 6))
    mesh = ax.pcolormesh(temps_f, rhs, scores, cmap="RdYlGn", vmin=0, vmax=100, shading="nearest")
    fig.colorbar(mesh, ax=ax, label="score (100 = safest)")
    ax.set(xlabel="T, °F", ylabel="RH, %", title=title or name)
    fig.tight_layout()
    path = outdir / f"{name}.png"
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path
