import typer
import pandas as pd
import matplotlib.pyplot as plt

from substring_packing.builder import Builder
from substring_packing.errors import SubStrError
from pack_tools.lookup import open_collection
from pack_tools.pack import read_strings

app = typer.Typer(help="Summarize packed collections and chart the savings.")

def collection_summary(substr):
    df = pd.DataFrame(substr.spans)
    lengths = df["length"].astype(int)
    naive = int(lengths.sum())
    df_stats = pd.DataFrame({
        "Strings": [len(substr)],
        "Storage Length": [substr.storage_len()],
        "Naive Length": [naive],
        "Min Length": [int(lengths.min())],
        "Max Length": [int(lengths.max())],
        "Mean Length": [round(float(lengths.mean()), 2)],
    })
    shared = int(df.duplicated(subset=["offset", "length"]).sum())

    summary_lines = []
    summary_lines.append("--------------------------------------------------")
    summary_lines.append("Collection Stats:")
    summary_lines.append(df_stats.to_string(index=False))
    summary_lines.append(f"\nIdentical spans: {shared}")
    if naive:
        summary_lines.append(f"Compression: {substr.storage_len() / naive:.3f} of naive storage")
    summary_lines.append("--------------------------------------------------\n")
    return "\n".join(summary_lines)

@app.command("summary")
def summary(file: str = typer.Argument(..., help="Packed collection JSON file.")):
    substr = open_collection(file)
    if substr.is_empty():
        typer.echo("Collection is empty.")
        raise typer.Exit(code=1)
    typer.echo(collection_summary(substr))

def placement_bytes(builder):
    placed = {"Contained": 0, "Chained": 0, "Loose": 0, "Chain heads": 0}
    chained = set(builder.chained)
    loose = set(builder.loose)
    for index, string in enumerate(builder.vec):
        if builder.contained_in[index] is not None:
            placed["Contained"] += len(string)
        elif index in chained:
            placed["Chained"] += len(string)
        elif index in loose:
            placed["Loose"] += len(string)
        else:
            placed["Chain heads"] += len(string)
    return placed

@app.command("chart")
def chart(
    file: str = typer.Argument(..., help="Text file with one string per line, or FASTA with --fasta."),
    fasta: bool = typer.Option(False, "--fasta", help="Read sequences from a FASTA file."),
    save: str = typer.Option(None, "--save", help="Save the chart as PNG instead of showing it."),
):
    try:
        builder = Builder(read_strings(file, fasta))
        builder.build_only()
    except SubStrError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)
    stats = builder.stats()
    placed = placement_bytes(builder)

    fig, (ax_total, ax_kind) = plt.subplots(1, 2, figsize=(10, 5))
    ax_total.bar(["Naive", "Packed"], [stats["naive_len"], stats["storage_len"]], color=["grey", "blue"], alpha=0.7)
    ax_total.set_title("Storage (bytes)")
    ax_kind.bar(list(placed.keys()), list(placed.values()), color="green", alpha=0.7)
    ax_kind.set_title("Input bytes by placement")
    fig.suptitle(f"{stats['strings']} strings, {stats['savings'] * 100:.1f}% saved")
    fig.tight_layout()

    if save:
        fig.savefig(save, dpi=300)
        typer.echo(f"Chart saved as: {save}")
    else:
        plt.show()
    plt.close(fig)

if __name__ == "__main__":
    app()
