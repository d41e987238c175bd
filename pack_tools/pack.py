import typer
from Bio import SeqIO
from pathlib import Path

from substring_packing import encoding
from substring_packing.builder import Builder
from substring_packing.errors import SubStrError

app = typer.Typer(help="Pack a collection of strings into one storage string.")

def read_strings(file_path, fasta=False):
    file_path = Path(file_path)
    if not file_path.exists():
        typer.echo(f"File '{file_path}' not found.")
        raise typer.Exit(code=1)
    if fasta:
        return [str(record.seq) for record in SeqIO.parse(str(file_path), "fasta")]
    try:
        with open(file_path, encoding="utf-8") as f:
            lines = f.read().split("\n")
    except UnicodeDecodeError:
        typer.echo(f"File '{file_path}' is not valid UTF-8 text.")
        raise typer.Exit(code=1)
    return [line for line in lines if line]

def summary_lines(stats):
    lines = []
    lines.append("--------------------------------------------------")
    lines.append(f"Strings: {stats['strings']}")
    lines.append(f"Naive length: {stats['naive_len']} bytes")
    lines.append(f"Storage length: {stats['storage_len']} bytes")
    lines.append(f"Contained: {stats['contained']}  Chained: {stats['chained']}  Loose: {stats['loose']}")
    lines.append(f"Savings: {stats['savings'] * 100:.1f}%")
    lines.append("--------------------------------------------------")
    return lines

@app.command("build")
def build(
    file: str = typer.Argument(..., help="Text file with one string per line, or FASTA with --fasta."),
    fasta: bool = typer.Option(False, "--fasta", help="Read sequences from a FASTA file."),
    output: str = typer.Option(None, "--output", "-o", help="Save the packed collection as JSON."),
    state: str = typer.Option(None, "--state", help="Save the builder working state as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show build progress."),
    verify: bool = typer.Option(True, "--verify/--no-verify", help="Check the result after building."),
):
    strings = read_strings(file, fasta)
    try:
        builder = Builder(strings)
        builder.debug_messages(verbose)
        builder.build_only()
        if verify and not builder.verify():
            typer.echo("Verification failed.")
            raise typer.Exit(code=1)
        stats = builder.stats()
        if state:
            encoding.save(state, builder)
        substr = builder.build()
        if output:
            encoding.save(output, substr)
    except SubStrError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    for line in summary_lines(stats):
        typer.echo(line)
    if output:
        typer.echo(f"Packed collection saved to: {output}")
    if state:
        typer.echo(f"Builder state saved to: {state}")

if __name__ == "__main__":
    app()
