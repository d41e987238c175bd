import typer

from substring_packing import encoding
from substring_packing.errors import SubStrError
from pack_tools.pack import read_strings

app = typer.Typer(help="Look up strings in a packed collection file.")

def open_collection(file):
    try:
        return encoding.load_substr(file)
    except SubStrError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

@app.command("get")
def get(
    file: str = typer.Argument(..., help="Packed collection JSON file."),
    index: int = typer.Argument(..., help="Id of the string."),
):
    substr = open_collection(file)
    value = substr.get(index)
    if value is None:
        typer.echo(f"Id {index} out of range (collection has {len(substr)} strings).")
        raise typer.Exit(code=1)
    typer.echo(value)

@app.command("context")
def context(
    file: str = typer.Argument(..., help="Packed collection JSON file."),
    index: int = typer.Argument(..., help="Id of the string."),
    width: int = typer.Option(10, "--width", "-w", help="Bytes of context on each side."),
):
    substr = open_collection(file)
    if substr.span(index) is None:
        typer.echo(f"Id {index} out of range (collection has {len(substr)} strings).")
        raise typer.Exit(code=1)
    offset, length = substr.span(index)
    typer.echo(f"[{index}] offset: {offset} len: {length}")
    typer.echo(f"...{substr.before(index, width)}({substr.get(index)}){substr.after(index, width)}...")

@app.command("list")
def list_strings(
    file: str = typer.Argument(..., help="Packed collection JSON file."),
    limit: int = typer.Option(None, "--limit", "-n", help="Only show the first N strings."),
):
    substr = open_collection(file)
    for index, value in enumerate(substr):
        if limit is not None and index >= limit:
            break
        offset, length = substr.span(index)
        typer.echo(f"{index}\t{offset}\t{length}\t{value}")

@app.command("verify")
def verify(
    file: str = typer.Argument(..., help="Packed collection JSON file."),
    source: str = typer.Argument(..., help="The input the collection was built from."),
    fasta: bool = typer.Option(False, "--fasta", help="Read sequences from a FASTA file."),
):
    substr = open_collection(file)
    if not substr.verify(read_strings(source, fasta)):
        typer.echo("Collection does not match the input.")
        raise typer.Exit(code=1)
    typer.echo(f"OK: {len(substr)} strings match.")

if __name__ == "__main__":
    app()
