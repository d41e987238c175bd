import typer
from pack_tools import lookup, pack, report

app = typer.Typer(help="Pack overlapping strings into one compact storage string, then inspect the result.")

app.add_typer(pack.app, name="pack", help="Build packed collections from text or FASTA files")
app.add_typer(lookup.app, name="lookup", help="Look up strings and their context")
app.add_typer(report.app, name="report", help="Summarize and chart packed collections")

if __name__ == "__main__":
    app()
