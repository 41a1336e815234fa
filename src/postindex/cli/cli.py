"""CLI entrypoint: Typer app definition and command registration"""

import typer

from postindex.cli.commands import check_cmd, index_cmd, show_cmd


app = typer.Typer(name="postindex", no_args_is_help=True, help="Validate and index Jekyll post front matter")

app.command(name="check")(check_cmd)
app.command(name="index")(index_cmd)
app.command(name="show")(show_cmd)
