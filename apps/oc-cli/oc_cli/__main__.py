from oc_cli.cli import app

app(prog_name="oc")
