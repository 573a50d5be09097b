from envscan.cli import app

app()
